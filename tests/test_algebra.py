# tests/test_algebra.py
"""
Tests for the lazy set-algebra wrappers: Complement, Union, Intersection
and Difference, their rewrite rules and their mutation routing.
"""

import itertools

import pytest

from bitsetium import ops
from bitsetium.capacities import Bits256, Bits67108864
from bitsetium.complement import Complement
from bitsetium.difference import Difference
from bitsetium.errors import IndexOutOfBoundsError, UnsupportedOperationError
from bitsetium.intersection import Intersection
from bitsetium.layered import layered_type
from bitsetium.ops import BitSetLike
from bitsetium.primitive import Bits8, Bits16
from bitsetium.search import MAX_INDEX, check_search_contract
from bitsetium.union import Union
from tests.conftest import assert_search_agrees, build, naive_set

# indices past every bounded operand, so complements are exercised too
UPPER = 300


def _pool():
    a = build(Bits256, [1, 3, 40, 200])
    b = build(Bits256, [2, 3, 200, 201])
    c = build(Bits8, [0, 3, 7])
    return {
        "a": a,
        "b": b,
        "c": c,
        "~a": a.complement(),
        "~c": c.complement(),
        "a|b": Union(a, b),
        "a&b": Intersection(a, b),
        "a-b": Difference(a, b),
    }


def _same(x, y):
    return all(x.test(i) == y.test(i) for i in range(UPPER))


# ── Scenarios ────────────────────────────────────────────────────

class TestScenarios:

    def test_union_search(self):
        """Union({1,3}, {2,3}) searches to 1 and tests 3 but not 4."""
        u = Union(build(Bits256, [1, 3]), build(Bits256, [2, 3]))
        assert u.find_first_set(0) == 1
        assert u.test(3)
        assert not u.test(4)

    def test_difference_of_complement_is_intersection(self):
        a = build(Bits256, [1, 2, 5])
        b = build(Bits256, [2, 5, 9])
        result = a.difference(Complement(b))
        assert isinstance(result, Intersection)
        assert result.left is a
        assert result.right is b
        assert list(result) == [2, 5]

    def test_difference_of_complement_for_leaves_is_eager(self):
        a = build(Bits8, [1, 2, 5])
        b = build(Bits8, [2, 5, 7])
        assert a.difference(~b) == build(Bits8, [2, 5])


# ── Complement ───────────────────────────────────────────────────

class TestComplement:

    def test_duality(self):
        a = build(Bits8, [1, 6])
        comp = a.complement()
        for i in range(20):
            assert comp.test(i) == (not a.test(i))
        assert not comp.test(-1)

    def test_bounds_swap(self):
        comp = Bits8.empty().complement()
        assert comp.MAX_SET_INDEX == MAX_INDEX
        assert comp.MAX_UNSET_INDEX == 7

    def test_double_complement_is_identity(self):
        a = build(Bits256, [4])
        assert (~~a) is a

    def test_double_complement_unwrap(self):
        a = build(Bits8, [4])
        assert Complement(Complement(a)).double_complement_unwrap() is a

    def test_unwrap_requires_double_complement(self):
        with pytest.raises(UnsupportedOperationError):
            Complement(Bits8.empty()).double_complement_unwrap()

    def test_full(self):
        full = Complement.full(Bits8)
        assert all(full.test(i) for i in range(UPPER))
        assert full.test_all()

    def test_empty_rejects_bounded_inner(self):
        # every index past the inner capacity stays set in the complement
        with pytest.raises(UnsupportedOperationError):
            Complement.empty(Bits8)
        with pytest.raises(UnsupportedOperationError):
            Complement.empty(Bits256)

    def test_test_none_is_truthful(self):
        assert not Complement(Bits8.full()).test_none()
        assert Complement(Bits8.full()).find_first_set(0) == 8

    def test_search(self):
        comp = build(Bits8, [0, 1, 3]).complement()
        assert comp.find_first_set(0) == 2
        assert comp.find_first_set(3) == 4
        assert comp.find_first_unset(2) == 3
        assert_search_agrees(comp, 40)

    def test_into_inner(self):
        a = Bits8.empty()
        assert Complement(a).into_inner() is a
        assert str(Complement(build(Bits8, [0]))) == "Complement(0b00000001)"


# ── Rewrite rules ────────────────────────────────────────────────

class TestRewriteRules:

    @pytest.fixture
    def a(self):
        return build(Bits256, [1, 3, 5])

    @pytest.fixture
    def b(self):
        return build(Bits256, [3, 4])

    @pytest.fixture
    def c(self):
        return build(Bits256, [5, 7])

    def test_union_with_complement(self, a, b):
        result = a.union(~b)
        assert isinstance(result, Complement)
        assert isinstance(result.inner, Difference)
        assert result.inner.left is b
        assert result.inner.right is a

    def test_intersection_with_complement(self, a, b):
        result = a.intersection(~b)
        assert isinstance(result, Difference)
        assert (result.left, result.right) == (a, b)

    def test_complement_union(self, a, b):
        result = (~a).union(b)
        assert isinstance(result, Complement)
        assert isinstance(result.inner, Difference)

    def test_complement_intersection(self, a, b):
        result = (~a).intersection(b)
        assert isinstance(result, Difference)
        assert result.left is b
        assert result.right is a

    def test_complement_difference(self, a, b):
        result = (~a).difference(b)
        assert isinstance(result, Complement)
        assert isinstance(result.inner, Union)

    def test_complement_of_union(self, a, b):
        result = Union(a, b).complement()
        assert isinstance(result, Intersection)
        assert isinstance(result.left, Complement)
        assert isinstance(result.right, Complement)

    def test_complement_of_intersection(self, a, b):
        result = Intersection(a, b).complement()
        assert isinstance(result, Union)
        assert result.left.inner is a

    def test_complement_of_difference(self, a, b):
        result = Difference(a, b).complement()
        assert isinstance(result, Union)
        assert isinstance(result.left, Complement)
        assert result.right is b

    def test_union_distributes_into_left(self, a, b, c):
        result = Union(a, b).union(c)
        assert isinstance(result, Union)
        assert isinstance(result.left, Union)
        assert result.right is b

    def test_union_intersection_distributes(self, a, b, c):
        result = Union(a, b).intersection(c)
        assert isinstance(result, Union)
        assert isinstance(result.left, Intersection)
        assert isinstance(result.right, Intersection)

    def test_intersection_narrows_left(self, a, b, c):
        result = Intersection(a, b).intersection(c)
        assert isinstance(result, Intersection)
        assert isinstance(result.left, Intersection)
        assert result.right is b

    def test_intersection_union_distributes(self, a, b, c):
        result = Intersection(a, b).union(c)
        assert isinstance(result, Intersection)
        assert isinstance(result.left, Union)
        assert isinstance(result.right, Union)

    def test_difference_union_stacks(self, a, b, c):
        diff = Difference(a, b)
        result = diff.union(c)
        assert isinstance(result, Union)
        assert result.left is diff
        assert result.right is c

    def test_difference_narrows_left(self, a, b, c):
        result = Difference(a, b).intersection(c)
        assert isinstance(result, Difference)
        assert isinstance(result.left, Intersection)
        assert result.right is b
        assert list(result) == [5]

    def test_rewrites_preserve_meaning(self, a, b, c):
        cases = [
            (a.union(~b), lambda i: a.test(i) or not b.test(i)),
            ((~a).intersection(b), lambda i: b.test(i) and not a.test(i)),
            ((~a).difference(b), lambda i: not a.test(i) and not b.test(i)),
            (Union(a, b).intersection(c), lambda i: (a.test(i) or b.test(i)) and c.test(i)),
            (Intersection(a, b).union(c), lambda i: (a.test(i) and b.test(i)) or c.test(i)),
            (Difference(a, b).difference(c), lambda i: a.test(i) and not b.test(i) and not c.test(i)),
        ]
        for value, expected in cases:
            for i in range(UPPER):
                assert value.test(i) == expected(i), (value, i)


# ── Algebraic properties over a pool ─────────────────────────────

class TestProperties:

    @pytest.mark.parametrize("name", sorted(_pool()))
    def test_double_complement(self, name):
        x = _pool()[name]
        assert _same(x.complement().complement(), x)

    @pytest.mark.parametrize("pair", list(itertools.product(sorted(_pool()), repeat=2)))
    def test_de_morgan(self, pair):
        pool = _pool()
        x, y = pool[pair[0]], pool[pair[1]]
        assert _same(x.union(y).complement(), (~x).intersection(~y))
        assert _same(x.intersection(y).complement(), (~x).union(~y))

    @pytest.mark.parametrize("pair", list(itertools.product(sorted(_pool()), repeat=2)))
    def test_operations_match_pointwise(self, pair):
        pool = _pool()
        x, y = pool[pair[0]], pool[pair[1]]
        for i in range(UPPER):
            assert x.union(y).test(i) == (x.test(i) or y.test(i))
            assert x.intersection(y).test(i) == (x.test(i) and y.test(i))
            assert x.difference(y).test(i) == (x.test(i) and not y.test(i))

    @pytest.mark.parametrize("pair", list(itertools.product(sorted(_pool()), repeat=2)))
    def test_subset_and_disjoint_consistency(self, pair):
        pool = _pool()
        x, y = pool[pair[0]], pool[pair[1]]
        subset = all(y.test(i) for i in range(UPPER) if x.test(i))
        disjoint = not any(x.test(i) and y.test(i) for i in range(UPPER))
        assert x.is_subset_of(y) == subset
        assert x.is_disjoint(y) == disjoint
        assert x.difference(y).test_none() == subset
        assert x.intersection(y).test_none() == disjoint

    @pytest.mark.parametrize("pair", list(itertools.product(sorted(_pool()), repeat=2)))
    def test_search_contract(self, pair):
        pool = _pool()
        x, y = pool[pair[0]], pool[pair[1]]
        for value in (x.union(y), x.intersection(y), x.difference(y)):
            for lb in (0, 2, 3, 6, 199, 201, 255, 256):
                assert check_search_contract(value, lb, UPPER) is None


# ── Predicates ───────────────────────────────────────────────────

class TestPredicates:

    def test_union_test_all(self):
        a = build(Bits256, [1])
        assert Union(a, ~a).test_all()
        assert not Union(a, a).test_all()

    def test_difference_of_self_is_empty(self):
        a = build(Bits256, [1, 9])
        assert Difference(a, a).test_none()
        assert not Difference(a, Bits256.empty()).test_none()

    def test_intersection_test_none(self):
        assert Intersection(build(Bits256, [1]), build(Bits256, [2])).test_none()
        assert not Intersection(build(Bits256, [2]), build(Bits256, [2])).test_none()

    def test_complement_subset(self):
        a = build(Bits8, [1])
        b = build(Bits8, [1, 2])
        assert (~b).is_subset_of(~a)
        assert not (~a).is_subset_of(~b)
        assert a.is_subset_of(~build(Bits8, [3]))
        assert (~a).is_disjoint(a)


# ── Mutation through wrappers ────────────────────────────────────

class TestMutation:

    def test_complement_set_unsets_inner(self):
        a = build(Bits8, [1, 2])
        comp = ~a
        comp.set(1)
        assert not a.test(1)
        comp.unset(5)
        assert a.test(5)
        assert not comp.test(5)

    def test_complement_unset_bound(self):
        comp = ~Bits8.empty()
        with pytest.raises(IndexOutOfBoundsError):
            comp.unset(8)

    def test_union_set_routing(self):
        left = Bits8.empty()
        right = Bits16.empty()
        u = Union(left, right)
        u.set(3)
        u.set(12)
        assert list(left) == [3]
        assert list(right) == [12]
        with pytest.raises(IndexOutOfBoundsError):
            u.set(16)

    def test_union_unset_clears_both(self):
        left = build(Bits8, [3])
        right = build(Bits16, [3])
        u = Union(left, right)
        u.unset(3)
        assert not u.test(3)
        assert left.test_none() and right.test_none()

    def test_intersection_set_sets_both(self):
        left = Bits8.empty()
        right = Bits16.empty()
        i = Intersection(left, right)
        assert i.MAX_SET_INDEX == 7
        i.set(5)
        assert i.test(5)
        assert left.test(5) and right.test(5)
        i.unset(5)
        assert not i.test(5)

    def test_difference_set_and_unset(self):
        left = Bits8.empty()
        right = build(Bits8, [4])
        d = Difference(left, right)
        d.set(4)
        assert d.test(4)
        assert not right.test(4)
        d.unset(4)
        assert not d.test(4)

    def test_wrapper_copy_is_deep(self):
        left = build(Bits8, [1])
        u = Union(left, Bits16.empty())
        clone = u.copy()
        clone.set(2)
        assert list(u) == [1]
        assert list(clone) == [1, 2]

    def test_swap_sets(self):
        a, b = build(Bits8, [1]), build(Bits16, [9])
        swapped = Union(a, b).swap_sets()
        assert swapped.left is b and swapped.right is a
        assert list(Intersection(a, b).swap_sets()) == []


# ── Mutation capability ──────────────────────────────────────────

NoUnset8 = type("NoUnset8", (Bits8,), {"__slots__": (), "SUPPORTS_UNSET": False})
Plain64 = layered_type(Bits8, Bits8, 8, "Plain64")
NoUnset64 = layered_type(Bits8, NoUnset8, 8, "NoUnset64")


class TestMutationCapability:
    """A write an operand cannot take is refused before any operand changes."""

    def test_capabilities_propagate(self):
        assert not Difference(Plain64.empty(), NoUnset64.empty()).SUPPORTS_SET
        assert Difference(Plain64.empty(), NoUnset64.empty()).SUPPORTS_UNSET
        assert not Difference(NoUnset64.empty(), Plain64.empty()).SUPPORTS_UNSET
        assert Union(Plain64.empty(), NoUnset64.empty()).SUPPORTS_SET
        assert not Union(Plain64.empty(), NoUnset64.empty()).SUPPORTS_UNSET
        assert not Intersection(Plain64.empty(), NoUnset64.empty()).SUPPORTS_UNSET
        comp = Complement(NoUnset64.empty())
        assert not comp.SUPPORTS_SET
        assert comp.SUPPORTS_UNSET

    def test_difference_set_leaves_left_untouched(self):
        left = Plain64.empty()
        right = build(NoUnset64, [12])
        d = Difference(left, right)
        with pytest.raises(UnsupportedOperationError):
            d.set(12)
        with pytest.raises(UnsupportedOperationError):
            d.set_unchecked(12)
        assert left.test_none()
        assert left.top.test_none()
        assert right.test(12)
        assert not d.test(12)

    def test_union_unset_leaves_both_untouched(self):
        left = build(Plain64, [12])
        right = build(NoUnset64, [12])
        u = Union(left, right)
        with pytest.raises(UnsupportedOperationError):
            u.unset(12)
        assert left.test(12)
        assert right.test(12)
        assert u.test(12)

    def test_intersection_set_through_complement(self):
        left = Plain64.empty()
        i = Intersection(left, Complement(build(NoUnset64, [5])))
        with pytest.raises(UnsupportedOperationError):
            i.set(5)
        assert left.test_none()

    def test_supported_writes_still_apply(self):
        left = Plain64.empty()
        right = build(NoUnset64, [12])
        u = Union(left, right)
        u.set(3)
        assert list(left) == [3]
        assert list(u) == [3, 12]


# ── Functional interface and operators ───────────────────────────

class TestInterface:

    def test_protocol(self):
        for value in _pool().values():
            assert isinstance(value, BitSetLike)

    def test_construction_allocates_nothing(self):
        a = Bits67108864.empty()
        b = Bits67108864.empty()
        for wrapper, combined in [(Union, a.union(b)),
                                  (Intersection, a.intersection(b)),
                                  (Difference, a.difference(b))]:
            assert isinstance(combined, wrapper)
            assert combined.left is a and combined.right is b
        assert a.union(b).test_none()
        for value in (a, b):
            assert value.segments_in_use() == []
            assert not any(value.segment(t).is_allocated for t in range(value.COUNT))

    def test_functional_forms(self):
        a = build(Bits256, [1, 2])
        b = build(Bits256, [2, 3])
        assert list(ops.union(a, b)) == [1, 2, 3]
        assert list(ops.intersection(a, b)) == [2]
        assert list(ops.difference(a, b)) == [1]
        assert ops.complement(a).test(0)
        assert ops.is_subset_of(ops.intersection(a, b), a)
        assert ops.is_disjoint(ops.difference(a, b), b)

    def test_operators(self):
        a = build(Bits256, [1, 2])
        b = build(Bits256, [2, 3])
        assert list(a | b) == [1, 2, 3]
        assert list(a & b) == [2]
        assert list(a - b) == [1]
        assert (~a).test(0)

    def test_str(self):
        a = build(Bits8, [0])
        b = build(Bits16, [1])
        assert str(Union(a, b)).startswith("Union(0b00000001, ")
        assert str(Difference(a, b)).startswith("Difference(")
        assert naive_set(Union(a, b), 20) == [0, 1]
