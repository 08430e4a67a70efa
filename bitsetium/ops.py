"""
bitsetium/ops.py
════════════════

The capability contract every bitset-like value satisfies, and the base
class that supplies checked mutation, the generic algebra dispatch and the
Python operator protocol.

    ┌───────────────────────────────────────────────────────────────────┐
    │  BitSetLike (Protocol)                                            │
    │    BitSetOps (base class)                                         │
    │      ├── Word / WordArray          leaves        primitive.py     │
    │      ├── OptionalSlot              adapter       option.py        │
    │      ├── Layered                   hierarchy     layered.py       │
    │      └── Complement / Union /      lazy algebra  complement.py …  │
    │          Intersection / Difference                                │
    └───────────────────────────────────────────────────────────────────┘

Bounds
------
``MAX_SET_INDEX`` is the largest index that may be set; any larger index
always tests false.  ``MAX_UNSET_INDEX`` is the largest index that may be
unset; any larger index always tests true.  Static types (leaves, layered
types, optional slots) carry them as class attributes; composites compute
them from their operands as instance properties.  Unbounded types report
``MAX_INDEX`` (``sys.maxsize``).

Checked vs unchecked
--------------------
``set``/``unset`` validate the index and raise ``IndexOutOfBoundsError``.
``set_unchecked``/``unset_unchecked`` skip validation.  Their precondition
is ``0 <= idx <= bound``; violating it gives a defined but unspecified
result (usually a no-op), never corrupted memory.

Rewrite rules owned by the base class
-------------------------------------
For a leaf or layered left operand ``a``:

    a.union(Complement(b))         → Complement(b.difference(a))
    a.intersection(Complement(b))  → a.difference(b)
    a.difference(Complement(b))    → a.intersection(b)

Two leaves of the same concrete type combine eagerly; everything else
becomes a lazy wrapper.  The wrappers override these methods with their
own distribution rules.
"""

from __future__ import annotations

import copy
from typing import (
    Any,
    ClassVar,
    Iterable,
    Iterator,
    Optional,
    Protocol,
    runtime_checkable,
)

from bitsetium.errors import IndexOutOfBoundsError, UnsupportedOperationError
from bitsetium.search import (
    MAX_INDEX,
    difference_first_set,
    find_set_in_range,
    intersection_first_set,
    iter_set,
    linear_first,
)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — CAPABILITY PROTOCOL
# ═══════════════════════════════════════════════════════════════════════════

@runtime_checkable
class BitSetLike(Protocol):
    """
    Protocol that every value taking part in composition or layering must
    satisfy.  Consumed by the algebra wrappers, ``Layered`` and the
    set-expression evaluator.
    """

    def test(self, idx: int) -> bool:
        """Is bit ``idx`` set?  False outside the representable range."""
        ...

    def test_none(self) -> bool:
        """Are no bits set?"""
        ...

    def test_all(self) -> bool:
        """Is every representable bit set?"""
        ...

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        ...

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        ...

    def complement(self) -> Any:
        ...

    def union(self, other: Any) -> Any:
        ...

    def intersection(self, other: Any) -> Any:
        ...

    def difference(self, other: Any) -> Any:
        ...


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — BASE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class BitSetOps:
    """
    Shared behaviour of all bitsets.

    Subclasses provide ``test``, the bounds, ``set_unchecked`` /
    ``unset_unchecked`` where mutation is coherent, and ideally
    accelerated searches.  Everything else has a correct default here.
    ``SUPPORTS_SET`` / ``SUPPORTS_UNSET`` say whether a write can complete.
    """

    __slots__ = ()

    MAX_SET_INDEX: ClassVar[int]
    MAX_UNSET_INDEX: ClassVar[int]
    SUPPORTS_SET: ClassVar[bool] = True
    SUPPORTS_UNSET: ClassVar[bool] = True

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Any:
        """Empty value of this type with every index in ``indices`` set."""
        bits = cls.empty()  # type: ignore[attr-defined]
        for idx in indices:
            bits.set(idx)
        return bits

    # ---- Queries ----------------------------------------------------------

    def test(self, idx: int) -> bool:
        raise NotImplementedError

    def test_none(self) -> bool:
        return self.find_first_set(0) is None

    def test_all(self) -> bool:
        return self.find_first_unset(0) is None

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        if lower_bound > self.MAX_SET_INDEX:
            return None
        return linear_first(self, lower_bound, self.MAX_SET_INDEX, True)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > MAX_INDEX:
            return None
        if lower_bound > self.MAX_SET_INDEX:
            return lower_bound
        found = linear_first(self, lower_bound, self.MAX_SET_INDEX, False)
        if found is None and self.MAX_SET_INDEX < MAX_INDEX:
            return self.MAX_SET_INDEX + 1
        return found

    def find_set_in_range(self, start: int = 0,
                          stop: Optional[int] = None) -> Optional[int]:
        """First set index in ``[start, stop)``."""
        return find_set_in_range(self, start, stop)

    # ---- Mutation ---------------------------------------------------------

    def set(self, idx: int) -> None:
        """Set bit ``idx``; raises ``IndexOutOfBoundsError`` past the bound."""
        bound = self.MAX_SET_INDEX
        if idx < 0 or idx > bound:
            raise IndexOutOfBoundsError(idx, bound, "set")
        self.set_unchecked(idx)

    def unset(self, idx: int) -> None:
        """Unset bit ``idx``; raises ``IndexOutOfBoundsError`` past the bound."""
        bound = self.MAX_UNSET_INDEX
        if idx < 0 or idx > bound:
            raise IndexOutOfBoundsError(idx, bound, "unset")
        self.unset_unchecked(idx)

    def set_unchecked(self, idx: int) -> None:
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support setting bits")

    def unset_unchecked(self, idx: int) -> None:
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support unsetting bits")

    def _require_mutation(self, operation: str) -> None:
        """Raise before any operand is touched when ``operation`` cannot
        complete on every branch it would write to."""
        supported = self.SUPPORTS_SET if operation == "set" else self.SUPPORTS_UNSET
        if not supported:
            raise UnsupportedOperationError(
                f"{type(self).__name__} cannot {operation} bits: "
                f"an operand does not support it")

    # ---- Algebra ----------------------------------------------------------

    def _eager(self, other: Any, kind: str) -> Any:
        """Eagerly combined value, or None when no cheap path exists."""
        return None

    def complement(self) -> Any:
        from bitsetium.complement import Complement
        return Complement(self)

    def union(self, other: Any) -> Any:
        from bitsetium.complement import Complement
        from bitsetium.union import Union
        if isinstance(other, Complement):
            return Complement(other.inner.difference(self))
        eager = self._eager(other, "union")
        return eager if eager is not None else Union(self, other)

    def intersection(self, other: Any) -> Any:
        from bitsetium.complement import Complement
        from bitsetium.intersection import Intersection
        if isinstance(other, Complement):
            return self.difference(other.inner)
        eager = self._eager(other, "intersection")
        return eager if eager is not None else Intersection(self, other)

    def difference(self, other: Any) -> Any:
        from bitsetium.complement import Complement
        from bitsetium.difference import Difference
        if isinstance(other, Complement):
            return self.intersection(other.inner)
        eager = self._eager(other, "difference")
        return eager if eager is not None else Difference(self, other)

    def is_subset_of(self, other: Any) -> bool:
        """Every bit set here is set in ``other``."""
        from bitsetium.complement import Complement
        if isinstance(other, Complement):
            return self.is_disjoint(other.inner)
        eager = self._eager(other, "subset")
        if eager is not None:
            return eager
        return difference_first_set(self, other, 0) is None

    def is_disjoint(self, other: Any) -> bool:
        """No bit is set in both this value and ``other``."""
        from bitsetium.complement import Complement
        if isinstance(other, Complement):
            return self.is_subset_of(other.inner)
        eager = self._eager(other, "disjoint")
        if eager is not None:
            return eager
        return intersection_first_set(self, other, 0) is None

    # ---- Python protocol --------------------------------------------------

    def copy(self) -> Any:
        """Independent deep copy; composites copy their operands too."""
        return copy.deepcopy(self)

    def __contains__(self, idx: object) -> bool:
        return isinstance(idx, int) and self.test(idx)

    def __iter__(self) -> Iterator[int]:
        return iter_set(self)

    def __bool__(self) -> bool:
        return not self.test_none()

    def __invert__(self) -> Any:
        return self.complement()

    def __or__(self, other: Any) -> Any:
        return self.union(other)

    def __and__(self, other: Any) -> Any:
        return self.intersection(other)

    def __sub__(self, other: Any) -> Any:
        return self.difference(other)

    def __le__(self, other: Any) -> bool:
        return self.is_subset_of(other)

    def __ge__(self, other: Any) -> bool:
        return other.is_subset_of(self)

    def __repr__(self) -> str:
        return str(self)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — FUNCTIONAL INTERFACE
# ═══════════════════════════════════════════════════════════════════════════

def complement(bits: Any) -> Any:
    """Every index not set in ``bits``."""
    return bits.complement()


def union(left: Any, right: Any) -> Any:
    return left.union(right)


def intersection(left: Any, right: Any) -> Any:
    return left.intersection(right)


def difference(left: Any, right: Any) -> Any:
    """``left`` minus ``right``."""
    return left.difference(right)


def is_subset_of(left: Any, right: Any) -> bool:
    return left.is_subset_of(right)


def is_disjoint(left: Any, right: Any) -> bool:
    return left.is_disjoint(right)


__all__ = [
    "MAX_INDEX",
    "BitSetLike",
    "BitSetOps",
    "complement",
    "union",
    "intersection",
    "difference",
    "is_subset_of",
    "is_disjoint",
]
