"""
bitsetium/complement.py
═══════════════════════

``Complement(x)`` holds every index that is NOT set in ``x``.

Duality (holds for every representable index ``i``)::

    Complement(x).test(i) == not x.test(i)

so the wrapper swaps set/unset, swaps the two bounds, swaps test_none with
test_all and searches the inner value for unset bits.

Rewrite rules owned by this class::

    Complement(a).complement()        → a
    Complement(a).union(b)            → Complement(a.difference(b))
    Complement(a).intersection(b)     → b.difference(a)
    Complement(a).difference(b)       → Complement(a.union(b))
    Complement(a).is_disjoint(b)      ⟺ b.is_subset_of(a)
"""

from __future__ import annotations

from typing import Any, Optional

from bitsetium.errors import UnsupportedOperationError
from bitsetium.ops import BitSetOps
from bitsetium.search import MAX_INDEX


class Complement(BitSetOps):
    """Lazy set complement of one inner value."""

    __slots__ = ("_inner",)

    def __init__(self, inner: Any) -> None:
        self._inner = inner

    @classmethod
    def empty(cls, inner_type: Any) -> Complement:
        """
        Complement with no bit set.

        Only an inner type that can set every index up to ``MAX_INDEX`` has
        such a complement; for a bounded inner type every index past its
        capacity stays set, so ``UnsupportedOperationError`` is raised.
        """
        if inner_type.MAX_SET_INDEX < MAX_INDEX:
            raise UnsupportedOperationError(
                f"the complement of {inner_type.__name__} is never empty: "
                f"indices past {inner_type.MAX_SET_INDEX} are always set")
        return cls(inner_type.full())

    @classmethod
    def full(cls, inner_type: Any) -> Complement:
        return cls(inner_type.empty())

    @property
    def inner(self) -> Any:
        return self._inner

    def into_inner(self) -> Any:
        return self._inner

    def double_complement_unwrap(self) -> Any:
        """
        Unwrap ``Complement(Complement(a))`` to ``a`` itself.

        The result is the very object that was wrapped, not an equivalent
        rebuild; it tests identically to ``self`` for every index.
        """
        if not isinstance(self._inner, Complement):
            raise UnsupportedOperationError(
                f"{self} is not a double complement")
        return self._inner.inner

    # ---- Bounds -----------------------------------------------------------

    @property
    def MAX_SET_INDEX(self) -> int:  # type: ignore[override]
        return self._inner.MAX_UNSET_INDEX

    @property
    def MAX_UNSET_INDEX(self) -> int:  # type: ignore[override]
        return self._inner.MAX_SET_INDEX

    @property
    def SUPPORTS_SET(self) -> bool:  # type: ignore[override]
        return self._inner.SUPPORTS_UNSET

    @property
    def SUPPORTS_UNSET(self) -> bool:  # type: ignore[override]
        return self._inner.SUPPORTS_SET

    # ---- Queries ----------------------------------------------------------

    def test(self, idx: int) -> bool:
        if idx < 0:
            return False
        return not self._inner.test(idx)

    def test_none(self) -> bool:
        return self._inner.test_all()

    def test_all(self) -> bool:
        return self._inner.test_none()

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        return self._inner.find_first_unset(lower_bound)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        return self._inner.find_first_set(lower_bound)

    # ---- Mutation ---------------------------------------------------------

    def set_unchecked(self, idx: int) -> None:
        self._require_mutation("set")
        self._inner.unset_unchecked(idx)

    def unset_unchecked(self, idx: int) -> None:
        self._require_mutation("unset")
        self._inner.set_unchecked(idx)

    # ---- Algebra ----------------------------------------------------------

    def complement(self) -> Any:
        return self._inner

    def union(self, other: Any) -> Any:
        return Complement(self._inner.difference(other))

    def intersection(self, other: Any) -> Any:
        return other.difference(self._inner)

    def difference(self, other: Any) -> Any:
        return Complement(self._inner.union(other))

    def is_disjoint(self, other: Any) -> bool:
        return other.is_subset_of(self._inner)

    def is_subset_of(self, other: Any) -> bool:
        if isinstance(other, Complement):
            return other.inner.is_subset_of(self._inner)
        return super().is_subset_of(other)

    def __str__(self) -> str:
        return f"Complement({self._inner})"
