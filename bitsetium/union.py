"""
bitsetium/union.py
══════════════════

``Union(a, b)``: an index is set when it is set in either operand.

Rewrite rules owned by this class::

    Union(a, b).union(y)         → Union(a.union(y), b)
    Union(a, b).intersection(y)  → Union(a.intersection(y), b.intersection(y))
    Union(a, b).difference(y)    → Union(a.difference(y), b.difference(y))
    Union(a, b).complement()     → Intersection(~a, ~b)

Distributing into the branches (instead of stacking another wrapper on
top) keeps the depth of an expression bounded by the number of distinct
leaves it combines.
"""

from __future__ import annotations

from typing import Any, Optional

from bitsetium.ops import BitSetOps
from bitsetium.search import intersection_first_unset, union_first_set


class Union(BitSetOps):
    """Lazy union of two operands."""

    __slots__ = ("left", "right")

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right

    @classmethod
    def empty(cls, left_type: Any, right_type: Any) -> Union:
        return cls(left_type.empty(), right_type.empty())

    @classmethod
    def full(cls, left_type: Any, right_type: Any) -> Union:
        return cls(left_type.full(), right_type.empty())

    def swap_sets(self) -> Union:
        """Same set with the operands exchanged."""
        return Union(self.right, self.left)

    @property
    def MAX_SET_INDEX(self) -> int:  # type: ignore[override]
        return max(self.left.MAX_SET_INDEX, self.right.MAX_SET_INDEX)

    @property
    def MAX_UNSET_INDEX(self) -> int:  # type: ignore[override]
        return min(self.left.MAX_UNSET_INDEX, self.right.MAX_UNSET_INDEX)

    @property
    def SUPPORTS_SET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_SET and self.right.SUPPORTS_SET

    @property
    def SUPPORTS_UNSET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_UNSET and self.right.SUPPORTS_UNSET

    def test(self, idx: int) -> bool:
        return self.left.test(idx) or self.right.test(idx)

    def test_none(self) -> bool:
        return self.left.test_none() and self.right.test_none()

    def test_all(self) -> bool:
        if self.left.test_all() or self.right.test_all():
            return True
        return self.find_first_unset(0) is None

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        return union_first_set(self.left, self.right, lower_bound)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        return intersection_first_unset(self.left, self.right, lower_bound)

    def set_unchecked(self, idx: int) -> None:
        self._require_mutation("set")
        if idx <= self.left.MAX_SET_INDEX:
            self.left.set_unchecked(idx)
        else:
            self.right.set_unchecked(idx)

    def unset_unchecked(self, idx: int) -> None:
        self._require_mutation("unset")
        self.left.unset_unchecked(idx)
        self.right.unset_unchecked(idx)

    def complement(self) -> Any:
        from bitsetium.intersection import Intersection
        return Intersection(self.left.complement(), self.right.complement())

    def union(self, other: Any) -> Any:
        return Union(self.left.union(other), self.right)

    def intersection(self, other: Any) -> Any:
        return Union(self.left.intersection(other), self.right.intersection(other))

    def difference(self, other: Any) -> Any:
        return Union(self.left.difference(other), self.right.difference(other))

    def is_subset_of(self, other: Any) -> bool:
        return self.left.is_subset_of(other) and self.right.is_subset_of(other)

    def is_disjoint(self, other: Any) -> bool:
        return self.left.is_disjoint(other) and self.right.is_disjoint(other)

    def __str__(self) -> str:
        return f"Union({self.left}, {self.right})"
