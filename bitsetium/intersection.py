"""
bitsetium/intersection.py
═════════════════════════

``Intersection(a, b)``: an index is set when it is set in both operands.

Rewrite rules owned by this class::

    Intersection(a, b).union(y)         → Intersection(a.union(y), b.union(y))
    Intersection(a, b).intersection(y)  → Intersection(a.intersection(y), b)
    Intersection(a, b).difference(y)    → Intersection(a.difference(y), b)
    Intersection(a, b).complement()     → Union(~a, ~b)
"""

from __future__ import annotations

from typing import Any, Optional

from bitsetium.ops import BitSetOps
from bitsetium.search import intersection_first_set, lesser


class Intersection(BitSetOps):
    """Lazy intersection of two operands."""

    __slots__ = ("left", "right")

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right

    @classmethod
    def empty(cls, left_type: Any, right_type: Any) -> Intersection:
        return cls(left_type.empty(), right_type.empty())

    @classmethod
    def full(cls, left_type: Any, right_type: Any) -> Intersection:
        return cls(left_type.full(), right_type.full())

    def swap_sets(self) -> Intersection:
        """Same set with the operands exchanged."""
        return Intersection(self.right, self.left)

    @property
    def MAX_SET_INDEX(self) -> int:  # type: ignore[override]
        return min(self.left.MAX_SET_INDEX, self.right.MAX_SET_INDEX)

    @property
    def MAX_UNSET_INDEX(self) -> int:  # type: ignore[override]
        return max(self.left.MAX_UNSET_INDEX, self.right.MAX_UNSET_INDEX)

    @property
    def SUPPORTS_SET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_SET and self.right.SUPPORTS_SET

    @property
    def SUPPORTS_UNSET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_UNSET and self.right.SUPPORTS_UNSET

    def test(self, idx: int) -> bool:
        return self.left.test(idx) and self.right.test(idx)

    def test_none(self) -> bool:
        return self.left.is_disjoint(self.right)

    def test_all(self) -> bool:
        return self.left.test_all() and self.right.test_all()

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        return intersection_first_set(self.left, self.right, lower_bound)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        return lesser(self.left.find_first_unset(lower_bound),
                      self.right.find_first_unset(lower_bound))

    def set_unchecked(self, idx: int) -> None:
        self._require_mutation("set")
        self.left.set_unchecked(idx)
        self.right.set_unchecked(idx)

    def unset_unchecked(self, idx: int) -> None:
        self._require_mutation("unset")
        if idx <= self.left.MAX_UNSET_INDEX:
            self.left.unset_unchecked(idx)
        else:
            self.right.unset_unchecked(idx)

    def complement(self) -> Any:
        from bitsetium.union import Union
        return Union(self.left.complement(), self.right.complement())

    def union(self, other: Any) -> Any:
        return Intersection(self.left.union(other), self.right.union(other))

    def intersection(self, other: Any) -> Any:
        return Intersection(self.left.intersection(other), self.right)

    def difference(self, other: Any) -> Any:
        return Intersection(self.left.difference(other), self.right)

    def __str__(self) -> str:
        return f"Intersection({self.left}, {self.right})"
