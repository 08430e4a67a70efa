"""
bitsetium/difference.py
═══════════════════════

``Difference(a, b)``: an index is set when it is set in ``a`` and unset
in ``b`` ("a minus b").

Rewrite rules owned by this class::

    Difference(a, b).intersection(y)  → Difference(a.intersection(y), b)
    Difference(a, b).difference(y)    → Difference(a.difference(y), b)
    Difference(a, b).union(y)         → Union(Difference(a, b), y)
    Difference(a, b).complement()     → Union(~a, b)

The union case has no simplification; it is the one place a new wrapper
is stacked on top.
"""

from __future__ import annotations

from typing import Any, Optional

from bitsetium.ops import BitSetOps
from bitsetium.search import difference_first_set, lesser


class Difference(BitSetOps):
    """Lazy difference ``left - right``."""

    __slots__ = ("left", "right")

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right

    @classmethod
    def empty(cls, left_type: Any, right_type: Any) -> Difference:
        return cls(left_type.empty(), right_type.empty())

    @classmethod
    def full(cls, left_type: Any, right_type: Any) -> Difference:
        return cls(left_type.full(), right_type.empty())

    @property
    def MAX_SET_INDEX(self) -> int:  # type: ignore[override]
        return min(self.left.MAX_SET_INDEX, self.right.MAX_UNSET_INDEX)

    @property
    def MAX_UNSET_INDEX(self) -> int:  # type: ignore[override]
        return max(self.left.MAX_UNSET_INDEX, self.right.MAX_SET_INDEX)

    @property
    def SUPPORTS_SET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_SET and self.right.SUPPORTS_UNSET

    @property
    def SUPPORTS_UNSET(self) -> bool:  # type: ignore[override]
        return self.left.SUPPORTS_UNSET and self.right.SUPPORTS_SET

    def test(self, idx: int) -> bool:
        return self.left.test(idx) and not self.right.test(idx)

    def test_none(self) -> bool:
        return self.left.is_subset_of(self.right)

    def test_all(self) -> bool:
        return self.left.test_all() and self.right.test_none()

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        return difference_first_set(self.left, self.right, lower_bound)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        # unset wherever the left side is unset or the right side is set
        return lesser(self.left.find_first_unset(lower_bound),
                      self.right.find_first_set(lower_bound))

    def set_unchecked(self, idx: int) -> None:
        self._require_mutation("set")
        self.left.set_unchecked(idx)
        self.right.unset_unchecked(idx)

    def unset_unchecked(self, idx: int) -> None:
        self._require_mutation("unset")
        if idx <= self.left.MAX_UNSET_INDEX:
            self.left.unset_unchecked(idx)
        else:
            self.right.set_unchecked(idx)

    def complement(self) -> Any:
        from bitsetium.union import Union
        return Union(self.left.complement(), self.right)

    def union(self, other: Any) -> Any:
        from bitsetium.union import Union
        return Union(self, other)

    def intersection(self, other: Any) -> Any:
        return Difference(self.left.intersection(other), self.right)

    def difference(self, other: Any) -> Any:
        return Difference(self.left.difference(other), self.right)

    def __str__(self) -> str:
        return f"Difference({self.left}, {self.right})"
