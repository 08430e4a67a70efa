"""
bitsetium/layered.py
════════════════════

Two-tier hierarchical bitset.

    ┌──────────────────────────────────────────────────────────────┐
    │  top     0 0 1 0 0 0 0 1        one bit per segment          │
    │            │           │                                     │
    │  bottom  [ ][ ][■][ ][ ][ ][ ][■]   COUNT segments of        │
    │                                      SEGMENT_CAPACITY bits   │
    └──────────────────────────────────────────────────────────────┘

Segment ``t`` covers indices ``[t*cap, (t+1)*cap)`` with
``cap = BOTTOM.MAX_SET_INDEX + 1``.

Invariant (top accuracy), after every permitted mutation::

    top.test(t) == not bottom[t].test_none()

``set`` writes the segment bit and the top bit together; ``unset`` clears
the top bit once the segment is provably empty.  Unsetting is therefore
only offered when the top can unset every segment index and the bottom
can re-test emptiness exactly; the capability is decided once, when the
type is defined (``SUPPORTS_UNSET``), and an unsupported ``unset`` raises
before touching any state.

Search uses the top to skip empty segments in O(1) each.

The bottom may itself be an ``OptionalSlot`` around another layered type,
which nests the structure to arbitrary depth while leaving untouched deep
segments unallocated.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, ClassVar, List, Optional

from bitsetium.errors import ConfigurationError, UnsupportedOperationError
from bitsetium.ops import BitSetOps
from bitsetium.search import MAX_INDEX, iter_set

logger = logging.getLogger(__name__)


class Layered(BitSetOps):
    """
    Hierarchical bitset with an occupancy summary.

    Concrete classes come from ``layered_type(top, bottom, count)`` or the
    pre-named capacities in ``bitsetium.capacities``.
    """

    __slots__ = ("_top", "_bottom")

    TOP: ClassVar[Any] = None
    BOTTOM: ClassVar[Any] = None
    COUNT: ClassVar[int] = 0
    SEGMENT_CAPACITY: ClassVar[int] = 0
    MAX_SET_INDEX: ClassVar[int] = -1
    MAX_UNSET_INDEX: ClassVar[int] = MAX_INDEX
    SUPPORTS_UNSET: ClassVar[bool] = False

    def __init__(self) -> None:
        if self.TOP is None:
            raise ConfigurationError(
                "Layered is abstract; use layered_type(top, bottom, count)")
        self._top = self.TOP.empty()
        self._bottom: List[Any] = [self.BOTTOM.empty() for _ in range(self.COUNT)]

    @classmethod
    def empty(cls) -> Layered:
        return cls()

    @classmethod
    def full(cls) -> Layered:
        bits = cls()
        bits._top = cls.TOP.full()
        bits._bottom = [cls.BOTTOM.full() for _ in range(cls.COUNT)]
        return bits

    # ---- Inspection -------------------------------------------------------

    @property
    def top(self) -> Any:
        """The occupancy summary (read-only by convention)."""
        return self._top

    def segment(self, t: int) -> Any:
        """Bottom segment ``t`` (read-only by convention)."""
        return self._bottom[t]

    def segments_in_use(self) -> List[int]:
        """Indices of the segments whose top bit is set."""
        return list(iter_set(self._top))

    # ---- Queries ----------------------------------------------------------

    def test(self, idx: int) -> bool:
        if idx < 0 or idx > self.MAX_SET_INDEX:
            return False
        t, b = divmod(idx, self.SEGMENT_CAPACITY)
        return self._bottom[t].test(b)

    def test_none(self) -> bool:
        return self._top.test_none()

    def test_all(self) -> bool:
        return False

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > self.MAX_SET_INDEX:
            return None
        cap = self.SEGMENT_CAPACITY
        t, b = divmod(lower_bound, cap)

        seg = self._top.find_first_set(t)
        if seg is None:
            return None
        if seg != t:
            b = 0
        # search the segment holding lower_bound from its offset first,
        # then fall back to the top for the next occupied segment
        while True:
            found = self._bottom[seg].find_first_set(b)
            if found is not None:
                return seg * cap + found
            seg = self._top.find_first_set(seg + 1)
            if seg is None:
                return None
            b = 0

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > MAX_INDEX:
            return None
        if lower_bound > self.MAX_SET_INDEX:
            return lower_bound
        cap = self.SEGMENT_CAPACITY
        t, b = divmod(lower_bound, cap)
        for seg in range(t, self.COUNT):
            offset = b if seg == t else 0
            if not self._top.test(seg):
                return seg * cap + offset
            found = self._bottom[seg].find_first_unset(offset)
            if found is not None and found < cap:
                return seg * cap + found
        return self.MAX_SET_INDEX + 1

    # ---- Mutation ---------------------------------------------------------

    def set_unchecked(self, idx: int) -> None:
        if idx < 0 or idx > self.MAX_SET_INDEX:
            return
        t, b = divmod(idx, self.SEGMENT_CAPACITY)
        self._top.set_unchecked(t)
        self._bottom[t].set_unchecked(b)

    def unset(self, idx: int) -> None:
        self._require_unset()
        super().unset(idx)

    def unset_unchecked(self, idx: int) -> None:
        self._require_unset()
        if idx < 0 or idx > self.MAX_SET_INDEX:
            return
        t, b = divmod(idx, self.SEGMENT_CAPACITY)
        segment = self._bottom[t]
        segment.unset_unchecked(b)
        if segment.test_none():
            self._top.unset_unchecked(t)

    def _require_unset(self) -> None:
        if not self.SUPPORTS_UNSET:
            raise UnsupportedOperationError(
                f"{type(self).__name__} cannot support bit unsetting: "
                f"top {self.TOP.__name__} or bottom {self.BOTTOM.__name__} "
                f"cannot re-establish the occupancy summary")

    def __str__(self) -> str:
        return (f"{type(self).__name__}(top={self._top}, "
                f"segments={len(self.segments_in_use())}/{self.COUNT})")


def _static_bound(cls: Any, attr: str, role: str) -> int:
    bound = getattr(cls, attr, None)
    if not isinstance(bound, int):
        raise ConfigurationError(
            f"{role} type {getattr(cls, '__name__', cls)!r} has no static {attr}")
    return bound


@lru_cache(maxsize=None)
def layered_type(top: Any, bottom: Any, count: int,
                 name: Optional[str] = None,
                 require_unset: bool = False) -> type:
    """
    Define a concrete ``Layered`` class.

    Parameters
    ----------
    top : type
        Occupancy summary type; must hold exactly one bit per segment.
    bottom : type
        Segment type (a leaf, an optional slot, or another layered type).
    count : int
        Number of segments.
    name : str, optional
        Class name; defaults to ``Layered[top, bottom, count]``.
    require_unset : bool
        Reject combinations that cannot support ``unset``.

    Raises
    ------
    ConfigurationError
        On invalid parameters, or an unset-less combination when
        ``require_unset`` is true.
    """
    if not isinstance(count, int) or count <= 0:
        raise ConfigurationError(f"segment count must be a positive int, got {count!r}")
    top_max = _static_bound(top, "MAX_SET_INDEX", "top")
    bottom_max = _static_bound(bottom, "MAX_SET_INDEX", "bottom")
    if top_max != count - 1:
        raise ConfigurationError(
            f"top {top.__name__} holds {top_max + 1} bits but the layered "
            f"type has {count} segments; the summary needs one bit per segment")

    cap = bottom_max + 1
    max_set_index = max(top_max, count - 1) * cap + bottom_max

    supports_unset = (
        getattr(top, "SUPPORTS_UNSET", False)
        and _static_bound(top, "MAX_UNSET_INDEX", "top") >= count - 1
        and getattr(bottom, "SUPPORTS_UNSET", False)
        and _static_bound(bottom, "MAX_UNSET_INDEX", "bottom") >= bottom_max
    )
    cls_name = name or f"Layered[{top.__name__}, {bottom.__name__}, {count}]"
    if require_unset and not supports_unset:
        raise ConfigurationError(
            f"{cls_name} cannot support bit unsetting")

    logger.debug("Defining layered type %s: capacity=%d unset=%s",
                 cls_name, max_set_index + 1, supports_unset)
    return type(cls_name, (Layered,), {
        "__slots__": (),
        "__module__": __name__,
        "TOP": top,
        "BOTTOM": bottom,
        "COUNT": count,
        "SEGMENT_CAPACITY": cap,
        "MAX_SET_INDEX": max_set_index,
        "SUPPORTS_UNSET": bool(supports_unset),
    })


__all__ = ["Layered", "layered_type"]
