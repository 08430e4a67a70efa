"""
bitsetium/search.py
═══════════════════

The search protocol shared by every bitset in the package.

    find_first_set(lower_bound)   → smallest index ≥ lower_bound that tests
                                    true, or None

Contract (checked by ``check_search_contract``):

    result is None   ⟹  no index in [lower_bound, MAX_SET_INDEX] tests true
    result == r      ⟹  test(r) and no index in [lower_bound, r) tests true

The dual ``find_first_unset`` obeys the same contract with "tests false"
and the platform maximum index as the upper limit.

The combinators below drive the searches of the composite wrappers.  Each
loop strictly increases its lower bound over a bounded domain, so all of
them terminate; none of them scans bit by bit when the operands can skip.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Final, Iterator, Optional

MAX_INDEX: Final[int] = sys.maxsize

#: Upper limit of brute-force verification for unbounded values.
DEFAULT_HORIZON: Final[int] = 1 << 12


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — COMBINATORS
# ═══════════════════════════════════════════════════════════════════════════

def lesser(a: Optional[int], b: Optional[int]) -> Optional[int]:
    """Minimum of two optional candidates; None means exhausted."""
    if a is None:
        return b
    if b is None:
        return a
    return a if a <= b else b


def union_first_set(left: Any, right: Any, lower_bound: int) -> Optional[int]:
    """First index set in either operand."""
    return lesser(left.find_first_set(lower_bound),
                  right.find_first_set(lower_bound))


def intersection_first_set(left: Any, right: Any,
                           lower_bound: int) -> Optional[int]:
    """First index set in both operands.

    Whichever candidate is smaller is advanced to the other one until the
    two coincide or either side is exhausted.
    """
    t = left.find_first_set(lower_bound)
    if t is None:
        return None
    u = right.find_first_set(t)
    while u is not None and t != u:
        if t < u:
            t = left.find_first_set(u)
            if t is None:
                return None
        else:
            u = right.find_first_set(t)
    return u


def difference_first_set(left: Any, right: Any,
                         lower_bound: int) -> Optional[int]:
    """First index set in ``left`` and unset in ``right``.

    A left candidate covered by ``right`` skips the whole run of indices
    that ``right`` sets.
    """
    idx = left.find_first_set(lower_bound)
    while idx is not None and right.test(idx):
        gap = right.find_first_unset(idx + 1)
        if gap is None:
            return None
        idx = left.find_first_set(gap)
    return idx


def intersection_first_unset(left: Any, right: Any,
                             lower_bound: int) -> Optional[int]:
    """First index unset in both operands (the dual of intersection)."""
    t = left.find_first_unset(lower_bound)
    if t is None:
        return None
    u = right.find_first_unset(t)
    while u is not None and t != u:
        if t < u:
            t = left.find_first_unset(u)
            if t is None:
                return None
        else:
            u = right.find_first_unset(t)
    return u


def linear_first(bits: Any, lower_bound: int, upper: int,
                 value: bool = True) -> Optional[int]:
    """Bit-by-bit scan of ``[lower_bound, upper]`` for ``test() == value``.

    Fallback for leaf types that do not provide an accelerated search.
    """
    idx = max(lower_bound, 0)
    while idx <= upper:
        if bits.test(idx) is value:
            return idx
        idx += 1
    return None


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — RANGE SEARCH AND ITERATION
# ═══════════════════════════════════════════════════════════════════════════

def find_set_in_range(bits: Any, start: int = 0,
                      stop: Optional[int] = None) -> Optional[int]:
    """First set index in the half-open range ``[start, stop)``.

    ``stop=None`` leaves the range unbounded above.
    """
    if stop is not None and stop <= start:
        return None
    idx = bits.find_first_set(max(start, 0))
    if idx is None or (stop is not None and idx >= stop):
        return None
    return idx


def iter_set(bits: Any, start: int = 0,
             stop: Optional[int] = None) -> Iterator[int]:
    """Yield set indices in ascending order, lazily."""
    idx = bits.find_first_set(max(start, 0))
    while idx is not None and (stop is None or idx < stop):
        yield idx
        if idx >= MAX_INDEX:
            return
        idx = bits.find_first_set(idx + 1)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — CONTRACT VERIFICATION
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SearchViolation:
    """A counterexample to the search contract."""
    lower_bound: int
    returned: Optional[int]
    witness: Optional[int]
    reason: str

    def __str__(self) -> str:
        return (f"find_first_set({self.lower_bound}) returned {self.returned}: "
                f"{self.reason} (witness {self.witness})")


def check_search_contract(bits: Any, lower_bound: int,
                          upper: Optional[int] = None) -> Optional[SearchViolation]:
    """Brute-force check of ``find_first_set(lower_bound)`` against ``test``.

    Indices are verified up to ``upper`` (inclusive), which defaults to
    the value's MAX_SET_INDEX capped at ``lower_bound + DEFAULT_HORIZON``
    so that unbounded values (complements) remain checkable.
    """
    if upper is None:
        upper = min(bits.MAX_SET_INDEX, lower_bound + DEFAULT_HORIZON)
    result = bits.find_first_set(lower_bound)
    expected = linear_first(bits, lower_bound, upper)

    if result is None:
        if expected is not None:
            return SearchViolation(lower_bound, None, expected,
                                   "a set index was skipped")
        return None
    if result < lower_bound:
        return SearchViolation(lower_bound, result, None,
                               "result precedes the lower bound")
    if not bits.test(result):
        return SearchViolation(lower_bound, result, result,
                               "result does not test true")
    if expected is not None and expected < result:
        return SearchViolation(lower_bound, result, expected,
                               "an earlier set index exists")
    return None


__all__ = [
    "MAX_INDEX",
    "DEFAULT_HORIZON",
    "lesser",
    "union_first_set",
    "intersection_first_set",
    "difference_first_set",
    "intersection_first_unset",
    "linear_first",
    "find_set_in_range",
    "iter_set",
    "SearchViolation",
    "check_search_contract",
]
