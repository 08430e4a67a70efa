"""
bitsetium/option.py
═══════════════════

``OptionalSlot``: a lazily allocated holder for one inner bitset.

An empty slot holds ``None`` and answers every query in O(1) without
allocating.  The first ``set`` allocates ``INNER.empty()``; an ``unset``
that leaves the inner value empty releases it again.  Used as the bottom
type of deep ``Layered`` capacities so that untouched segments cost a
null check.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, ClassVar, Dict, Optional

from bitsetium.errors import ConfigurationError
from bitsetium.ops import BitSetOps
from bitsetium.search import MAX_INDEX

logger = logging.getLogger(__name__)


class OptionalSlot(BitSetOps):
    """Nullable owner of one ``INNER`` value."""

    __slots__ = ("_value",)

    INNER: ClassVar[Any] = None
    MAX_SET_INDEX: ClassVar[int] = -1
    MAX_UNSET_INDEX: ClassVar[int] = MAX_INDEX

    def __init__(self, value: Any = None) -> None:
        if self.INNER is None:
            raise ConfigurationError(
                "OptionalSlot is abstract; use optional_type(inner)")
        self._value = value

    @classmethod
    def empty(cls) -> OptionalSlot:
        return cls(None)

    @classmethod
    def full(cls) -> OptionalSlot:
        return cls(cls.INNER.full())

    @property
    def value(self) -> Any:
        """The inner bitset, or None when unallocated."""
        return self._value

    @property
    def is_allocated(self) -> bool:
        return self._value is not None

    def test(self, idx: int) -> bool:
        return self._value is not None and self._value.test(idx)

    def test_none(self) -> bool:
        return self._value is None or self._value.test_none()

    def test_all(self) -> bool:
        return self._value is not None and self._value.test_all()

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        if self._value is None:
            return None
        return self._value.find_first_set(lower_bound)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        if self._value is None:
            lower_bound = max(lower_bound, 0)
            return lower_bound if lower_bound <= MAX_INDEX else None
        return self._value.find_first_unset(lower_bound)

    def set_unchecked(self, idx: int) -> None:
        if self._value is None:
            self._value = self.INNER.empty()
            logger.debug("Allocated %s segment", self.INNER.__name__)
        self._value.set_unchecked(idx)

    def unset_unchecked(self, idx: int) -> None:
        if self._value is None:
            return
        self._value.unset_unchecked(idx)
        if self._value.test_none():
            self._value = None
            logger.debug("Released %s segment", self.INNER.__name__)

    def _eager(self, other: Any, kind: str) -> Any:
        # an unallocated slot short-circuits the predicates
        if self._value is None and kind in ("subset", "disjoint"):
            return True
        return None

    def __deepcopy__(self, memo: Dict[int, Any]) -> OptionalSlot:
        from copy import deepcopy
        return type(self)(deepcopy(self._value, memo))

    def __str__(self) -> str:
        return "None" if self._value is None else f"Some({self._value})"


@lru_cache(maxsize=None)
def optional_type(inner: Any) -> type:
    """Concrete ``OptionalSlot`` subclass around the static type ``inner``."""
    bound = getattr(inner, "MAX_SET_INDEX", None)
    if not isinstance(bound, int):
        raise ConfigurationError(
            f"{getattr(inner, '__name__', inner)!r} has no static MAX_SET_INDEX")
    name = f"Optional[{inner.__name__}]"
    logger.debug("Defining optional slot type %s", name)
    return type(name, (OptionalSlot,), {
        "__slots__": (),
        "__module__": __name__,
        "INNER": inner,
        "MAX_SET_INDEX": inner.MAX_SET_INDEX,
        "MAX_UNSET_INDEX": inner.MAX_UNSET_INDEX,
        "SUPPORTS_UNSET": inner.SUPPORTS_UNSET,
    })


__all__ = ["OptionalSlot", "optional_type"]
