"""
bitsetium/primitive.py
══════════════════════

Leaf bitsets that store their bits directly.

    Word        one machine-style word of WIDTH bits (``word_type``)
    WordArray   COUNT words of WIDTH bits each   (``word_array_type``)

Both are parameterised at class-definition time and cached, so
``word_type(8) is word_type(8)``; two leaves of the same concrete type
combine eagerly, anything else composes lazily through the wrappers.

Representation invariant: every stored word is masked to WIDTH bits.

A leaf never reports ``test_all()``: indices past its width are
representable and always unset, which keeps ``Complement(leaf).test_none()``
truthful.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from bitsetium.errors import ConfigurationError
from bitsetium.ops import BitSetOps
from bitsetium.search import MAX_INDEX

logger = logging.getLogger(__name__)


def _lowest_bit(mask: int) -> int:
    return (mask & -mask).bit_length() - 1


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — SINGLE WORD
# ═══════════════════════════════════════════════════════════════════════════

_WORD_OPS = {
    "union": lambda a, b, mask: a | b,
    "intersection": lambda a, b, mask: a & b,
    "difference": lambda a, b, mask: a & ~b & mask,
}


class Word(BitSetOps):
    """
    Fixed-width word leaf.

    Use ``word_type(width)`` (or the ``Bits8`` … ``Bits128`` aliases) to
    obtain a concrete class.
    """

    __slots__ = ("_bits",)

    WIDTH: ClassVar[int] = 0
    MASK: ClassVar[int] = 0
    MAX_SET_INDEX: ClassVar[int] = -1
    MAX_UNSET_INDEX: ClassVar[int] = MAX_INDEX

    def __init__(self, bits: int = 0) -> None:
        if not self.WIDTH:
            raise ConfigurationError(
                "Word is abstract; use word_type(width) for a concrete class")
        self._bits = int(bits) & self.MASK

    @classmethod
    def empty(cls) -> Word:
        return cls(0)

    @classmethod
    def full(cls) -> Word:
        return cls(cls.MASK)

    @property
    def bits(self) -> int:
        """The raw word as a non-negative int."""
        return self._bits

    # ---- Queries ----------------------------------------------------------

    def test(self, idx: int) -> bool:
        return 0 <= idx < self.WIDTH and bool((self._bits >> idx) & 1)

    def test_none(self) -> bool:
        return self._bits == 0

    def test_all(self) -> bool:
        return False

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > self.MAX_SET_INDEX:
            return None
        masked = self._bits >> lower_bound
        if not masked:
            return None
        return lower_bound + _lowest_bit(masked)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > MAX_INDEX:
            return None
        if lower_bound >= self.WIDTH:
            return lower_bound
        masked = (~self._bits & self.MASK) >> lower_bound
        if masked:
            return lower_bound + _lowest_bit(masked)
        return self.WIDTH

    # ---- Mutation ---------------------------------------------------------

    def set_unchecked(self, idx: int) -> None:
        if 0 <= idx < self.WIDTH:
            self._bits |= 1 << idx

    def unset_unchecked(self, idx: int) -> None:
        if 0 <= idx < self.WIDTH:
            self._bits &= ~(1 << idx)

    # ---- Algebra ----------------------------------------------------------

    def _eager(self, other: Any, kind: str) -> Any:
        if type(other) is not type(self):
            return None
        if kind == "subset":
            return self._bits & ~other._bits == 0
        if kind == "disjoint":
            return self._bits & other._bits == 0
        return type(self)(_WORD_OPS[kind](self._bits, other._bits, self.MASK))

    # ---- Python protocol --------------------------------------------------

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._bits == other._bits  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._bits))

    def __int__(self) -> int:
        return self._bits

    def __copy__(self) -> Word:
        return type(self)(self._bits)

    def __deepcopy__(self, memo: Dict[int, Any]) -> Word:
        return type(self)(self._bits)

    def __str__(self) -> str:
        return f"0b{self._bits:0{self.WIDTH}b}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


@lru_cache(maxsize=None)
def word_type(width: int, name: Optional[str] = None) -> type:
    """Concrete ``Word`` subclass of ``width`` bits."""
    if not isinstance(width, int) or width <= 0:
        raise ConfigurationError(f"word width must be a positive int, got {width!r}")
    cls_name = name or f"Bits{width}"
    logger.debug("Defining word type %s (width=%d)", cls_name, width)
    return type(cls_name, (Word,), {
        "__slots__": (),
        "__module__": __name__,
        "WIDTH": width,
        "MASK": (1 << width) - 1,
        "MAX_SET_INDEX": width - 1,
    })


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — ARRAY OF WORDS
# ═══════════════════════════════════════════════════════════════════════════

class WordArray(BitSetOps):
    """
    COUNT consecutive words of WIDTH bits; bit ``i`` lives in word
    ``i // WIDTH`` at offset ``i % WIDTH``.
    """

    __slots__ = ("_words",)

    WIDTH: ClassVar[int] = 0
    COUNT: ClassVar[int] = 0
    MASK: ClassVar[int] = 0
    MAX_SET_INDEX: ClassVar[int] = -1
    MAX_UNSET_INDEX: ClassVar[int] = MAX_INDEX

    def __init__(self, words: Optional[Iterable[int]] = None) -> None:
        if not self.COUNT:
            raise ConfigurationError(
                "WordArray is abstract; use word_array_type(width, count)")
        if words is None:
            self._words: List[int] = [0] * self.COUNT
        else:
            self._words = [int(w) & self.MASK for w in words]
            if len(self._words) != self.COUNT:
                raise ConfigurationError(
                    f"{type(self).__name__} needs {self.COUNT} words, "
                    f"got {len(self._words)}")

    @classmethod
    def empty(cls) -> WordArray:
        return cls()

    @classmethod
    def full(cls) -> WordArray:
        return cls([cls.MASK] * cls.COUNT)

    @property
    def words(self) -> Tuple[int, ...]:
        return tuple(self._words)

    def test(self, idx: int) -> bool:
        if idx < 0 or idx > self.MAX_SET_INDEX:
            return False
        i, j = divmod(idx, self.WIDTH)
        return bool((self._words[i] >> j) & 1)

    def test_none(self) -> bool:
        return not any(self._words)

    def test_all(self) -> bool:
        return False

    def find_first_set(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > self.MAX_SET_INDEX:
            return None
        i, j = divmod(lower_bound, self.WIDTH)
        masked = self._words[i] >> j << j
        while not masked:
            i += 1
            if i >= self.COUNT:
                return None
            masked = self._words[i]
        return i * self.WIDTH + _lowest_bit(masked)

    def find_first_unset(self, lower_bound: int) -> Optional[int]:
        lower_bound = max(lower_bound, 0)
        if lower_bound > MAX_INDEX:
            return None
        if lower_bound > self.MAX_SET_INDEX:
            return lower_bound
        i, j = divmod(lower_bound, self.WIDTH)
        masked = (~self._words[i] & self.MASK) >> j << j
        while not masked:
            i += 1
            if i >= self.COUNT:
                return self.MAX_SET_INDEX + 1
            masked = ~self._words[i] & self.MASK
        return i * self.WIDTH + _lowest_bit(masked)

    def set_unchecked(self, idx: int) -> None:
        if 0 <= idx <= self.MAX_SET_INDEX:
            i, j = divmod(idx, self.WIDTH)
            self._words[i] |= 1 << j

    def unset_unchecked(self, idx: int) -> None:
        if 0 <= idx <= self.MAX_SET_INDEX:
            i, j = divmod(idx, self.WIDTH)
            self._words[i] &= ~(1 << j)

    def _eager(self, other: Any, kind: str) -> Any:
        if type(other) is not type(self):
            return None
        pairs = zip(self._words, other._words)
        if kind == "subset":
            return all(a & ~b == 0 for a, b in pairs)
        if kind == "disjoint":
            return all(a & b == 0 for a, b in pairs)
        op = _WORD_OPS[kind]
        return type(self)([op(a, b, self.MASK) for a, b in pairs])

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self._words == other._words  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self._words)))

    def __deepcopy__(self, memo: Dict[int, Any]) -> WordArray:
        return type(self)(self._words)

    def __str__(self) -> str:
        return "[" + ", ".join(f"0b{w:0{self.WIDTH}b}" for w in self._words) + "]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self}"


@lru_cache(maxsize=None)
def word_array_type(width: int, count: int, name: Optional[str] = None) -> type:
    """Concrete ``WordArray`` subclass of ``count`` words of ``width`` bits."""
    if not isinstance(width, int) or width <= 0:
        raise ConfigurationError(f"word width must be a positive int, got {width!r}")
    if not isinstance(count, int) or count <= 0:
        raise ConfigurationError(f"word count must be a positive int, got {count!r}")
    cls_name = name or f"Bits{width}x{count}"
    logger.debug("Defining word array type %s", cls_name)
    return type(cls_name, (WordArray,), {
        "__slots__": (),
        "__module__": __name__,
        "WIDTH": width,
        "COUNT": count,
        "MASK": (1 << width) - 1,
        "MAX_SET_INDEX": width * count - 1,
    })


Bits1 = word_type(1)
Bits8 = word_type(8)
Bits16 = word_type(16)
Bits32 = word_type(32)
Bits64 = word_type(64)
Bits128 = word_type(128)

Bit = Bits1


__all__ = [
    "Word",
    "WordArray",
    "word_type",
    "word_array_type",
    "Bit",
    "Bits1",
    "Bits8",
    "Bits16",
    "Bits32",
    "Bits64",
    "Bits128",
]
