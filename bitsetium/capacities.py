"""
bitsetium/capacities.py
═══════════════════════

Pre-named capacities, from a single bit up to 2**26 bits.

    Bits1 … Bits128              single words
    Bits256 … Bits16384          Layered[word top, word bottom, N]
    Bits32768 … Bits67108864     Layered[Bits64, Optional[smaller], 64]

The heap-indirected capacities nest a smaller layered type inside an
``OptionalSlot`` per segment, so an untouched deep segment is never
allocated.
"""

from __future__ import annotations

from typing import Dict, Union

from bitsetium.errors import ConfigurationError
from bitsetium.layered import layered_type
from bitsetium.option import optional_type
from bitsetium.primitive import Bits1, Bits8, Bits16, Bits32, Bits64, Bits128


Bits256 = layered_type(Bits32, Bits8, 32, "Bits256")
Bits512 = layered_type(Bits64, Bits8, 64, "Bits512")
Bits1024 = layered_type(Bits64, Bits16, 64, "Bits1024")
Bits2048 = layered_type(Bits64, Bits32, 64, "Bits2048")
Bits4096 = layered_type(Bits64, Bits64, 64, "Bits4096")
Bits8192 = layered_type(Bits64, Bits128, 64, "Bits8192")
Bits16384 = layered_type(Bits128, Bits128, 128, "Bits16384")

Bits32768 = layered_type(Bits64, optional_type(Bits512), 64, "Bits32768")
Bits65536 = layered_type(Bits64, optional_type(Bits1024), 64, "Bits65536")
Bits131072 = layered_type(Bits64, optional_type(Bits2048), 64, "Bits131072")
Bits262144 = layered_type(Bits64, optional_type(Bits4096), 64, "Bits262144")
Bits524288 = layered_type(Bits64, optional_type(Bits8192), 64, "Bits524288")
Bits1048576 = layered_type(Bits64, optional_type(Bits16384), 64, "Bits1048576")
Bits2097152 = layered_type(Bits64, optional_type(Bits32768), 64, "Bits2097152")
Bits4194304 = layered_type(Bits64, optional_type(Bits65536), 64, "Bits4194304")
Bits8388608 = layered_type(Bits64, optional_type(Bits131072), 64, "Bits8388608")
Bits16777216 = layered_type(Bits64, optional_type(Bits262144), 64, "Bits16777216")
Bits33554432 = layered_type(Bits64, optional_type(Bits524288), 64, "Bits33554432")
Bits67108864 = layered_type(Bits64, optional_type(Bits1048576), 64, "Bits67108864")


CAPACITIES: Dict[int, type] = {
    cls.MAX_SET_INDEX + 1: cls
    for cls in (
        Bits1, Bits8, Bits16, Bits32, Bits64, Bits128,
        Bits256, Bits512, Bits1024, Bits2048, Bits4096, Bits8192, Bits16384,
        Bits32768, Bits65536, Bits131072, Bits262144, Bits524288,
        Bits1048576, Bits2097152, Bits4194304, Bits8388608,
        Bits16777216, Bits33554432, Bits67108864,
    )
}


def capacity_type(capacity: Union[int, str]) -> type:
    """
    Look up a pre-named capacity by bit count (``256``) or name
    (``"Bits256"``; a bare number string works too).
    """
    key = capacity
    if isinstance(key, str):
        text = key.strip()
        if text.startswith("Bits"):
            text = text[len("Bits"):]
        try:
            key = int(text)
        except ValueError:
            raise ConfigurationError(f"unknown capacity {capacity!r}") from None
    if isinstance(key, bool) or key not in CAPACITIES:
        raise ConfigurationError(
            f"unknown capacity {capacity!r}",
        ).with_hint("choose one of " + ", ".join(str(n) for n in sorted(CAPACITIES)))
    return CAPACITIES[key]


__all__ = [
    "Bits1", "Bits8", "Bits16", "Bits32", "Bits64", "Bits128",
    "Bits256", "Bits512", "Bits1024", "Bits2048", "Bits4096", "Bits8192",
    "Bits16384", "Bits32768", "Bits65536", "Bits131072", "Bits262144",
    "Bits524288", "Bits1048576", "Bits2097152", "Bits4194304",
    "Bits8388608", "Bits16777216", "Bits33554432", "Bits67108864",
    "CAPACITIES",
    "capacity_type",
]
