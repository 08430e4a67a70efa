# tests/conftest.py
"""
Shared helpers for the bitsetium test suite.

``naive_first_set`` is the reference oracle: a plain scan over ``test``
that every accelerated search must agree with.
"""

from typing import Any, Iterable, List, Optional

import pytest

from bitsetium.capacities import Bits256, Bits32768
from bitsetium.layered import layered_type
from bitsetium.primitive import Bits8


SAMPLE_INDICES: List[int] = [0, 1, 7, 8, 20, 63, 64, 100, 127, 128, 200, 255]


def naive_first_set(bits: Any, lower_bound: int, upper: int) -> Optional[int]:
    """First index in ``[lower_bound, upper]`` that tests true."""
    for idx in range(max(lower_bound, 0), upper + 1):
        if bits.test(idx):
            return idx
    return None


def naive_set(bits: Any, upper: int) -> List[int]:
    """Every index in ``[0, upper]`` that tests true."""
    return [i for i in range(upper + 1) if bits.test(i)]


def build(cls: Any, indices: Iterable[int]) -> Any:
    """Value of ``cls`` with the given indices set."""
    return cls.from_indices(indices)


def assert_search_agrees(bits: Any, upper: int) -> None:
    """Every lower bound in ``[0, upper]`` matches the oracle (results past
    ``upper`` count as None)."""
    for lb in range(upper + 1):
        found = bits.find_first_set(lb)
        if found is not None and found > upper:
            found = None
        assert found == naive_first_set(bits, lb, upper), lb


@pytest.fixture
def small_layered_type():
    """Layered[Bits8, Bits8, 8]: 64 bits, segment capacity 8."""
    return layered_type(Bits8, Bits8, 8)


@pytest.fixture
def sparse256():
    return build(Bits256, [3, 40, 41, 200])


@pytest.fixture
def deep():
    return Bits32768.empty()
