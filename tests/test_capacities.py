# tests/test_capacities.py
"""
Tests for the pre-named capacities, EvalConfig and the error hierarchy.
"""

import pytest

import bitsetium
from bitsetium.capacities import (
    CAPACITIES,
    Bits256,
    Bits512,
    Bits2048,
    Bits16384,
    Bits65536,
    capacity_type,
)
from bitsetium.config import EvalConfig
from bitsetium.errors import (
    BitsetError,
    ConfigurationError,
    ErrorCode,
    ExpressionError,
    IndexOutOfBoundsError,
    UnsupportedOperationError,
)
from bitsetium.option import OptionalSlot
from bitsetium.primitive import Bits8, Bits64, Bits128


class TestCapacityTable:

    def test_every_capacity_matches_its_name(self):
        for bits, cls in CAPACITIES.items():
            assert cls.MAX_SET_INDEX == bits - 1
            assert cls.__name__ == f"Bits{bits}"

    def test_table_spans_one_bit_to_64_mebibits(self):
        assert min(CAPACITIES) == 1
        assert max(CAPACITIES) == 1 << 26
        assert len(CAPACITIES) == 25

    def test_layered_shapes(self):
        assert Bits256.TOP is bitsetium.Bits32
        assert Bits256.BOTTOM is Bits8
        assert Bits512.TOP is Bits64
        assert Bits2048.SEGMENT_CAPACITY == 32
        assert Bits16384.TOP is Bits128
        assert Bits16384.COUNT == 128

    def test_heap_indirected_shapes(self):
        assert issubclass(Bits65536.BOTTOM, OptionalSlot)
        assert Bits65536.BOTTOM.INNER.__name__ == "Bits1024"

    def test_all_support_unset(self):
        assert all(cls.SUPPORTS_UNSET for cls in CAPACITIES.values())


class TestCapacityLookup:

    @pytest.mark.parametrize("key", [256, "256", "Bits256", " Bits256 "])
    def test_lookup(self, key):
        assert capacity_type(key) is Bits256

    @pytest.mark.parametrize("key", [255, "Bits255", "huge", True, 0])
    def test_unknown(self, key):
        with pytest.raises(ConfigurationError):
            capacity_type(key)

    def test_hint_lists_choices(self):
        with pytest.raises(ConfigurationError) as info:
            capacity_type(300)
        assert "hint: choose one of 1, 8" in str(info.value)


class TestEvalConfig:

    def test_defaults(self):
        config = EvalConfig()
        assert config.validate() == []
        assert config.resolved() is Bits256

    def test_collects_problems(self):
        config = EvalConfig(capacity=3, list_limit=0, lower_bound=-1)
        problems = config.validate()
        assert len(problems) == 3
        assert any("list_limit" in p for p in problems)

    def test_resolved_raises(self):
        with pytest.raises(ConfigurationError):
            EvalConfig(capacity="Bits3").resolved()

    def test_named_capacity(self):
        assert EvalConfig(capacity="Bits65536").resolved() is Bits65536


class TestErrors:

    def test_codes(self):
        assert ErrorCode.INDEX_OUT_OF_BOUNDS.code == "BITS-1001"
        assert str(ErrorCode.MALFORMED_EXPRESSION) == "BITS-4001"

    def test_index_error_fields(self):
        err = IndexOutOfBoundsError(9, 7, "set")
        assert isinstance(err, IndexError)
        assert isinstance(err, BitsetError)
        assert err.code is ErrorCode.INDEX_OUT_OF_BOUNDS
        assert str(err) == "[BITS-1001] cannot set bit 9: index exceeds bound 7"

    def test_builtin_bases(self):
        assert issubclass(UnsupportedOperationError, TypeError)
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(ExpressionError, ValueError)

    def test_hint(self):
        err = ExpressionError("bad form", form=[1]).with_hint("wrap it")
        assert err.form == [1]
        assert str(err) == "[BITS-4001] bad form (hint: wrap it)"


class TestPackage:

    def test_reexports(self):
        assert bitsetium.Bits256 is Bits256
        assert bitsetium.capacity_type is capacity_type
        assert "Complement" in bitsetium.__all__
        assert "evaluate" in bitsetium.__all__

    def test_package_info(self):
        info = bitsetium.package_info()
        assert info["version"] == bitsetium.__version__
        assert info["missing_modules"] == []
        assert "layered" in info["loaded_modules"]
        assert 256 in info["capacities"]
