import math

import pytest
from hypothesis import given, strategies as st

from jsonpull.number import Number, cast_json_number


def test_text_is_kept():
    assert str(Number("12.30")) == "12.30"


def test_int64():
    assert Number("123").int64() == 123


def test_int64_negative_limit():
    assert Number("-9223372036854775808").int64() == -9223372036854775808


def test_int64_overflow():
    with pytest.raises(ValueError, match="out of range"):
        Number("9223372036854775808").int64()


@pytest.mark.parametrize("text", ["1.5", " 1", "1_0", "", "abc", "0x10"])
def test_int64_invalid(text):
    with pytest.raises(ValueError, match="invalid syntax"):
        Number(text).int64()


def test_float64():
    assert Number("12.3").float64() == 12.3


def test_float64_scientific():
    assert Number("1e1").float64() == 1e1


def test_float64_special_values():
    negative_infinity = Number("-Inf").float64()
    assert negative_infinity == float("-inf")
    not_a_number = Number("NaN").float64()
    assert repr(not_a_number) == "nan"
    assert math.isnan(not_a_number) is True


def test_float64_hex():
    assert Number("0x1p-2").float64() == float.fromhex("0x1p-2")


def test_float64_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        Number("1e400").float64()


@pytest.mark.parametrize("text", [" 1", "1 ", "1_000", "", "e5", "1e", "--1"])
def test_float64_invalid(text):
    with pytest.raises(ValueError, match="invalid syntax"):
        Number(text).float64()


@given(st.integers(min_value=-(1 << 63), max_value=(1 << 63) - 1))
def test_int64_round_trip(value):
    assert Number(str(value)).int64() == value


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float64_round_trip(value):
    assert Number(repr(value)).float64() == value


def test_cast_json_number():
    assert cast_json_number(Number("42")) == "42"
    assert cast_json_number("42") is None
    assert cast_json_number(42) is None