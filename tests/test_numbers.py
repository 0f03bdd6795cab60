import decimal
import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsonpull.cursor import JsonIterError
from jsonpull.number import Number
from jsonpull.numbers import NumberReader, validate_float


class ChunkedReader:
    def __init__(self, data, size):
        self.data = data
        self.size = size
        self.pos = 0

    def read(self, n):
        chunk = self.data[self.pos : self.pos + min(n, self.size)]
        self.pos += len(chunk)
        return chunk


def test_read_big_float():
    val = NumberReader(b"12.3").read_big_float()
    assert val == decimal.Decimal("12.3")
    assert float(val) == 12.3


def test_read_big_int():
    val = NumberReader(b"92233720368547758079223372036854775807").read_big_int()
    assert str(val) == "92233720368547758079223372036854775807"


def test_read_big_int_rejects_float():
    with pytest.raises(JsonIterError, match="invalid big int"):
        NumberReader(b"1.5").read_big_int()


def test_read_number():
    val = NumberReader(b"92233720368547758079223372036854775807").read_number()
    assert isinstance(val, Number)
    assert val == "92233720368547758079223372036854775807"


def test_read_number_empty_is_error():
    with pytest.raises(JsonIterError, match="invalid number"):
        NumberReader(b",").read_number()


def test_read_float64_cursor():
    reader = NumberReader(b"1.23456789\n,2")
    assert reader.read_float64() == 1.23456789
    assert reader.head == 10


def test_read_float64_fast_path_position():
    reader = NumberReader(b"1.5,")
    assert reader.read_float64() == 1.5
    assert reader.head == 3


def test_read_float_scientific():
    assert NumberReader(b"1e1").read_float64() == 10.0
    assert NumberReader(b"1.0e1").read_float64() == 10.0


def test_read_negative_float():
    assert NumberReader(b" -12.75").read_float64() == -12.75


def test_read_float64_zero():
    assert NumberReader(b"0").read_float64() == 0.0
    assert NumberReader(b"0,").read_float64() == 0.0


@pytest.mark.parametrize(
    "text, message",
    [
        (b"01", "leading zero is invalid"),
        (b".5", "leading dot is invalid"),
        (b",", "empty number"),
        (b"1.", "dot can not be last character"),
        (b"1.e1", "missing digit after dot"),
        (b"--1", "-- is not valid"),
        (b"1e400", "out of range"),
        (b"1e", "invalid syntax"),
    ],
)
def test_read_float64_errors(text, message):
    with pytest.raises(JsonIterError, match=message):
        NumberReader(text).read_float64()


def test_read_float32_rounds_to_single():
    assert NumberReader(b"1.1").read_float32() == 1.100000023841858
    assert NumberReader(b"1.5").read_float32() == 1.5


def test_read_float32_out_of_range():
    with pytest.raises(JsonIterError, match="out of range"):
        NumberReader(b"1e39").read_float32()


def test_read_float_from_chunked_reader():
    reader = NumberReader(reader=ChunkedReader(b"-12.75", 2), buffer_size=16)
    assert reader.read_float64() == -12.75


def test_read_int_from_chunked_reader():
    reader = NumberReader(reader=ChunkedReader(b"12345678901", 3), buffer_size=16)
    assert reader.read_int64() == 12345678901


def test_read_int_zero_from_reader():
    reader = NumberReader(reader=io.BytesIO(b"0 "), buffer_size=1)
    assert reader.read_int() == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        (None, None),
        ("", "empty number"),
        ("1.", "dot can not be last character"),
        ("1.e1", "missing digit after dot"),
        ("-1", "-- is not valid"),
        ("1.5", None),
        ("1e5", None),
    ],
)
def test_validate_float(text, expected):
    if text is None:
        text = "12"
    assert validate_float(text) == expected


def test_read_uint64_invalid():
    with pytest.raises(JsonIterError):
        NumberReader(b",").read_uint64()


def test_float_as_int():
    with pytest.raises(JsonIterError, match="can not decode float as int"):
        NumberReader(b"1.1").read_int()


def test_zero_then_dot_is_not_int():
    with pytest.raises(JsonIterError, match="can not decode float as int"):
        NumberReader(b"0.5").read_int()


def test_read_int_stops_at_delimiter():
    reader = NumberReader(b" 123,")
    assert reader.read_int() == 123
    assert reader.head == 4


@pytest.mark.parametrize(
    "method, text, expected",
    [
        ("read_int8", b"127", 127),
        ("read_int8", b"-128", -128),
        ("read_uint8", b"255", 255),
        ("read_int16", b"-32768", -32768),
        ("read_uint16", b"65535", 65535),
        ("read_int32", b"2147483647", 2147483647),
        ("read_int32", b"-2147483648", -2147483648),
        ("read_uint32", b"4294967295", 4294967295),
        ("read_int64", b"-9223372036854775808", -9223372036854775808),
        ("read_int64", b"9223372036854775807", 9223372036854775807),
        ("read_uint64", b"18446744073709551615", 18446744073709551615),
        ("read_uint", b"100", 100),
    ],
)
def test_integer_limits(method, text, expected):
    assert getattr(NumberReader(text), method)() == expected


@pytest.mark.parametrize(
    "method, text",
    [
        ("read_int8", b"128"),
        ("read_int8", b"-129"),
        ("read_uint8", b"256"),
        ("read_int16", b"32768"),
        ("read_uint16", b"65536"),
        ("read_int32", b"2147483648"),
        ("read_uint32", b"4294967296"),
        ("read_int64", b"9223372036854775808"),
        ("read_int64", b"-9223372036854775809"),
        ("read_uint64", b"18446744073709551616"),
    ],
)
def test_integer_overflow(method, text):
    with pytest.raises(JsonIterError, match="overflow"):
        getattr(NumberReader(text), method)()


def test_unsigned_rejects_minus():
    with pytest.raises(JsonIterError, match="unexpected character"):
        NumberReader(b"-1").read_uint8()


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
def test_int64_round_trip(value):
    assert NumberReader(str(value).encode()).read_int64() == value


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_int32_round_trip(value):
    assert NumberReader(str(value).encode() + b",").read_int32() == value


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float64_round_trip(value):
    assert NumberReader(repr(value).encode()).read_float64() == value


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float64_round_trip_with_delimiter(value):
    assert NumberReader(repr(value).encode() + b"]").read_float64() == value