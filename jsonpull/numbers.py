"""Reading JSON numbers as floats, bounded integers, big numbers or literal text."""

from __future__ import annotations

import decimal
import re
import struct
from typing import Optional

from .cursor import Cursor
from .number import Number

_INVALID = -1
_END = -2
_DOT = -3

_FLOAT_DIGITS = [_INVALID] * 256
for _d in range(10):
    _FLOAT_DIGITS[ord("0") + _d] = _d
for _b in b",]} \t\n":
    _FLOAT_DIGITS[_b] = _END
_FLOAT_DIGITS[ord(".")] = _DOT

_INT_DIGITS = {ord("0") + d: d for d in range(10)}
_DIGIT_BYTES = frozenset(b"0123456789")
_NUMBER_CHARS = frozenset(b"+-.eE0123456789")
_BIG_INT = re.compile(r"[+-]?[0-9]+")

_POW10 = (1, 10, 100, 1000, 10000, 100000, 1000000)
_UINT64_SAFE_TO_MULTIPLY_10 = (2**64 - 1) // 10 - 1
_MAX_EXACT_FLOAT64 = (1 << 53) - 1
_MINUS = ord("-")
_DOT_BYTE = ord(".")


def validate_float(text: str) -> Optional[str]:
    """The reason text is not an acceptable float literal, or None if it is."""
    if not text:
        return "empty number"
    if text[0] == "-":
        return "-- is not valid"
    dot = text.find(".")
    if dot != -1:
        if dot == len(text) - 1:
            return "dot can not be last character"
        if text[dot + 1] not in "0123456789":
            return "missing digit after dot"
    return None


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _int_to_float32(value: int) -> float:
    """Round a non-negative integer to the nearest float32, ties to even."""
    bits = value.bit_length()
    if bits <= 24:
        return float(value)
    shift = bits - 24
    quotient, remainder = divmod(value, 1 << shift)
    half = 1 << (shift - 1)
    if remainder > half or (remainder == half and quotient & 1):
        quotient += 1
    return float(quotient << shift)


class NumberReader(Cursor):
    """Cursor that can read JSON numbers."""

    # -- floats --

    def read_float32(self) -> float:
        """Read a number rounded to single precision."""
        return self._read_float("readFloat32", single=True)

    def read_float64(self) -> float:
        """Read a number as a double."""
        return self._read_float("readFloat64", single=False)

    def _read_float(self, op: str, single: bool) -> float:
        c = self._next_token()
        if c == _MINUS:
            return -self._read_positive_float(op, single)
        self._unread_byte()
        return self._read_positive_float(op, single)

    def _read_positive_float(self, op: str, single: bool) -> float:
        buf, tail = self.buf, self.tail
        i = self.head
        if i == tail:
            return self._read_float_slow_path(op, single)
        kind = _FLOAT_DIGITS[buf[i]]
        i += 1
        if kind == _INVALID:
            return self._read_float_slow_path(op, single)
        if kind == _END:
            self._report_error(op, "empty number")
        if kind == _DOT:
            self._report_error(op, "leading dot is invalid")
        if kind == 0:
            if i == tail:
                return self._read_float_slow_path(op, single)
            if buf[i] in _DIGIT_BYTES:
                self._report_error(op, "leading zero is invalid")
        value = kind
        while i < tail:
            kind = _FLOAT_DIGITS[buf[i]]
            if kind == _INVALID:
                return self._read_float_slow_path(op, single)
            if kind == _END:
                self.head = i
                return _int_to_float32(value) if single else float(value)
            if kind == _DOT:
                break
            if value > _UINT64_SAFE_TO_MULTIPLY_10:
                return self._read_float_slow_path(op, single)
            value = value * 10 + kind
            i += 1
        if i == tail:
            return self._read_float_slow_path(op, single)
        i += 1  # past the dot
        places = 0
        while i < tail:
            kind = _FLOAT_DIGITS[buf[i]]
            if kind == _END:
                if 0 < places < len(_POW10):
                    self.head = i
                    result = float(value) / float(_POW10[places])
                    return _to_float32(result) if single else result
                return self._read_float_slow_path(op, single)
            if kind < 0:
                return self._read_float_slow_path(op, single)
            places += 1
            if value > _UINT64_SAFE_TO_MULTIPLY_10:
                return self._read_float_slow_path(op, single)
            value = value * 10 + kind
            if not single and value > _MAX_EXACT_FLOAT64:
                return self._read_float_slow_path(op, single)
            i += 1
        return self._read_float_slow_path(op, single)

    def _read_float_slow_path(self, op: str, single: bool) -> float:
        slow_op = op + "SlowPath"
        text = self._read_number_as_string()
        problem = validate_float(text)
        if problem is not None:
            self._report_error(slow_op, problem)
        try:
            value = Number(text).float64()
        except ValueError as exc:
            self._report_error(slow_op, str(exc))
        if not single:
            return value
        try:
            return _to_float32(value)
        except OverflowError:
            self._report_error(slow_op, f'parsing "{text}": value out of range')

    # -- numbers kept whole --

    def _read_number_as_string(self) -> str:
        out = bytearray()
        while True:
            buf, tail = self.buf, self.tail
            start = i = self.head
            while i < tail and buf[i] in _NUMBER_CHARS:
                i += 1
            out += buf[start:i]
            self.head = i
            if i < tail or not self._load_more():
                break
        if not out:
            self._report_error("readNumberAsString", "invalid number")
        return out.decode("ascii")

    def read_number(self) -> Number:
        """Read the literal text of a number."""
        return Number(self._read_number_as_string())

    def read_big_float(self) -> decimal.Decimal:
        """Read a number exactly as a Decimal."""
        text = self._read_number_as_string()
        try:
            return decimal.Decimal(text)
        except decimal.InvalidOperation:
            self._report_error("ReadBigFloat", f"invalid big float: {text}")

    def read_big_int(self) -> int:
        """Read an integer of any size."""
        text = self._read_number_as_string()
        if not _BIG_INT.fullmatch(text):
            self._report_error("ReadBigInt", "invalid big int")
        return int(text)

    # -- integers --

    def read_int(self) -> int:
        """Read a signed 64-bit integer."""
        return self.read_int64()

    def read_uint(self) -> int:
        """Read an unsigned 64-bit integer."""
        return self.read_uint64()

    def read_int8(self) -> int:
        """Read a signed 8-bit integer."""
        return self._read_signed("ReadInt8", 8)

    def read_uint8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self._read_bounded_unsigned("ReadUint8", 8)

    def read_int16(self) -> int:
        """Read a signed 16-bit integer."""
        return self._read_signed("ReadInt16", 16)

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return self._read_bounded_unsigned("ReadUint16", 16)

    def read_int32(self) -> int:
        """Read a signed 32-bit integer."""
        return self._read_signed("ReadInt32", 32)

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return self._read_unsigned(self._next_token(), 32)

    def read_int64(self) -> int:
        """Read a signed 64-bit integer."""
        return self._read_signed("ReadInt64", 64)

    def read_uint64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return self._read_unsigned(self._next_token(), 64)

    def _read_signed(self, op: str, bits: int) -> int:
        read_bits = 32 if bits <= 32 else 64
        c = self._next_token()
        if c == _MINUS:
            value = self._read_unsigned(self._read_byte(), read_bits)
            if value > 1 << (bits - 1):
                self._report_error(op, f"overflow: {value}")
            return -value
        value = self._read_unsigned(c, read_bits)
        if value > (1 << (bits - 1)) - 1:
            self._report_error(op, f"overflow: {value}")
        return value

    def _read_bounded_unsigned(self, op: str, bits: int) -> int:
        value = self._read_unsigned(self._next_token(), 32)
        if value > (1 << bits) - 1:
            self._report_error(op, f"overflow: {value}")
        return value

    def _read_unsigned(self, c: int, bits: int) -> int:
        op = "readUint32" if bits == 32 else "readUint64"
        digit = _INT_DIGITS.get(c)
        if digit is None:
            self._report_error(op, "unexpected character: " + self._char(c))
        if digit == 0:
            self._assert_integer()
            return 0
        limit = (1 << bits) - 1
        value = digit
        while True:
            buf, tail = self.buf, self.tail
            i = self.head
            while i < tail:
                d = _INT_DIGITS.get(buf[i])
                if d is None:
                    self.head = i
                    self._assert_integer()
                    return value
                value = value * 10 + d
                if value > limit:
                    self._report_error(op, "overflow")
                i += 1
            self.head = tail
            if not self._load_more():
                self._assert_integer()
                return value

    def _assert_integer(self) -> None:
        if self.head < self.tail and self.buf[self.head] == _DOT_BYTE:
            self._report_error("assertInteger", "can not decode float as int")