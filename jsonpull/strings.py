"""Reading JSON strings, including escapes and UTF-16 surrogate pairs."""

from __future__ import annotations

import re

from .cursor import Cursor

MAX_RUNE = 0x10FFFF
RUNE_ERROR = 0xFFFD
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_CONTROL = re.compile(rb"[\x00-\x1f]")
_HEX_DIGITS = {b: int(chr(b), 16) for b in b"0123456789abcdefABCDEF"}
_SIMPLE_ESCAPES = {
    ord('"'): b'"',
    ord("\\"): b"\\",
    ord("/"): b"/",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
}


def encode_rune(code_point: int) -> bytes:
    """UTF-8 bytes of a code point; invalid ones become U+FFFD."""
    if code_point < 0 or code_point > MAX_RUNE or SURROGATE_MIN <= code_point <= SURROGATE_MAX:
        code_point = RUNE_ERROR
    return chr(code_point).encode("utf-8")


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _combine_surrogates(high: int, low: int) -> int:
    if 0xD800 <= high < 0xDC00 and 0xDC00 <= low < 0xE000:
        return (((high - 0xD800) << 10) | (low - 0xDC00)) + 0x10000
    return RUNE_ERROR


class StringReader(Cursor):
    """Cursor that can read JSON strings."""

    def read_string(self) -> str:
        """Read a string; null reads as the empty string."""
        c = self._next_token()
        if c == _QUOTE:
            start = self.head
            quote = self.buf.find(b'"', start, self.tail)
            scan_end = self.tail if quote == -1 else quote
            backslash = self.buf.find(b"\\", start, scan_end)
            if backslash != -1:
                scan_end = backslash
            control = _CONTROL.search(self.buf, start, scan_end)
            if control:
                self._report_error(
                    "ReadString",
                    f"invalid control character found: {self.buf[control.start()]}",
                )
            if quote != -1 and backslash == -1:
                self.head = quote + 1
                return _decode(self.buf[start:quote])
            return self._read_string_slow_path()
        if c == ord("n"):
            self._skip_three_bytes(b"ull")
            return ""
        self._report_error("ReadString", 'expects " or n, but found ' + self._char(c))

    def _read_string_slow_path(self) -> str:
        out = bytearray()
        while True:
            c = self._read_byte()
            if c == _QUOTE:
                return _decode(bytes(out))
            if c == _BACKSLASH:
                out += self._read_escape(self._read_byte())
            else:
                out.append(c)

    def _read_escape(self, c: int) -> bytes:
        """Bytes for the escape whose letter (after the backslash) is c."""
        if c == ord("u"):
            r = self._read_u4()
            if not SURROGATE_MIN <= r <= SURROGATE_MAX:
                return encode_rune(r)
            c = self._read_byte()
            if c != _BACKSLASH:
                self._unread_byte()
                return encode_rune(r)
            c = self._read_byte()
            if c != ord("u"):
                return encode_rune(r) + self._read_escape(c)
            r2 = self._read_u4()
            combined = _combine_surrogates(r, r2)
            if combined == RUNE_ERROR:
                return encode_rune(r) + encode_rune(r2)
            return encode_rune(combined)
        try:
            return _SIMPLE_ESCAPES[c]
        except KeyError:
            self._report_error("readEscapedChar", "invalid escape char after \\")

    def _read_u4(self) -> int:
        value = 0
        for _ in range(4):
            c = self._read_byte()
            digit = _HEX_DIGITS.get(c)
            if digit is None:
                self._report_error("readU4", "expects 0~9 or a~f, but found " + self._char(c))
            value = value * 16 + digit
        return value

    def read_string_as_slice(self) -> bytes:
        """Raw bytes between the quotes, escapes left as they are."""
        c = self._next_token()
        if c != _QUOTE:
            self._report_error(
                "ReadStringAsSlice", 'expects " or n, but found ' + self._char(c)
            )
        end = self.buf.find(b'"', self.head, self.tail)
        if end != -1:
            raw = self.buf[self.head : end]
            self.head = end + 1
            return raw
        copied = bytearray(self.buf[self.head : self.tail])
        self.head = self.tail
        while self.head < self.tail or self._load_more():
            c = self.buf[self.head]
            self.head += 1
            if c == _QUOTE:
                break
            copied.append(c)
        return bytes(copied)