"""Reading JSON objects field by field, with or without callbacks."""

from __future__ import annotations

from typing import Callable

from .strings import StringReader

_QUOTE = ord('"')
_COLON = ord(":")
_COMMA = ord(",")
_LBRACE = ord("{")
_RBRACE = ord("}")
_N = ord("n")
_BACKSLASH = ord("\\")

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x1000193
_MASK64 = (1 << 64) - 1


def _to_signed64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value >= 1 << 63 else value


def _hash_bytes(data: bytes, fold_case: bool) -> int:
    h = _FNV_OFFSET
    for b in data:
        if fold_case and 0x41 <= b <= 0x5A:
            b += 0x20
        h = ((h ^ b) * _FNV_PRIME) & _MASK64
    return _to_signed64(h)


def field_hash(name: str, case_sensitive: bool) -> int:
    """Signed 64-bit hash of a field name, lower-cased unless case sensitive."""
    if not case_sensitive:
        name = name.lower()
    return _hash_bytes(name.encode("utf-8"), False)


class ObjectReader(StringReader):
    """Cursor that can read JSON objects."""

    def read_object(self) -> str:
        """Read the next field name; the empty string once the object ends."""
        c = self._next_token()
        if c == _N:
            self._skip_three_bytes(b"ull")
            return ""
        if c == _LBRACE:
            c = self._next_token()
            if c == _QUOTE:
                self._unread_byte()
                return self._field_after_name("ReadObject")
            if c == _RBRACE:
                return ""
            self._report_error("ReadObject", 'expect " after {, but found ' + self._char(c))
        if c == _COMMA:
            return self._field_after_name("ReadObject")
        if c == _RBRACE:
            return ""
        self._report_error(
            "ReadObject", "expect { or , or } or n, but found " + self._char(c)
        )

    def _field_after_name(self, op: str) -> str:
        field = self.read_string()
        c = self._next_token()
        if c != _COLON:
            self._report_error(op, "expect : after object field, but found " + self._char(c))
        return field

    def read_object_cb(self, callback: Callable[["ObjectReader", str], bool]) -> bool:
        """Call callback(reader, field) for each field; stop early if it returns False."""
        return self._read_fields("ReadObjectCB", callback)

    def read_map_cb(self, callback: Callable[["ObjectReader", str], bool]) -> bool:
        """Like read_object_cb, for objects whose keys may be any string."""
        return self._read_fields("ReadMapCB", callback)

    def _read_fields(self, op: str, callback: Callable[["ObjectReader", str], bool]) -> bool:
        c = self._next_token()
        if c == _LBRACE:
            self._increment_depth()
            c = self._next_token()
            if c == _QUOTE:
                self._unread_byte()
                while True:
                    field = self._field_after_name(op)
                    if not callback(self, field):
                        self._decrement_depth()
                        return False
                    c = self._next_token()
                    if c != _COMMA:
                        break
                if c != _RBRACE:
                    self._report_error(op, "object not ended with }")
                self._decrement_depth()
                return True
            if c == _RBRACE:
                self._decrement_depth()
                return True
            self._report_error(op, 'expect " after {, but found ' + self._char(c))
        if c == _N:
            self._skip_three_bytes(b"ull")
            return True
        self._report_error(op, "expect { or n, but found " + self._char(c))

    def _read_field_hash(self) -> int:
        """Hash of the next field name, consuming the following colon."""
        fold = not self.case_sensitive
        c = self._next_token()
        if c != _QUOTE:
            self._report_error("readFieldHash", 'expect ", but found ' + self._char(c))
        raw = bytearray()
        while True:
            i = self.head
            while i < self.tail:
                b = self.buf[i]
                if b == _BACKSLASH:
                    self.head = i
                    raw += self._read_string_slow_path().encode("utf-8")
                    return self._finish_field_hash(raw, fold)
                if b == _QUOTE:
                    self.head = i + 1
                    return self._finish_field_hash(raw, fold)
                raw.append(b)
                i += 1
            self.head = self.tail
            if not self._load_more():
                self._report_error("readFieldHash", "incomplete field name")

    def _finish_field_hash(self, raw: bytearray, fold: bool) -> int:
        c = self._next_token()
        if c != _COLON:
            self._report_error("readFieldHash", "expect :, but found " + self._char(c))
        return _hash_bytes(bytes(raw), fold)

    def _read_object_start(self) -> bool:
        """True if a non-empty object starts here."""
        c = self._next_token()
        if c == _LBRACE:
            if self._next_token() == _RBRACE:
                return False
            self._unread_byte()
            return True
        if c == _N:
            self._skip_three_bytes(b"ull")
            return False
        self._report_error("readObjectStart", "expect { or n, but found " + self._char(c))

    def _read_object_field_as_bytes(self) -> bytes:
        field = self.read_string_as_slice()
        c = self._next_token()
        if c != _COLON:
            self._report_error(
                "readObjectFieldAsBytes",
                "expect : after object field, but found " + self._char(c),
            )
        return field