"""Skipping over JSON values, strictly validating or quickly and loosely."""

from __future__ import annotations

from typing import Tuple

from .cursor import JsonIterError
from .numbers import NumberReader
from .objects import ObjectReader

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_COLON = ord(":")
_COMMA = ord(",")
_LBRACE, _RBRACE = ord("{"), ord("}")
_LBRACKET, _RBRACKET = ord("["), ord("]")
_DIGITS = frozenset(b"0123456789")
_NUMBER_END = frozenset(b",]} \t\n\r")
_SLOPPY_NUMBER_END = frozenset(b" \n\r\t,}]")


def find_string_end(data: bytes) -> Tuple[int, bool]:
    """Index just past the closing quote (or -1), and whether escapes were seen."""
    escaped = False
    for i, c in enumerate(data):
        if c == _QUOTE:
            if not escaped:
                return i + 1, False
            j = i - 1
            while True:
                if j < 0 or data[j] != _BACKSLASH:
                    return i + 1, True
                j -= 1
                if j < 0 or data[j] != _BACKSLASH:
                    break
                j -= 1
        elif c == _BACKSLASH:
            escaped = True
    j = len(data) - 1
    while True:
        if j < 0 or data[j] != _BACKSLASH:
            return -1, False
        j -= 1
        if j < 0 or data[j] != _BACKSLASH:
            break
        j -= 1
    return -1, True


class Skipper(ObjectReader, NumberReader):
    """Cursor that can skip whole values."""

    sloppy: bool = False

    def skip(self) -> None:
        """Skip the next value."""
        if self.sloppy:
            self._skip_sloppy()
        else:
            self._skip_strict()

    def skip_and_return_bytes(self) -> bytes:
        """Skip the next value and return its raw bytes."""
        self._start_capture()
        self.skip()
        return self._stop_capture()

    def skip_and_append_bytes(self, buf: bytes) -> bytes:
        """Skip the next value and return buf followed by its raw bytes."""
        self._start_capture(bytes(buf))
        self.skip()
        return self._stop_capture()

    def _skip_scalar(self, c: int) -> None:
        if c == _QUOTE:
            self._skip_string()
        elif c == ord("n"):
            self._skip_three_bytes(b"ull")
        elif c == ord("t"):
            self._skip_three_bytes(b"rue")
        elif c == ord("f"):
            self._skip_four_bytes(b"alse")
        elif c == ord("0"):
            self._unread_byte()
            self.read_float32()
        elif c == ord("-") or c in _DIGITS:
            self._skip_number()
        else:
            self._report_error("Skip", f"do not know how to skip: {c}")

    # -- strict --

    def _skip_strict(self) -> None:
        stack: list = []
        while True:
            if self._open_or_skip(stack):
                continue
            while True:
                if not stack:
                    return
                c = self._next_token()
                if c == _COMMA:
                    if stack[-1] == _RBRACE:
                        self._field_after_name("ReadObjectCB")
                    break
                closer = stack.pop()
                if c != closer:
                    if closer == _RBRACE:
                        self._report_error("ReadObjectCB", "object not ended with }")
                    self._report_error("ReadArrayCB", "expect ] in the end, but found " + self._char(c))
                self._decrement_depth()

    def _open_or_skip(self, stack: list) -> bool:
        """Open a non-empty container (True) or skip a whole value (False)."""
        c = self._next_token()
        if c == _LBRACKET:
            self._increment_depth()
            if self._next_token() == _RBRACKET:
                self._decrement_depth()
                return False
            self._unread_byte()
            stack.append(_RBRACKET)
            return True
        if c == _LBRACE:
            self._increment_depth()
            c = self._next_token()
            if c == _RBRACE:
                self._decrement_depth()
                return False
            if c != _QUOTE:
                self._report_error("ReadObjectCB", 'expect " after {, but found ' + self._char(c))
            self._unread_byte()
            self._field_after_name("ReadObjectCB")
            stack.append(_RBRACE)
            return True
        self._skip_scalar(c)
        return False

    def _skip_number(self) -> None:
        if self.sloppy:
            self._sloppy_skip_number()
            return
        if self._try_skip_number():
            return
        self._unread_byte()
        try:
            self.read_float64()
        except JsonIterError:
            self.read_big_float()

    def _try_skip_number(self) -> bool:
        dot_found = False
        buf, tail = self.buf, self.tail
        for i in range(self.head, tail):
            c = buf[i]
            if c in _DIGITS:
                continue
            if c == ord("."):
                if dot_found:
                    self._report_error("validateNumber", "more than one dot found in number")
                if i + 1 == tail:
                    return False
                if buf[i + 1] not in _DIGITS:
                    self._report_error("validateNumber", "missing digit after dot")
                dot_found = True
                continue
            if c in _NUMBER_END:
                if self.head == i:
                    return False
                self.head = i
                return True
            return False
        return False

    def _skip_string(self) -> None:
        if self.sloppy:
            self._sloppy_skip_string()
            return
        for i in range(self.head, self.tail):
            c = self.buf[i]
            if c == _QUOTE:
                self.head = i + 1
                return
            if c == _BACKSLASH:
                break
            if c < 0x20:
                self._report_error("trySkipString", f"invalid control character found: {c}")
        self._unread_byte()
        self.read_string()

    # -- sloppy --

    def _skip_sloppy(self) -> None:
        c = self._next_token()
        if c == _LBRACKET:
            self._sloppy_skip_container(_LBRACKET, _RBRACKET, "incomplete array")
        elif c == _LBRACE:
            self._sloppy_skip_container(_LBRACE, _RBRACE, "incomplete object")
        else:
            self._skip_scalar(c)

    def _sloppy_skip_number(self) -> None:
        while True:
            for i in range(self.head, self.tail):
                if self.buf[i] in _SLOPPY_NUMBER_END:
                    self.head = i
                    return
            if not self._load_more():
                return

    def _sloppy_skip_container(self, opener: int, closer: int, incomplete: str) -> None:
        level = 1
        self._increment_depth()
        while True:
            i = self.head
            while i < self.tail:
                c = self.buf[i]
                if c == _QUOTE:
                    self.head = i + 1
                    self._sloppy_skip_string()
                    i = self.head
                    continue
                if c == opener:
                    level += 1
                    self._increment_depth()
                elif c == closer:
                    level -= 1
                    self._decrement_depth()
                    if level == 0:
                        self.head = i + 1
                        return
                i += 1
            if not self._load_more():
                self._report_error("skipObject", incomplete)

    def _sloppy_skip_string(self) -> None:
        while True:
            end, escaped = find_string_end(self.buf[self.head : self.tail])
            if end != -1:
                self.head += end
                return
            if not self._load_more():
                self._report_error("skipString", "incomplete string")
            if escaped:
                self.head = 1