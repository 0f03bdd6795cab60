"""Byte cursor over JSON input held in memory or pulled from a binary reader."""

from __future__ import annotations

from typing import BinaryIO, NoReturn, Optional, Union

MAX_DEPTH = 10000

_WHITESPACE = frozenset(b" \n\t\r")

BytesLike = Union[bytes, bytearray, memoryview, str]


class JsonIterError(ValueError):
    """Raised when the input is not the JSON that was asked for."""

    def __init__(self, operation: str, message: str, offset: int = 0, context: str = ""):
        self.operation = operation
        self.message = message
        self.offset = offset
        self.context = context
        super().__init__(
            f"{operation}: {message}, error found in #{offset} byte of ...|{context}|..."
        )


class Cursor:
    """Holds the input buffer and the read position, refilling from a reader on demand."""

    def __init__(
        self,
        data: BytesLike = b"",
        reader: Optional[BinaryIO] = None,
        buffer_size: int = 4096,
        case_sensitive: bool = False,
    ):
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self.buffer_size = buffer_size
        self.case_sensitive = case_sensitive
        self.attachment: object = None
        self.reset_bytes(data)
        if reader is not None:
            self.reset(reader)

    def reset_bytes(self, data: BytesLike) -> None:
        """Start reading from the given bytes, dropping any reader."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.reader: Optional[BinaryIO] = None
        self.buf = bytes(data)
        self.head = 0
        self.tail = len(self.buf)
        self._clear_state()

    def reset(self, reader: BinaryIO) -> None:
        """Start reading from a binary reader."""
        self.reader = reader
        self.buf = b""
        self.head = 0
        self.tail = 0
        self._clear_state()

    def _clear_state(self) -> None:
        self.depth = 0
        self._exhausted = False
        self._captured: Optional[bytearray] = None
        self._capture_started_at = -1

    def read_nil(self) -> bool:
        """Consume a null and return True, or leave the input alone and return False."""
        c = self._next_token()
        if c == ord("n"):
            self._skip_three_bytes(b"ull")
            return True
        self._unread_byte()
        return False

    def read_bool(self) -> bool:
        """Read true or false."""
        c = self._next_token()
        if c == ord("t"):
            self._skip_three_bytes(b"rue")
            return True
        if c == ord("f"):
            self._skip_four_bytes(b"alse")
            return False
        self._report_error("ReadBool", "expect t or f, but found " + self._char(c))

    # -- low level helpers shared by the readers --

    @staticmethod
    def _char(c: int) -> str:
        return chr(c)

    def _load_more(self) -> bool:
        if self.reader is None or self._exhausted:
            self.head = self.tail
            self._exhausted = True
            return False
        while True:
            chunk = self.reader.read(self.buffer_size)
            if chunk is None:
                continue
            if not chunk:
                self.head = self.tail
                self._exhausted = True
                return False
            if self._captured is not None:
                self._captured.extend(self.buf[self._capture_started_at : self.tail])
                self._capture_started_at = 0
            self.buf = bytes(chunk)
            self.head = 0
            self.tail = len(self.buf)
            return True

    def _next_token(self) -> int:
        """Skip whitespace and consume the next byte; 0 at end of input."""
        while True:
            while self.head < self.tail:
                c = self.buf[self.head]
                self.head += 1
                if c not in _WHITESPACE:
                    return c
            if not self._load_more():
                return 0

    def _read_byte(self) -> int:
        if self.head == self.tail and not self._load_more():
            self._report_error("readByte", "unexpected end of input")
        c = self.buf[self.head]
        self.head += 1
        return c

    def _unread_byte(self) -> None:
        if self._exhausted or self.head == 0:
            return
        self.head -= 1

    def _skip_three_bytes(self, expected: bytes) -> None:
        self._skip_bytes("skipThreeBytes", expected)

    def _skip_four_bytes(self, expected: bytes) -> None:
        self._skip_bytes("skipFourBytes", expected)

    def _skip_bytes(self, operation: str, expected: bytes) -> None:
        for b in expected:
            if self._read_byte() != b:
                self._report_error(operation, "expect " + expected.decode("ascii"))

    def _report_error(self, operation: str, message: str) -> NoReturn:
        peek_start = max(self.head - 10, 0)
        peek_end = min(self.head + 10, self.tail)
        parsing = self.buf[peek_start:peek_end].decode("utf-8", errors="replace")
        raise JsonIterError(operation, message, self.head - peek_start, parsing)

    def _increment_depth(self) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            self._report_error("incrementDepth", "exceeded max depth")

    def _decrement_depth(self) -> None:
        self.depth -= 1
        if self.depth < 0:
            self._report_error("decrementDepth", "unexpected negative nesting")

    def _start_capture(self, prefix: bytes = b"") -> None:
        if self._captured is not None:
            raise RuntimeError("already in capture mode")
        self._captured = bytearray(prefix)
        self._capture_started_at = self.head

    def _stop_capture(self) -> bytes:
        if self._captured is None:
            raise RuntimeError("not in capture mode")
        captured = self._captured
        captured.extend(self.buf[self._capture_started_at : self.head])
        self._captured = None
        self._capture_started_at = -1
        return bytes(captured)