"""The full pull iterator and a pool of reusable iterators."""

from __future__ import annotations

import threading
from typing import BinaryIO, List, Optional

from .cursor import BytesLike
from .skipping import Skipper


class Iterator(Skipper):
    """Pull parser yielding JSON values one by one from bytes or a reader."""

    def __init__(
        self,
        data: BytesLike = b"",
        reader: Optional[BinaryIO] = None,
        buffer_size: int = 4096,
        case_sensitive: bool = False,
        sloppy: bool = False,
    ):
        super().__init__(data, reader, buffer_size, case_sensitive)
        self.sloppy = sloppy


class IteratorPool:
    """Thread-safe pool of iterators sharing one configuration."""

    def __init__(self, case_sensitive: bool = False, sloppy: bool = False):
        self.case_sensitive = case_sensitive
        self.sloppy = sloppy
        self._free: List[Iterator] = []
        self._lock = threading.Lock()

    def borrow_iterator(self, data: BytesLike) -> Iterator:
        """An iterator reset to read the given bytes."""
        with self._lock:
            iterator = self._free.pop() if self._free else None
        if iterator is None:
            return Iterator(data, case_sensitive=self.case_sensitive, sloppy=self.sloppy)
        iterator.reset_bytes(data)
        return iterator

    def return_iterator(self, iterator: Iterator) -> None:
        """Give an iterator back for reuse."""
        iterator.attachment = None
        with self._lock:
            self._free.append(iterator)


def parse_bytes(data: BytesLike, case_sensitive: bool = False, sloppy: bool = False) -> Iterator:
    """Iterator over bytes in memory."""
    return Iterator(data, case_sensitive=case_sensitive, sloppy=sloppy)


def parse_string(text: str, case_sensitive: bool = False, sloppy: bool = False) -> Iterator:
    """Iterator over a text string."""
    return Iterator(text, case_sensitive=case_sensitive, sloppy=sloppy)


def parse(
    reader: BinaryIO,
    buffer_size: int = 4096,
    case_sensitive: bool = False,
    sloppy: bool = False,
) -> Iterator:
    """Iterator pulling from a binary reader in chunks of buffer_size."""
    return Iterator(
        reader=reader, buffer_size=buffer_size, case_sensitive=case_sensitive, sloppy=sloppy
    )