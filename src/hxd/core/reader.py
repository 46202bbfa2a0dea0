"""Windowed sequential reader.

This module provides the ChunkReader class which splits a byte window of a
seekable file into consecutive chunks of at most ``chunk_size`` bytes.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from hxd.core.models import Chunk, Window

logger = logging.getLogger(__name__)


class ChunkReader:
    """Iterator over the chunks of a byte window.

    The reader owns a single absolute cursor that starts at
    ``window.offset`` and only moves forward. Every step seeks to the
    cursor, reads at most ``chunk_size`` bytes without crossing the end of
    the window, and advances the cursor by the number of bytes actually
    read. The stream ends on the first empty read.

    A reader is consumed once. Construct a new one to read the window
    again; readers never share cursor state, even over the same file
    object.

    Example:
        >>> with open("firmware.bin", "rb") as f:
        ...     for chunk in ChunkReader(f, Window(offset=0x100, limit=64), 16):
        ...         print(chunk.offset, chunk.data.hex())
    """

    def __init__(self, source: BinaryIO, window: Window, chunk_size: int):
        """Initialize the reader.

        Args:
            source: Seekable binary file object.
            window: Byte range to read.
            chunk_size: Maximum number of bytes per chunk.

        Raises:
            ValueError: If ``chunk_size`` is not positive or the window is
                negative.
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if window.offset < 0 or window.limit < 0:
            raise ValueError(f"window must not be negative, got {window}")

        self.source = source
        self.window = window
        self.chunk_size = chunk_size
        self._cursor = window.offset
        self._exhausted = False

    @property
    def cursor(self) -> int:
        """Absolute file position of the next read."""
        return self._cursor

    @property
    def remaining(self) -> int:
        """Bytes left in the window from the current cursor."""
        return max(0, self.window.end - self._cursor)

    def __iter__(self) -> Iterator[Chunk]:
        return self

    def __next__(self) -> Chunk:
        if self._exhausted:
            raise StopIteration

        size = min(self.remaining, self.chunk_size)
        data = b""
        if size > 0:
            self.source.seek(self._cursor)
            data = self.source.read(size)

        if not data:
            self._exhausted = True
            logger.debug("Reader finished at 0x%x", self._cursor)
            raise StopIteration

        chunk = Chunk(data=data, offset=self._cursor)
        self._cursor += len(data)
        return chunk
