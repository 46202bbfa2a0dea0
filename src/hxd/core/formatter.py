"""Hexadecimal row formatter.

Renders a stream of chunks as aligned rows of hex byte values with an
optional ASCII panel.

Example output for a 20-byte file with the default 16 bytes per row::

    Hexdump for <sample.bin>:

               00 01 02 03 04 05 06 07 08 09 0A 0B 0C 0D 0E 0F
    -------------------------------------------------------------+------------------
    00000000 | 48 65 6c 6c 6f 2c 20 77 6f 72 6c 64 21 0a 00 01     |   Hello, world!...
    00000010 | 02 03 04 05                                         |   ....
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator

from hxd.core.models import Chunk, DumpConfig

# Left margin of the column header: room for "%08X | "
HEADER_PADDING = 11

ADDRESS_MASK = 0xFFFFFFFF

ASCII_SEPARATOR = "    |   "

RULE_FILL = "-"
RULE_JUNCTION = "+"

# Maps U+0000-U+00FF one-to-one onto bytes 0x00-0xFF
RAW_ENCODING = "latin-1"


def is_printable(byte: int) -> bool:
    """Return False for control bytes (0x00-0x1F) and DEL (0x7F)."""
    return not (byte < 0x20 or byte == 0x7F)


def ascii_char(byte: int) -> str:
    """Render one byte for the ASCII panel.

    Bytes from 0x80 upward are passed through as the character with the
    same code point, not decoded from any charset.
    """
    return chr(byte) if is_printable(byte) else "."


class HexFormatter:
    """Formats chunks into hexdump rows.

    The formatter keeps a display address that starts at ``config.offset``
    and advances by ``config.chunk_size`` after every row, even when a row
    holds fewer bytes. Addresses are printed with 8 hex digits and wrap
    above 32 bits.
    """

    def __init__(self, config: DumpConfig):
        self.config = config

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    def title(self, file_path: str | Path) -> list[str]:
        """Lines of the title block."""
        return ["", f"Hexdump for <{file_path}>:", ""]

    def header(self) -> str:
        """Column header: one two-digit uppercase index per byte column."""
        columns = "".join(f"{i:02X} " for i in range(self.chunk_size))
        return " " * HEADER_PADDING + columns

    def rule(self) -> str:
        """Horizontal rule under the header.

        With the ASCII panel the rule is ``16 + 4 * chunk_size`` wide and
        carries a junction marker at ``13 + 3 * chunk_size``.
        """
        if not self.config.show_ascii:
            return RULE_FILL * (10 + 3 * self.chunk_size)

        length = 16 + 4 * self.chunk_size
        junction = 13 + 3 * self.chunk_size
        return RULE_FILL * junction + RULE_JUNCTION + RULE_FILL * (length - junction - 1)

    def format_row(self, address: int, chunk: Chunk | bytes) -> str:
        """Format one row.

        Args:
            address: Display address printed at the start of the row.
            chunk: Bytes of the row; at most ``chunk_size`` of them.

        Returns:
            The formatted row without a trailing newline.
        """
        data = chunk.data if isinstance(chunk, Chunk) else chunk
        parts = [f"{address & ADDRESS_MASK:08X} | "]
        parts.extend(f"{b:02x} " for b in data)

        # Keep the ASCII panel aligned on a short final row
        if len(data) < self.chunk_size:
            parts.append(" " * (3 * (self.chunk_size - len(data))))

        if self.config.show_ascii:
            parts.append(ASCII_SEPARATOR)
            parts.extend(ascii_char(b) for b in data)

        return "".join(parts)

    def iter_rows(self, chunks: Iterable[Chunk]) -> Iterator[str]:
        """Yield one formatted row per chunk."""
        display_address = self.config.offset
        for chunk in chunks:
            yield self.format_row(display_address, chunk)
            display_address += self.chunk_size

    def iter_lines(self, chunks: Iterable[Chunk], file_path: str | Path | None = None) -> Iterator[str]:
        """Yield every output line lazily, without trailing newlines.

        Args:
            chunks: Chunk stream, usually a ChunkReader.
            file_path: Name shown in the title; defaults to the configured path.
        """
        yield from self.title(file_path if file_path is not None else self.config.file_path)
        yield self.header()
        yield self.rule()
        yield from self.iter_rows(chunks)
        yield ""

    def render(self, chunks: Iterable[Chunk], sink: IO[str], file_path: str | Path | None = None) -> int:
        """Write the dump to a text sink as the chunks arrive.

        Args:
            chunks: Chunk stream, usually a ChunkReader.
            sink: Text stream receiving the output.
            file_path: Name shown in the title; defaults to the configured path.

        Returns:
            Number of rows written.
        """
        return self._emit(chunks, file_path, sink.write, sink.write)

    def render_raw(self, chunks: Iterable[Chunk], sink: IO[bytes], file_path: str | Path | None = None) -> int:
        """Write the dump to a binary sink as the chunks arrive.

        Every ASCII-panel character is written as the single byte it was
        read from, so bytes from 0x80 upward reach the sink unchanged. The
        title carries the file name in the filesystem encoding.

        Returns:
            Number of rows written.
        """
        return self._emit(
            chunks,
            file_path,
            lambda text: sink.write(os.fsencode(text)),
            lambda text: sink.write(text.encode(RAW_ENCODING)),
        )

    def _emit(
        self,
        chunks: Iterable[Chunk],
        file_path: str | Path | None,
        write_title: Callable[[str], object],
        write_body: Callable[[str], object],
    ) -> int:
        rows = 0
        for line in self.title(file_path if file_path is not None else self.config.file_path):
            write_title(line + "\n")
        write_body(self.header() + "\n")
        write_body(self.rule() + "\n")
        for row in self.iter_rows(chunks):
            write_body(row + "\n")
            rows += 1
        write_body("\n")
        return rows
