"""Dump orchestration.

Ties validation, the chunk reader and the formatter together for a single
dump. Every call builds its own reader and formatter, so dumps in the same
process never share state.
"""

from __future__ import annotations

import logging
from typing import IO, BinaryIO, Callable, Iterator

from hxd.core.exceptions import DumpIOError, FileAccessError
from hxd.core.formatter import HexFormatter
from hxd.core.models import Chunk, DumpConfig
from hxd.core.reader import ChunkReader
from hxd.core.validation import prepare_config

logger = logging.getLogger(__name__)


def _open_source(config: DumpConfig) -> BinaryIO:
    try:
        return config.file_path.open("rb")
    except OSError as e:
        raise FileAccessError(
            f"Cannot open file: {e.strerror or e}", path=str(config.file_path)
        ) from e


def _guarded(reader: ChunkReader, path: str) -> Iterator[Chunk]:
    """Re-raise read failures from ``reader`` as DumpIOError."""
    try:
        yield from reader
    except OSError as e:
        raise DumpIOError(
            f"Read failed at offset {reader.cursor}: {e.strerror or e}",
            path=path,
            context={"offset": reader.cursor},
        ) from e


def run_dump(config: DumpConfig, sink: IO[str]) -> int:
    """Validate the request and write the dump to ``sink``.

    Args:
        config: Dump configuration; ``limit == 0`` means until end of file.
        sink: Text stream receiving the output.

    Returns:
        Number of rows written.

    Raises:
        FileAccessError: If the file cannot be opened.
        ValidationError: If the file is empty or the window does not fit.
        DumpIOError: If a read fails mid-dump. Rows already written stay
            in ``sink``.
    """
    return _dump(config, lambda formatter, chunks: formatter.render(chunks, sink))


def run_dump_raw(config: DumpConfig, sink: IO[bytes]) -> int:
    """Validate the request and write the dump to the binary ``sink``.

    Same as :func:`run_dump`, except that ASCII-panel bytes from 0x80
    upward are written as the raw byte values read from the file.
    """
    return _dump(config, lambda formatter, chunks: formatter.render_raw(chunks, sink))


def _dump(config: DumpConfig, render: Callable[[HexFormatter, Iterator[Chunk]], int]) -> int:
    resolved = prepare_config(config)
    path = str(resolved.file_path)
    logger.debug(
        "Dumping %s window=[0x%x, 0x%x) chunk_size=%d ascii=%s",
        path,
        resolved.offset,
        resolved.window.end,
        resolved.chunk_size,
        resolved.show_ascii,
    )

    with _open_source(resolved) as source:
        reader = ChunkReader(source, resolved.window, resolved.chunk_size)
        rows = render(HexFormatter(resolved), _guarded(reader, path))

    logger.debug("Rendered %d row(s) from %s", rows, path)
    return rows


def iter_dump_lines(config: DumpConfig) -> Iterator[str]:
    """Validate the request and return a lazy iterator over the dump lines.

    Validation happens immediately; the file is opened on the first
    iteration and stays open only while the iterator is being consumed.
    """
    return _lines(prepare_config(config))


def _lines(resolved: DumpConfig) -> Iterator[str]:
    path = str(resolved.file_path)

    with _open_source(resolved) as source:
        reader = ChunkReader(source, resolved.window, resolved.chunk_size)
        yield from HexFormatter(resolved).iter_lines(_guarded(reader, path))
