"""High-level API functions for hxd.

These functions dump a file without going through the command line.

Example usage::

    from hxd.api import dump, dump_to_string, dump_lines

    # Dump to stdout
    dump("/path/to/file", chunk_size=8)

    # Capture a window as a string
    text = dump_to_string("/path/to/file", offset=0x40, limit=32, show_ascii=False)

    # Iterate lazily over a large file
    for line in dump_lines("/path/to/large.bin"):
        print(line)
"""

from __future__ import annotations

import sys
from io import StringIO
from pathlib import Path
from typing import IO, Iterator

from pydantic import ValidationError as PydanticValidationError

from hxd.core.dumper import iter_dump_lines, run_dump, run_dump_raw
from hxd.core.exceptions import ConfigError
from hxd.core.models import DEFAULT_CHUNK_SIZE, DumpConfig


def _build_config(
    path: str | Path,
    chunk_size: int,
    show_ascii: bool,
    offset: int,
    limit: int,
) -> DumpConfig:
    try:
        return DumpConfig(
            file_path=Path(path),
            chunk_size=chunk_size,
            show_ascii=show_ascii,
            offset=offset,
            limit=limit,
        )
    except PydanticValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"])
        raise ConfigError(f"Invalid value for {key}: {error['msg']}", config_key=key) from e


def dump(
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    show_ascii: bool = True,
    offset: int = 0,
    limit: int = 0,
    output: str | Path | IO[str] | None = None,
) -> int:
    """Write a hexdump of a file.

    Args:
        path: File to dump.
        chunk_size: Bytes per row.
        show_ascii: Whether to render the ASCII panel.
        offset: First byte to display.
        limit: Number of bytes to display; 0 dumps through the end of the file.
        output: Text stream or file path receiving the dump. Defaults to
            standard output. Standard output and file paths receive the
            raw bytes of the ASCII panel, as the command line writes them.

    Returns:
        Number of rows written.

    Raises:
        ConfigError: If an option value is invalid.
        FileAccessError: If the file cannot be opened.
        ValidationError: If the file is empty or the window does not fit.
        DumpIOError: If reading fails mid-dump.
    """
    config = _build_config(path, chunk_size, show_ascii, offset, limit)

    if output is None:
        sys.stdout.flush()
        try:
            return run_dump_raw(config, sys.stdout.buffer)
        finally:
            sys.stdout.buffer.flush()
    if isinstance(output, (str, Path)):
        with open(output, "wb") as f:
            return run_dump_raw(config, f)
    return run_dump(config, output)


def dump_to_string(
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    show_ascii: bool = True,
    offset: int = 0,
    limit: int = 0,
) -> str:
    """Return the complete hexdump of a file as a string."""
    buffer = StringIO()
    run_dump(_build_config(path, chunk_size, show_ascii, offset, limit), buffer)
    return buffer.getvalue()


def dump_lines(
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    show_ascii: bool = True,
    offset: int = 0,
    limit: int = 0,
) -> Iterator[str]:
    """Yield hexdump lines lazily, without trailing newlines.

    The request is validated immediately; the file is read only while the
    returned iterator is consumed.
    """
    return iter_dump_lines(_build_config(path, chunk_size, show_ascii, offset, limit))
