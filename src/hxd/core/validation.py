"""Validation of a dump request against the file on disk.

The checks here run before any output is produced: the file must exist,
be readable and non-empty, and the requested window must lie inside it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from hxd.core.exceptions import FileAccessError, ValidationError
from hxd.core.models import DumpConfig

logger = logging.getLogger(__name__)

MSG_NOT_FOUND = "File not found"
MSG_DIRECTORY = "Path is a directory, not a file"
MSG_PERMISSION = "Permission denied"
MSG_EMPTY = "File is empty"
MSG_OFFSET_RANGE = "Offset is out of range"
MSG_WINDOW_RANGE = "Filesize is out of range"

# Values of the ``reason`` attribute on raised errors
REASON_NOT_FOUND = "path_not_found"
REASON_DIRECTORY = "is_directory"
REASON_PERMISSION = "permission_denied"
REASON_EMPTY = "empty_file"
REASON_OFFSET_RANGE = "offset_out_of_range"
REASON_WINDOW_RANGE = "window_out_of_range"


def check_file(path: str | Path) -> int:
    """Check that a file can be dumped and return its size.

    The file is opened once, measured by seeking to its end, and closed
    again before returning.

    Args:
        path: File to check.

    Returns:
        File size in bytes.

    Raises:
        FileAccessError: If the file is missing, a directory, or unreadable.
        ValidationError: If the file is empty.
    """
    path = Path(path)

    if not path.exists():
        raise FileAccessError(MSG_NOT_FOUND, path=str(path), reason=REASON_NOT_FOUND)
    if path.is_dir():
        raise FileAccessError(MSG_DIRECTORY, path=str(path), reason=REASON_DIRECTORY)

    try:
        with path.open("rb") as f:
            size = f.seek(0, os.SEEK_END)
    except PermissionError as e:
        raise FileAccessError(
            f"{MSG_PERMISSION}: {e.strerror}", path=str(path), reason=REASON_PERMISSION
        ) from e
    except OSError as e:
        raise FileAccessError(f"Cannot open file: {e.strerror or e}", path=str(path)) from e

    if size == 0:
        raise ValidationError(MSG_EMPTY, path=str(path), reason=REASON_EMPTY)

    logger.debug("%s is %d bytes", path, size)
    return size


def resolve_window(config: DumpConfig, file_size: int) -> DumpConfig:
    """Resolve ``limit == 0`` and check the window against the file size.

    Args:
        config: Dump configuration as given by the user.
        file_size: Actual size of the file in bytes.

    Returns:
        A new DumpConfig whose ``limit`` is the real number of bytes to show.

    Raises:
        ValidationError: If the window starts at or beyond the end of the
            file, or extends past it.
    """
    path = str(config.file_path)
    context = {"offset": config.offset, "limit": config.limit, "file_size": file_size}

    if config.offset >= file_size:
        raise ValidationError(
            MSG_OFFSET_RANGE, path=path, context=context, reason=REASON_OFFSET_RANGE
        )

    limit = config.limit or file_size - config.offset
    if config.offset + limit > file_size:
        raise ValidationError(
            MSG_WINDOW_RANGE, path=path, context=context, reason=REASON_WINDOW_RANGE
        )

    return config.model_copy(update={"limit": limit})


def prepare_config(config: DumpConfig) -> DumpConfig:
    """Validate a dump request and return its resolved configuration."""
    return resolve_window(config, check_file(config.file_path))
