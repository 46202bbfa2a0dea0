"""Core data models for hxd.

This module defines the configuration of a single dump and the small value
types passed between the reader and the formatter.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CHUNK_SIZE = 16


@dataclass(frozen=True)
class Window:
    """The ``[offset, offset + limit)`` byte range selected for display."""

    offset: int
    limit: int

    @property
    def end(self) -> int:
        """Absolute position one past the last byte of the window."""
        return self.offset + self.limit


@dataclass(frozen=True)
class Chunk:
    """One slice of file bytes, tagged with its absolute starting offset."""

    data: bytes
    offset: int

    def __len__(self) -> int:
        return len(self.data)


class DumpConfig(BaseModel):
    """Configuration for one dump.

    A ``limit`` of 0 means "until end of file" and is resolved against the
    real file size before the dump starts. The model is frozen; resolving
    the window produces a new instance.
    """

    model_config = ConfigDict(frozen=True)

    file_path: Path = Field(..., description="File to dump")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, description="Bytes per row")
    show_ascii: bool = Field(default=True, description="Whether to render the ASCII panel")
    offset: int = Field(default=0, ge=0, description="First byte to display")
    limit: int = Field(default=0, ge=0, description="Number of bytes to display (0 for until EOF)")

    @property
    def window(self) -> Window:
        """The byte window described by ``offset`` and ``limit``."""
        return Window(offset=self.offset, limit=self.limit)
