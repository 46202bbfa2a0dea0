# Core module for hxd

from hxd.core.formatter import HexFormatter
from hxd.core.models import Chunk, DumpConfig, Window
from hxd.core.reader import ChunkReader

__all__ = [
    "Chunk",
    "ChunkReader",
    "DumpConfig",
    "HexFormatter",
    "Window",
]
