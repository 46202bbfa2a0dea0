"""Pytest fixtures for hxd tests.

This module provides reusable fixtures for testing hxd components,
including sample files of known sizes and contents.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

import pytest


def _configure_path() -> None:
    """Put the src directory first on sys.path so tests run from a checkout."""
    src_path = str(Path(__file__).parent.parent / "src")
    if src_path in sys.path:
        sys.path.remove(src_path)
    sys.path.insert(0, src_path)


_configure_path()


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[bytes, str], Path]:
    """Return a factory that writes bytes to a file under tmp_path."""

    def _make(data: bytes, name: str = "sample.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def twenty_byte_file(make_file: Callable[[bytes, str], Path]) -> Path:
    """A 20-byte file: 'Hello, world!', a newline, then bytes 0x00-0x05."""
    return make_file(b"Hello, world!\n" + bytes(range(6)), "twenty.bin")


@pytest.fixture
def ten_byte_file(make_file: Callable[[bytes, str], Path]) -> Path:
    """A 10-byte file containing ASCII digits 0-9."""
    return make_file(b"0123456789", "ten.bin")


@pytest.fixture
def all_bytes_file(make_file: Callable[[bytes, str], Path]) -> Path:
    """A 256-byte file containing every byte value once, in order."""
    return make_file(bytes(range(256)), "all_bytes.bin")


@pytest.fixture
def empty_file(make_file: Callable[[bytes, str], Path]) -> Path:
    """A zero-byte file."""
    return make_file(b"", "empty.bin")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config files and HXD_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("HXD_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("hxd.config.loader.USER_CONFIG_DIRS", [])
    monkeypatch.chdir(tmp_path)
