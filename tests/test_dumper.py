"""Tests for dump orchestration.

This module tests run_dump and iter_dump_lines from hxd.core.dumper,
including the scenarios a complete dump must satisfy and the handling of
read failures.
"""

from __future__ import annotations

import io
import math
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from hxd.core.dumper import iter_dump_lines, run_dump, run_dump_raw
from hxd.core.exceptions import DumpIOError, FileAccessError, ValidationError
from hxd.core.models import DumpConfig

HEADER_LINES = 5


def _rows(output: str) -> list[str]:
    lines = output.split("\n")
    return [line for line in lines[HEADER_LINES:] if line]


class TestRunDump:
    """Tests for run_dump."""

    def test_twenty_byte_file(self, twenty_byte_file: Path) -> None:
        """Test two rows for a 20-byte file at 16 bytes per row."""
        sink = io.StringIO()
        rows = run_dump(DumpConfig(file_path=twenty_byte_file), sink)

        assert rows == 2
        output_rows = _rows(sink.getvalue())
        assert len(output_rows) == 2
        assert output_rows[0].startswith("00000000 | ")
        assert output_rows[1].startswith("00000010 | 02 03 04 05 " + " " * 36 + "    |   ")

    def test_output_ends_with_blank_line(self, twenty_byte_file: Path) -> None:
        """Test the trailing blank line after the last row."""
        sink = io.StringIO()
        run_dump(DumpConfig(file_path=twenty_byte_file), sink)
        assert sink.getvalue().endswith("    |   ....\n\n")

    def test_offset_and_limit_window(self, ten_byte_file: Path) -> None:
        """Test offset=5, limit=3 on a 10-byte file: one row at 00000005."""
        sink = io.StringIO()
        rows = run_dump(DumpConfig(file_path=ten_byte_file, offset=5, limit=3), sink)

        assert rows == 1
        (row,) = _rows(sink.getvalue())
        assert row == "00000005 | 35 36 37 " + " " * 39 + "    |   567"

    @pytest.mark.parametrize(
        ("offset", "limit", "chunk_size"),
        [(0, 0, 16), (0, 256, 10), (17, 100, 16), (255, 1, 4), (3, 0, 32)],
    )
    def test_row_count(self, all_bytes_file: Path, offset: int, limit: int, chunk_size: int) -> None:
        """Test that ceil(limit / chunk_size) rows are written."""
        sink = io.StringIO()
        config = DumpConfig(
            file_path=all_bytes_file, offset=offset, limit=limit, chunk_size=chunk_size
        )
        rows = run_dump(config, sink)

        effective = limit or 256 - offset
        assert rows == math.ceil(effective / chunk_size)
        assert len(_rows(sink.getvalue())) == rows

    def test_title_uses_file_path(self, ten_byte_file: Path) -> None:
        """Test that the title names the dumped file."""
        sink = io.StringIO()
        run_dump(DumpConfig(file_path=ten_byte_file), sink)
        assert f"Hexdump for <{ten_byte_file}>:" in sink.getvalue()

    def test_repeated_dumps_are_identical(self, all_bytes_file: Path) -> None:
        """Test that dumps in the same process do not share cursor state."""
        config = DumpConfig(file_path=all_bytes_file, offset=16, limit=64)
        first, second = io.StringIO(), io.StringIO()

        run_dump(config, first)
        run_dump(config, second)

        assert first.getvalue() == second.getvalue()

    def test_empty_file_produces_no_output(self, empty_file: Path) -> None:
        """Test that validation fails before anything is written."""
        sink = io.StringIO()
        with pytest.raises(ValidationError):
            run_dump(DumpConfig(file_path=empty_file), sink)
        assert sink.getvalue() == ""

    def test_window_too_large_produces_no_output(self, ten_byte_file: Path) -> None:
        """Test that an oversized limit is rejected before rendering."""
        sink = io.StringIO()
        with pytest.raises(ValidationError):
            run_dump(DumpConfig(file_path=ten_byte_file, offset=2, limit=9), sink)
        assert sink.getvalue() == ""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileAccessError."""
        with pytest.raises(FileAccessError):
            run_dump(DumpConfig(file_path=tmp_path / "nope.bin"), io.StringIO())

    def test_read_failure_keeps_written_rows(self, all_bytes_file: Path) -> None:
        """Test that a mid-dump read failure raises DumpIOError after partial output."""
        sink = io.StringIO()
        real_open = Path.open
        calls = {"read": 0}

        class FlakyFile(io.BytesIO):
            def read(self, size: int = -1) -> bytes:  # type: ignore[override]
                calls["read"] += 1
                if calls["read"] > 2:
                    raise OSError(5, "Input/output error")
                return super().read(size)

        def fake_open(self: Path, mode: str = "r", *args, **kwargs):
            if self == all_bytes_file and calls.get("validated"):
                return FlakyFile(bytes(range(256)))
            calls["validated"] = True
            return real_open(self, mode, *args, **kwargs)

        with patch.object(Path, "open", fake_open):
            with pytest.raises(DumpIOError) as exc_info:
                run_dump(DumpConfig(file_path=all_bytes_file), sink)

        assert exc_info.value.context["offset"] == 32
        assert len(_rows(sink.getvalue())) == 2


class TestRunDumpRaw:
    """Tests for run_dump_raw."""

    def test_high_bytes_are_raw(self, make_file: Callable[[bytes, str], Path]) -> None:
        """Test that bytes >= 0x80 are written as they were read."""
        path = make_file(b"A\xe9\xff", "high.bin")
        sink = io.BytesIO()

        assert run_dump_raw(DumpConfig(file_path=path), sink) == 1
        assert sink.getvalue().endswith(b"    |   A\xe9\xff\n\n")

    def test_same_layout_as_text(self, all_bytes_file: Path) -> None:
        """Test that raw and text dumps differ only in encoding."""
        config = DumpConfig(file_path=all_bytes_file, chunk_size=24, offset=7)
        text, raw = io.StringIO(), io.BytesIO()

        assert run_dump(config, text) == run_dump_raw(config, raw)
        assert raw.getvalue() == text.getvalue().encode("latin-1")

    def test_validation_before_output(self, empty_file: Path) -> None:
        """Test that nothing is written for an invalid request."""
        sink = io.BytesIO()
        with pytest.raises(ValidationError):
            run_dump_raw(DumpConfig(file_path=empty_file), sink)
        assert sink.getvalue() == b""


class TestIterDumpLines:
    """Tests for iter_dump_lines."""

    def test_matches_run_dump(self, all_bytes_file: Path) -> None:
        """Test that the lazy lines equal the rendered output."""
        config = DumpConfig(file_path=all_bytes_file, chunk_size=12, show_ascii=False)
        sink = io.StringIO()
        run_dump(config, sink)

        lines = list(iter_dump_lines(config))
        assert "".join(line + "\n" for line in lines) == sink.getvalue()

    def test_validates_before_iteration(self, empty_file: Path) -> None:
        """Test that validation errors are raised when the iterator is created."""
        with pytest.raises(ValidationError):
            iter_dump_lines(DumpConfig(file_path=empty_file))
