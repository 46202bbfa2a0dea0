"""Tests for CLI error reporting.

This module tests exit statuses and messages for bad command lines,
unusable files and invalid configuration, plus the helpers in
hxd.cli.errors.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from hxd.cli.errors import (
    CONTEXT_HINTS,
    USAGE,
    ErrorContext,
    format_error_with_context,
    get_context_hint,
)
from hxd.cli.main import _error_context, app
from hxd.core.exceptions import DumpIOError, FileAccessError, ValidationError

runner = CliRunner()


class TestUsageErrors:
    """Tests for malformed command lines."""

    def test_no_filename(self) -> None:
        """Test that a missing filename prints usage and exits 1."""
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "No valid filename" in result.output
        assert "-b <bytes per row>" in result.output

    def test_only_options(self) -> None:
        """Test that options without a filename are rejected."""
        result = runner.invoke(app, ["-b", "8"])

        assert result.exit_code == 1
        assert "No valid filename" in result.output

    def test_conflicting_filenames(self, ten_byte_file: Path, twenty_byte_file: Path) -> None:
        """Test that different positional and -f paths are rejected."""
        result = runner.invoke(app, [str(ten_byte_file), "-f", str(twenty_byte_file)])

        assert result.exit_code == 1
        assert "Conflicting file arguments" in result.output
        assert "Suggestion:" in result.output
        assert "Hexdump for" not in result.stdout

    @pytest.mark.parametrize(
        "args",
        [
            ["-o", "-1"],
            ["-l", "-4"],
            ["-b", "0"],
            ["-b", "wide"],
            ["-a", "maybe"],
            ["--colour"],
        ],
    )
    def test_parser_errors_exit_2(self, ten_byte_file: Path, args: list[str]) -> None:
        """Test that values the parser rejects exit with status 2."""
        result = runner.invoke(app, [str(ten_byte_file), *args])

        assert result.exit_code == 2
        assert "Hexdump for" not in result.stdout


class TestFileErrors:
    """Tests for files that cannot be dumped."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file exits 1 without output."""
        result = runner.invoke(app, [str(tmp_path / "missing.bin")])

        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "Hexdump for" not in result.stdout

    def test_directory(self, tmp_path: Path) -> None:
        """Test that a directory exits 1."""
        result = runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == 1
        assert "directory" in result.output

    def test_empty_file(self, empty_file: Path) -> None:
        """Test that an empty file exits 1 without output."""
        result = runner.invoke(app, [str(empty_file)])

        assert result.exit_code == 1
        assert "File is empty" in result.output
        assert "Hexdump for" not in result.stdout

    def test_offset_out_of_range(self, ten_byte_file: Path) -> None:
        """Test that an offset at end of file exits 1."""
        result = runner.invoke(app, [str(ten_byte_file), "-o", "10"])

        assert result.exit_code == 1
        assert "Offset is out of range" in result.output
        assert "Use -o 9 or less" in result.output

    def test_limit_out_of_range(self, ten_byte_file: Path) -> None:
        """Test that a window past end of file exits 1."""
        result = runner.invoke(app, [str(ten_byte_file), "-o", "5", "-l", "6"])

        assert result.exit_code == 1
        assert "Filesize is out of range" in result.output
        assert "Use -l 5 or less" in result.output
        assert "Hexdump for" not in result.stdout


class TestConfigErrors:
    """Tests for invalid configuration."""

    def test_invalid_environment_value(self, ten_byte_file: Path) -> None:
        """Test that a bad HXD_CHUNK_SIZE exits 1."""
        result = runner.invoke(app, [str(ten_byte_file)], env={"HXD_CHUNK_SIZE": "abc"})

        assert result.exit_code == 1
        assert "dump.chunk_size" in result.output
        assert "Hexdump for" not in result.stdout

    def test_missing_config_file(self, ten_byte_file: Path, tmp_path: Path) -> None:
        """Test that -c with a missing file exits 1."""
        result = runner.invoke(app, [str(ten_byte_file), "-c", str(tmp_path / "none.yml")])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_malformed_config_file(self, ten_byte_file: Path, tmp_path: Path) -> None:
        """Test that an unparseable config file exits 1."""
        config = tmp_path / "bad.json"
        config.write_text("{not json")

        result = runner.invoke(app, [str(ten_byte_file), "-c", str(config)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestErrorHelpers:
    """Tests for hxd.cli.errors."""

    def test_usage_lists_every_flag(self) -> None:
        """Test that the usage text names each short flag."""
        for flag in ("-f", "-b", "-a", "-o", "-l", "-h"):
            assert flag in USAGE

    def test_known_hint(self) -> None:
        """Test looking up a hint."""
        assert get_context_hint("empty_file") == CONTEXT_HINTS["empty_file"]

    def test_unknown_hint(self) -> None:
        """Test that unknown keys give None."""
        assert get_context_hint("nonexistent") is None

    def test_format_without_context(self) -> None:
        """Test that the message is returned unchanged."""
        assert format_error_with_context("Boom") == "Boom"

    def test_format_with_context(self) -> None:
        """Test that option, suggestion and hint are appended."""
        context = ErrorContext(option="-b", value="0", suggestion="Use 16", hint="Rows need bytes")
        result = format_error_with_context("Boom", context)

        assert result.startswith("Boom")
        assert "-b 0" in result
        assert "Use 16" in result
        assert "Rows need bytes" in result


class TestErrorContext:
    """Tests for choosing the hint and suggestion under an error."""

    def test_hint_follows_reason_not_message(self) -> None:
        """Test that the hint comes from the error's reason code."""
        error = ValidationError("Nothing to show here", reason="empty_file")
        context = _error_context(error)

        assert context is not None
        assert context.hint == CONTEXT_HINTS["empty_file"]
        assert context.suggestion is None

    def test_no_reason_no_context(self) -> None:
        """Test that an error without a reason gets no hint."""
        assert _error_context(FileAccessError("Cannot open file: busy")) is None

    def test_read_failure_hint(self) -> None:
        """Test the hint for a failure in the middle of a dump."""
        context = _error_context(DumpIOError("Read failed at offset 32", context={"offset": 32}))
        assert context is not None
        assert context.hint == CONTEXT_HINTS["read_failed"]

    def test_window_suggestion(self) -> None:
        """Test that an oversized window suggests the largest limit that fits."""
        error = ValidationError(
            "Filesize is out of range",
            context={"offset": 100, "limit": 50, "file_size": 120},
            reason="window_out_of_range",
        )
        context = _error_context(error)

        assert context is not None
        assert context.suggestion == "Use -l 20 or less"
