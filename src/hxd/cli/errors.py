"""Error handling utilities for the hxd CLI.

This module provides the short usage text and context-aware hints shown
alongside error messages.
"""

from __future__ import annotations

from dataclasses import dataclass

USAGE = (
    "Usage: hxd [OPTIONS] [PATH]\n"
    "  (-f) <filename>\n"
    "  -b <bytes per row>  (default = 16)\n"
    "  -a <on/off>         (default = on)\n"
    "  -o <offset>         (default = 0)\n"
    "  -l <limit>          (default = 0, until end of file)\n"
    "  -h                  Show this info"
)


@dataclass
class ErrorContext:
    """Context for error messages."""

    option: str | None = None
    value: str | None = None
    suggestion: str | None = None
    hint: str | None = None


# Context-aware hints for common error scenarios
CONTEXT_HINTS: dict[str, str] = {
    "no_filename": "Pass the file as the first argument or with -f <path>.",
    "conflicting_filename": "Give the file either positionally or with -f, not both.",
    "path_not_found": "Check that the file exists and the path is correct.",
    "permission_denied": "Check file permissions. You need read access to dump a file.",
    "is_directory": "hxd dumps a single file; directories are not supported.",
    "empty_file": "There is nothing to dump in a zero-byte file.",
    "offset_out_of_range": "The offset must be smaller than the file size.",
    "window_out_of_range": "Use -l 0 to dump through the end of the file.",
    "read_failed": "The output above is incomplete.",
    "config_invalid": "Check the config file, HXD_* environment variables, and flags.",
}


def get_context_hint(context: str) -> str | None:
    """Get a context-aware hint for an error.

    Args:
        context: The error context key.

    Returns:
        A helpful hint string or None if no hint available.
    """
    return CONTEXT_HINTS.get(context)


def format_error_with_context(
    message: str,
    context: ErrorContext | None = None,
) -> str:
    """Format an error message with additional context and help.

    Args:
        message: The base error message.
        context: Optional error context with suggestions/hints.

    Returns:
        A formatted error message with all available help.
    """
    parts = [message]

    if context:
        if context.option:
            value = f" {context.value}" if context.value is not None else ""
            parts.append(f"\n\n[dim]Option:[/dim] {context.option}{value}")
        if context.suggestion:
            parts.append(f"\n[cyan]Suggestion:[/cyan] {context.suggestion}")
        if context.hint:
            parts.append(f"\n[dim]Hint:[/dim] {context.hint}")

    return "".join(parts)
