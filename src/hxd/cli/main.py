"""Command-line interface for hxd.

This module provides the Typer-based CLI that turns flags into a validated
DumpConfig and writes the dump to standard output. Errors are reported on
standard error.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from hxd import __version__
from hxd.cli.errors import (
    USAGE,
    ErrorContext,
    format_error_with_context,
    get_context_hint,
)
from hxd.config import load_config
from hxd.config.env import get_env_var_docs
from hxd.core.dumper import run_dump_raw
from hxd.core.exceptions import (
    ConfigError,
    DumpIOError,
    FileAccessError,
    HxdError,
    ValidationError,
)
from hxd.core.logging import setup_logging
from hxd.core.models import DumpConfig
from hxd.core.validation import REASON_OFFSET_RANGE, REASON_WINDOW_RANGE

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hxd",
    help="hxd - Dump a file as rows of hexadecimal bytes with an optional ASCII panel.",
    add_completion=False,
    context_settings={"help_option_names": []},
)
console = Console()
error_console = Console(stderr=True)

class AsciiMode(str, Enum):
    """Values accepted by -a."""

    ON = "on"
    OFF = "off"


def _error_context(error: HxdError) -> Optional[ErrorContext]:
    """Build the hint and suggestion shown under an hxd error."""
    if isinstance(error, DumpIOError):
        reason = "read_failed"
    elif isinstance(error, ConfigError):
        reason = "config_invalid"
    else:
        reason = getattr(error, "reason", None)
    hint = get_context_hint(reason) if reason else None

    suggestion = None
    file_size = error.context.get("file_size")
    if file_size and reason == REASON_OFFSET_RANGE:
        suggestion = f"Use -o {file_size - 1} or less"
    elif file_size and reason == REASON_WINDOW_RANGE:
        suggestion = f"Use -l {file_size - error.context['offset']} or less"

    if hint is None and suggestion is None:
        return None
    return ErrorContext(suggestion=suggestion, hint=hint)


def _display_error(error: Exception, context: Optional[ErrorContext] = None) -> None:
    """Display an error with rich formatting on standard error.

    Args:
        error: The exception to display.
        context: Optional hint/suggestion shown under the message.
    """
    if isinstance(error, HxdError) and context is None:
        context = _error_context(error)

    if isinstance(error, ConfigError):
        heading, title = "Configuration Error", "Config Error"
        message = escape(error.message)
        if error.config_key:
            message += f"\n\n[dim]Config key:[/dim] {escape(error.config_key)}"
    elif isinstance(error, FileAccessError):
        heading, title = "File Access Error", "File Error"
        message = escape(error.message)
        if error.path:
            message += f"\n\n[dim]Path:[/dim] {escape(error.path)}"
    elif isinstance(error, ValidationError):
        heading, title = "Validation Error", "Validation Error"
        message = escape(error.message)
        if error.path:
            message += f"\n\n[dim]Path:[/dim] {escape(error.path)}"
        for key in ("offset", "limit", "file_size"):
            if key in error.context:
                message += f"\n[dim]{key}:[/dim] {error.context[key]}"
    elif isinstance(error, DumpIOError):
        heading, title = "I/O Error", "I/O Error"
        message = escape(error.message)
        if error.path:
            message += f"\n\n[dim]Path:[/dim] {escape(error.path)}"
    elif isinstance(error, HxdError):
        heading, title = "Error", "Error"
        message = escape(error.message)
    else:
        heading, title = "Error", "Error"
        message = escape(str(error))

    body = format_error_with_context(f"[bold red]{heading}[/bold red]\n\n{message}", context)
    error_console.print(Panel(body, title=f"[red]{title}[/red]", border_style="red"))


def _fail_with_usage(error: ConfigError, context: Optional[ErrorContext] = None) -> NoReturn:
    _display_error(error, context)
    error_console.print(USAGE, markup=False, highlight=False)
    raise typer.Exit(code=EXIT_ERROR)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]hxd[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


def help_callback(ctx: typer.Context, value: bool) -> None:
    """Print usage and exit with a non-zero status."""
    if value and not ctx.resilient_parsing:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=EXIT_ERROR)


def _env_epilog() -> str:
    lines = ["Environment variables:"]
    lines.extend(f"{name}: {doc}" for name, doc in get_env_var_docs().items())
    return "\n\n".join(lines)


def _dump_to_stdout(dump_config: DumpConfig) -> int:
    """Write the dump to the binary layer of standard output.

    ASCII-panel bytes are written as read, never re-encoded. Rows already
    written are flushed before any error propagates.
    """
    sys.stdout.flush()
    try:
        return run_dump_raw(dump_config, sys.stdout.buffer)
    finally:
        sys.stdout.buffer.flush()


def _resolve_path(path: Optional[Path], file: Optional[Path]) -> Path:
    """Pick the file to dump from the positional argument and -f."""
    if path is not None and file is not None and path != file:
        _fail_with_usage(
            ConfigError("Conflicting file arguments", config_key="file"),
            ErrorContext(
                option="-f",
                value=escape(str(file)),
                suggestion=escape(f"hxd -f {file}"),
                hint=get_context_hint("conflicting_filename"),
            ),
        )
    chosen = file if file is not None else path
    if chosen is None:
        _fail_with_usage(
            ConfigError("No valid filename", config_key="file"),
            ErrorContext(hint=get_context_hint("no_filename")),
        )
    return chosen


@app.command(epilog=_env_epilog())
def dump(
    path: Annotated[
        Optional[Path],
        typer.Argument(
            help="File to dump",
            show_default=False,
        ),
    ] = None,
    file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            help="File to dump (alternative to the positional argument)",
            show_default=False,
        ),
    ] = None,
    bytes_per_row: Annotated[
        Optional[int],
        typer.Option(
            "--bytes",
            "-b",
            min=1,
            help="Bytes per row (default: 16)",
            show_default=False,
        ),
    ] = None,
    ascii_mode: Annotated[
        Optional[AsciiMode],
        typer.Option(
            "--ascii",
            "-a",
            help="Show the ASCII panel (default: on)",
            case_sensitive=False,
            show_default=False,
        ),
    ] = None,
    offset: Annotated[
        int,
        typer.Option(
            "--offset",
            "-o",
            min=0,
            help="First byte to display",
        ),
    ] = 0,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-l",
            min=0,
            help="Number of bytes to display (0 for until end of file)",
        ),
    ] = 0,
    config_file: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to a config file (YAML, TOML or JSON)",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging on standard error",
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    help_: Annotated[
        Optional[bool],
        typer.Option(
            "-h",
            "--help",
            callback=help_callback,
            is_eager=True,
            help="Show this message and exit with status 1",
        ),
    ] = None,
) -> None:
    """Dump a file as rows of hexadecimal bytes.

    Each row shows the display address, the hex value of every byte, and,
    unless disabled with -a off, the bytes as printable characters.

    Exit codes:
        0: Success
        1: Invalid configuration, unreadable file, window outside the file,
           read failure, or -h
        2: Malformed command line
    """
    target = _resolve_path(path, file)

    show_ascii = None if ascii_mode is None else ascii_mode == AsciiMode.ON
    try:
        config = load_config(
            config_path=config_file,
            cli_args={"chunk_size": bytes_per_row, "show_ascii": show_ascii},
        )
    except ConfigError as e:
        _fail_with_usage(e)

    setup_logging(verbose=verbose, level=config.log_level.value)
    if config.config_file:
        logger.debug("Loaded config file %s", config.config_file)
    logger.debug(
        "chunk_size=%d (%s) show_ascii=%s (%s)",
        config.dump.chunk_size,
        config.source_of("dump.chunk_size").value,
        config.dump.show_ascii,
        config.source_of("dump.show_ascii").value,
    )

    dump_config = config.to_dump_config(target, offset=offset, limit=limit)

    try:
        _dump_to_stdout(dump_config)
    except HxdError as e:
        _display_error(e)
        raise typer.Exit(code=EXIT_ERROR) from None
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Dump interrupted by user[/yellow]")
        raise typer.Exit(code=EXIT_ERROR) from None

    raise typer.Exit(code=EXIT_SUCCESS)


def run_cli() -> None:
    """Entry point for the ``hxd`` console script."""
    app()


if __name__ == "__main__":
    run_cli()
