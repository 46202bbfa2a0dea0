"""hxd CLI - Command-line interface for the hxd tool."""

from hxd.cli.main import app, run_cli

__all__ = ["app", "run_cli"]
