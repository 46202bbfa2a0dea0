"""Custom exception hierarchy for hxd.

This module defines the exception classes used throughout hxd for error
handling and reporting. All exceptions inherit from the base HxdError
class, allowing callers to catch every hxd error with a single except
clause.
"""

from __future__ import annotations


class HxdError(Exception):
    """Base exception for all hxd errors.

    Attributes:
        message: Human-readable error message.
        context: Optional dictionary of additional context about the error.
    """

    def __init__(self, message: str, context: dict | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            context: Optional dictionary of additional context about the error.
        """
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including context if present."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(HxdError):
    """Exception raised for configuration errors.

    Raised for a bad flag combination, a missing filename, or an invalid
    value coming from a config file, the environment, or the command line.

    Example:
        >>> raise ConfigError("chunk_size must be positive", config_key="dump.chunk_size")
    """

    def __init__(self, message: str, config_key: str | None = None, context: dict | None = None):
        """Initialize the config error.

        Args:
            message: Human-readable error message.
            config_key: The configuration key that caused the error.
            context: Optional dictionary of additional context.
        """
        ctx = context or {}
        if config_key:
            ctx["config_key"] = config_key
        super().__init__(message, ctx)
        self.config_key = config_key


class FileAccessError(HxdError):
    """Exception raised when the target file cannot be opened.

    Covers missing files, directories given in place of files, and
    permission problems.

    Example:
        >>> raise FileAccessError("File not found", path="/nonexistent")
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict | None = None,
        reason: str | None = None,
    ):
        """Initialize the file access error.

        Args:
            message: Human-readable error message.
            path: The path that caused the error, if applicable.
            context: Optional dictionary of additional context.
            reason: Stable identifier of the failure, such as
                ``"path_not_found"``, for callers that react to the cause.
        """
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, ctx)
        self.path = path
        self.reason = reason


class ValidationError(HxdError):
    """Exception raised when the requested dump does not fit the file.

    Raised for empty files and for windows that start or end beyond the
    end of the file. Always raised before any dump output is written.

    Example:
        >>> raise ValidationError("File is empty", path="empty.bin")
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict | None = None,
        reason: str | None = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, ctx)
        self.path = path
        self.reason = reason


class DumpIOError(HxdError):
    """Exception raised when reading fails in the middle of a dump.

    Rows written before the failure stay written; the dump is not retried.
    """

    def __init__(self, message: str, path: str | None = None, context: dict | None = None):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, ctx)
        self.path = path
