"""Configuration schema definitions using Pydantic Settings.

This module defines the persistent settings of hxd with validation,
defaults, and documentation. Per-invocation values (the file, offset and
limit) are not settings; they are combined with these settings by
``HxdConfig.to_dump_config``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hxd.core.models import DEFAULT_CHUNK_SIZE, DumpConfig

TRUE_VALUES = {"on", "true", "1", "yes", "enabled"}
FALSE_VALUES = {"off", "false", "0", "no", "disabled"}


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class DumpSettings(BaseModel):
    """Settings for dump rendering."""

    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        ge=1,
        description="Bytes per row",
    )
    show_ascii: bool = Field(
        default=True,
        description="Whether to render the ASCII panel",
    )

    @field_validator("show_ascii", mode="before")
    @classmethod
    def parse_switch(cls, v: Any) -> Any:
        """Accept on/off style switches in addition to booleans."""
        if isinstance(v, str):
            value = v.strip().lower()
            if value in TRUE_VALUES:
                return True
            if value in FALSE_VALUES:
                return False
            raise ValueError("show_ascii must be one of: on, off")
        return v


class HxdConfig(BaseSettings):
    """Main configuration for hxd.

    Can be loaded from environment variables, config files, or
    constructed programmatically.
    """

    model_config = SettingsConfigDict(
        env_prefix="HXD_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    dump: DumpSettings = Field(
        default_factory=DumpSettings,
        description="Dump rendering settings",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> LogLevel:
        """Validate and normalize log level."""
        if v is None:
            return LogLevel.WARNING
        if isinstance(v, LogLevel):
            return v
        v = str(v).lower()
        try:
            return LogLevel(v)
        except ValueError:
            valid = ", ".join(level.value for level in LogLevel)
            raise ValueError(f"log_level must be one of: {valid}")

    def to_dump_config(self, file_path: Path, offset: int = 0, limit: int = 0) -> DumpConfig:
        """Build the DumpConfig for one invocation.

        Args:
            file_path: File to dump.
            offset: First byte to display.
            limit: Number of bytes to display (0 for until end of file).
        """
        return DumpConfig(
            file_path=file_path,
            chunk_size=self.dump.chunk_size,
            show_ascii=self.dump.show_ascii,
            offset=offset,
            limit=limit,
        )
