"""Environment variable mapping for hxd configuration.

This module defines the environment variables that can be used to
configure hxd and provides utilities for reading them. Values are passed
through as strings and validated by the settings schema.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

# Environment variable names
ENV_CONFIG_PATH = "HXD_CONFIG_PATH"
ENV_CHUNK_SIZE = "HXD_CHUNK_SIZE"
ENV_ASCII = "HXD_ASCII"
ENV_LOG_LEVEL = "HXD_LOG_LEVEL"


def get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables.

    Returns:
        Dictionary of configuration values from environment variables.
    """
    overrides: dict[str, Any] = {"dump": {}}

    if ENV_CHUNK_SIZE in os.environ:
        overrides["dump"]["chunk_size"] = os.environ[ENV_CHUNK_SIZE].strip()

    if ENV_ASCII in os.environ:
        overrides["dump"]["show_ascii"] = os.environ[ENV_ASCII]

    if ENV_LOG_LEVEL in os.environ:
        overrides["log_level"] = os.environ[ENV_LOG_LEVEL].lower()

    # Clean up empty sections
    return {k: v for k, v in overrides.items() if v}


def get_config_path_from_env() -> Path | None:
    """Get the config file path from environment variable.

    Returns:
        Path to config file if set, None otherwise.
    """
    if ENV_CONFIG_PATH in os.environ:
        return Path(os.environ[ENV_CONFIG_PATH])
    return None


def get_env_var_docs() -> dict[str, str]:
    """Get documentation for all environment variables."""
    return {
        ENV_CONFIG_PATH: "Path to configuration file",
        ENV_CHUNK_SIZE: "Bytes per row",
        ENV_ASCII: "Whether to show the ASCII panel (on/off)",
        ENV_LOG_LEVEL: "Logging level (debug, info, warning, error, critical)",
    }
