"""Configuration management for hxd.

Settings are merged from several sources, highest priority first:

1. CLI arguments
2. Environment variables
3. Configuration file
4. Default values

Example usage::

    from hxd.config import load_config

    config = load_config(cli_args={"chunk_size": 32})
    print(config.dump.chunk_size)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hxd.config.env import (
    ENV_ASCII,
    ENV_CHUNK_SIZE,
    ENV_CONFIG_PATH,
    ENV_LOG_LEVEL,
    get_config_path_from_env,
    get_env_overrides,
)
from hxd.config.loader import ConfigLoader, get_default_config_content
from hxd.config.schema import DumpSettings, HxdConfig, LogLevel
from hxd.core.exceptions import ConfigError

__all__ = [
    # Schema classes
    "DumpSettings",
    "HxdConfig",
    "LogLevel",
    # Loader
    "ConfigLoader",
    "get_default_config_content",
    # Environment variables
    "ENV_ASCII",
    "ENV_CHUNK_SIZE",
    "ENV_CONFIG_PATH",
    "ENV_LOG_LEVEL",
    "get_env_overrides",
    # Priority handling
    "ConfigPriority",
    "LoadedConfig",
    "load_config",
]


class ConfigPriority(str, Enum):
    """Configuration source priority levels.

    Higher priority sources override lower priority ones.
    """

    DEFAULT = "default"
    CONFIG_FILE = "config_file"
    ENVIRONMENT = "environment"
    CLI = "cli"


class LoadedConfig(HxdConfig):
    """An HxdConfig that remembers where each value came from."""

    config_file: Path | None = None
    sources: dict[str, ConfigPriority] = {}

    def source_of(self, key: str) -> ConfigPriority:
        """Return the source of a dotted key such as ``"dump.chunk_size"``."""
        return self.sources.get(key, ConfigPriority.DEFAULT)


def _merge_configs(
    base: dict[str, Any],
    override: dict[str, Any],
    source: ConfigPriority,
) -> tuple[dict[str, Any], dict[str, ConfigPriority]]:
    """Recursively merge configuration dictionaries.

    Args:
        base: The base configuration dictionary.
        override: The overriding configuration dictionary.
        source: The priority source for the override values.

    Returns:
        A tuple of (merged_config, sources_dict) where sources_dict
        tracks which priority each key came from.
    """
    result = base.copy()
    sources: dict[str, ConfigPriority] = {}

    for key, value in override.items():
        if value is None:
            continue

        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            merged, nested_sources = _merge_configs(result[key], value, source)
            result[key] = merged
            for nested_key, nested_source in nested_sources.items():
                sources[f"{key}.{nested_key}"] = nested_source
        else:
            result[key] = value
            sources[key] = source

    return result, sources


def _normalize_cli_args(cli_args: dict[str, Any]) -> dict[str, Any]:
    """Normalize flat CLI argument names into the nested config structure."""
    result: dict[str, Any] = {"dump": {}}

    mappings = {
        "chunk_size": ("dump", "chunk_size"),
        "bytes": ("dump", "chunk_size"),
        "show_ascii": ("dump", "show_ascii"),
        "ascii": ("dump", "show_ascii"),
    }

    for arg_name, value in cli_args.items():
        if value is None:
            continue

        if arg_name in mappings:
            section, key = mappings[arg_name]
            result[section][key] = value
        else:
            result[arg_name] = value

    return {k: v for k, v in result.items() if v}


def load_config(
    config_path: Path | str | None = None,
    cli_args: dict[str, Any] | None = None,
    use_env: bool = True,
    use_file: bool = True,
) -> LoadedConfig:
    """Load configuration with proper priority handling.

    Args:
        config_path: Optional explicit path to a config file. Falls back to
            ``HXD_CONFIG_PATH``, then to discovery.
        cli_args: Optional dictionary of CLI argument overrides.
        use_env: Whether to apply environment variable overrides.
        use_file: Whether to look for and load config files.

    Returns:
        A fully merged configuration.

    Raises:
        ConfigError: If a config file cannot be parsed or the merged
            configuration is invalid.
    """
    config_dict: dict[str, Any] = HxdConfig.model_validate({}).model_dump(mode="json")
    sources: dict[str, ConfigPriority] = {}
    file_path: Path | None = None

    if use_file:
        loader = ConfigLoader()
        explicit = config_path or (get_config_path_from_env() if use_env else None)
        file_path = Path(explicit) if explicit else loader.find_config_file()
        if file_path:
            config_dict, file_sources = _merge_configs(
                config_dict, loader.load_dict(file_path), ConfigPriority.CONFIG_FILE
            )
            sources.update(file_sources)

    if use_env:
        env_overrides = get_env_overrides()
        if env_overrides:
            config_dict, env_sources = _merge_configs(
                config_dict, env_overrides, ConfigPriority.ENVIRONMENT
            )
            sources.update(env_sources)

    if cli_args:
        config_dict, cli_sources = _merge_configs(
            config_dict, _normalize_cli_args(cli_args), ConfigPriority.CLI
        )
        sources.update(cli_sources)

    try:
        return LoadedConfig.model_validate(
            {**config_dict, "config_file": file_path, "sources": sources}
        )
    except PydanticValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"])
        origin = sources.get(key, ConfigPriority.DEFAULT).value
        raise ConfigError(
            f"Invalid value for {key}: {error['msg']}",
            config_key=key,
            context={"source": origin},
        ) from e
