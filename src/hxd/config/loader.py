"""Configuration file loading and discovery.

This module handles finding and loading configuration files from various
locations and formats (YAML, TOML, JSON).
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from hxd.core.exceptions import ConfigError

if TYPE_CHECKING:
    from hxd.config.schema import HxdConfig

# Config file names to search for (in order of preference)
CONFIG_FILE_NAMES = [
    ".hxd.yml",
    ".hxd.yaml",
    ".hxd.toml",
    "hxd.config.json",
    ".hxdrc",
]

# User-level config directories
USER_CONFIG_DIRS = [
    Path.home() / ".config" / "hxd",
    Path.home() / ".hxd",
]


class ConfigLoader:
    """Loads and parses configuration files.

    Handles automatic discovery of config files in project directories
    and user-level config directories. Supports YAML, TOML, and JSON
    formats.
    """

    def __init__(self, search_paths: list[Path] | None = None, include_user_dirs: bool = True) -> None:
        """Initialize the config loader.

        Args:
            search_paths: Additional paths to search for config files.
            include_user_dirs: Whether to search ~/.config/hxd and ~/.hxd.
        """
        self.search_paths = search_paths or []
        self.include_user_dirs = include_user_dirs

    def find_config_file(self, start_path: Path | None = None) -> Path | None:
        """Find a configuration file by searching standard locations.

        Searches in the following order:
        1. The start_path directory (or cwd if not specified)
        2. Parent directories up to the root
        3. User config directories (~/.config/hxd, ~/.hxd)
        4. Any additional search_paths

        Args:
            start_path: Directory to start searching from.

        Returns:
            Path to the config file if found, None otherwise.
        """
        search_dirs: list[Path] = []

        start = Path(start_path).resolve() if start_path else Path.cwd()

        current = start
        while current != current.parent:
            search_dirs.append(current)
            current = current.parent
        search_dirs.append(current)

        if self.include_user_dirs:
            search_dirs.extend(USER_CONFIG_DIRS)
        search_dirs.extend(self.search_paths)

        for search_dir in search_dirs:
            if not search_dir.exists():
                continue

            for config_name in CONFIG_FILE_NAMES:
                config_path = search_dir / config_name
                if config_path.is_file():
                    return config_path

        return None

    def load(self, path: Path | str) -> HxdConfig:
        """Load configuration from a file.

        Args:
            path: Path to the configuration file.

        Returns:
            An HxdConfig instance.

        Raises:
            ConfigError: If the file cannot be loaded or parsed.
        """
        return self._parse_config(self.load_dict(path), Path(path))

    def load_dict(self, path: Path | str) -> dict[str, Any]:
        """Load a configuration file into a plain dictionary.

        Only the keys present in the file are returned, so the result can be
        layered over other sources.

        Raises:
            ConfigError: If the file is missing or cannot be parsed.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigError(f"Configuration path is not a file: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

        return self._load_content(content, path)

    def _load_content(self, content: str, path: Path) -> dict[str, Any]:
        suffix = path.suffix.lower()

        if suffix in (".yml", ".yaml"):
            return self._load_yaml(content, path)
        elif suffix == ".toml":
            return self._load_toml(content, path)
        elif suffix == ".json":
            return self._load_json(content, path)
        elif path.name.startswith(".hxdrc"):
            return self._load_auto_detect(content, path)
        else:
            return self._load_json(content, path)

    def _load_yaml(self, content: str, path: Path) -> dict[str, Any]:
        """Load YAML content.

        Raises:
            ConfigError: If YAML parsing fails or the document is not a mapping.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping, got: {type(data).__name__}")
        return data

    def _load_toml(self, content: str, path: Path) -> dict[str, Any]:
        """Load TOML content.

        Raises:
            ConfigError: If TOML parsing fails.
        """
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    def _load_json(self, content: str, path: Path) -> dict[str, Any]:
        """Load JSON content.

        Raises:
            ConfigError: If JSON parsing fails or the document is not an object.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain an object, got: {type(data).__name__}")
        return data

    def _load_auto_detect(self, content: str, path: Path) -> dict[str, Any]:
        """Auto-detect format and load content.

        JSON is tried for content starting with ``{``; otherwise YAML, then
        TOML.

        Raises:
            ConfigError: If no format parses the content.
        """
        content = content.strip()

        if content.startswith("{"):
            return self._load_json(content, path)

        errors: list[str] = []
        for loader in (self._load_yaml, self._load_toml):
            try:
                return loader(content, path)
            except ConfigError as e:
                errors.append(e.message)

        raise ConfigError(
            f"Could not detect format of {path}. Ensure it is valid YAML, TOML, or JSON.",
            context={"errors": errors},
        )

    def _parse_config(self, data: dict[str, Any], path: Path) -> HxdConfig:
        """Parse configuration dictionary into HxdConfig.

        Raises:
            ConfigError: If validation fails.
        """
        from hxd.config.schema import HxdConfig

        try:
            return HxdConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def get_default_config_content(format: str = "yaml") -> str:
    """Generate default configuration file content.

    Args:
        format: Output format ('yaml', 'toml', or 'json').

    Returns:
        Configuration file content as a string.
    """
    if format == "yaml":
        return _get_yaml_config()
    elif format == "toml":
        return _get_toml_config()
    elif format == "json":
        return _get_json_config()
    else:
        raise ValueError(f"Unknown format: {format}")


def _get_yaml_config() -> str:
    return '''# hxd configuration

# Dump settings
dump:
  # Bytes per row
  chunk_size: 16

  # Show the ASCII panel (on/off)
  show_ascii: true

# Logging level (debug, info, warning, error, critical)
log_level: warning
'''


def _get_toml_config() -> str:
    return '''# hxd configuration

# Logging level (debug, info, warning, error, critical)
log_level = "warning"

[dump]
# Bytes per row
chunk_size = 16

# Show the ASCII panel (on/off)
show_ascii = true
'''


def _get_json_config() -> str:
    config = {
        "dump": {
            "chunk_size": 16,
            "show_ascii": True,
        },
        "log_level": "warning",
    }

    return json.dumps(config, indent=2)
