"""Configuration management for purge-deps."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .finalizer import DEFAULT_CACHE_COMMANDS

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


def parse_bool(value: Any, default: bool) -> bool:
    """Interpret a YAML scalar as a boolean.

    Args:
        value: Raw value from the config file.
        default: Returned when ``value`` is None.

    Returns:
        Parsed boolean.

    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


@dataclass
class PurgeConfig:
    """Configuration for a purge run."""

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    # Catalog task names to skip even when their tool is installed
    tasks_disabled: list[str] = field(default_factory=list)

    # Global cache clearing after a successful non-dry run
    clear_caches: bool = True
    cache_commands: list[list[str]] = field(
        default_factory=lambda: [list(command) for command in DEFAULT_CACHE_COMMANDS]
    )

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default configuration file path."""
        return Path.home() / ".config/purge-deps/config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> PurgeConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Uses default if None.

        Returns:
            Loaded configuration, or defaults when the file does not exist.

        Raises:
            ConfigurationError: If the file cannot be read or is malformed.

        """
        if config_path is None:
            config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"failed to read config {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"config {config_path} must be a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> PurgeConfig:
        """Create config from dictionary."""
        config = cls()

        if "log_level" in data:
            config.log_level = str(data["log_level"]).upper()
        if data.get("log_file"):
            config.log_file = Path(os.path.expanduser(data["log_file"]))

        if "tasks_disabled" in data:
            disabled = data["tasks_disabled"] or []
            if not isinstance(disabled, list):
                raise ConfigurationError("tasks_disabled must be a list of task names")
            config.tasks_disabled = [str(name) for name in disabled]

        if "clear_caches" in data:
            config.clear_caches = parse_bool(data["clear_caches"], config.clear_caches)

        if "cache_commands" in data:
            commands = data["cache_commands"] or []
            if not isinstance(commands, list):
                raise ConfigurationError("cache_commands must be a list of commands")
            config.cache_commands = [cls._parse_command(command) for command in commands]

        return config

    @staticmethod
    def _parse_command(command: Any) -> list[str]:
        """Accept either an argv list or a whitespace-separated string."""
        if isinstance(command, str):
            argv = command.split()
        elif isinstance(command, list):
            argv = [str(part) for part in command]
        else:
            raise ConfigurationError(f"invalid cache command: {command!r}")

        if not argv:
            raise ConfigurationError("cache command must not be empty")
        return argv

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Uses default if None.

        """
        if config_path is None:
            config_path = self.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
            "tasks_disabled": list(self.tasks_disabled),
            "clear_caches": self.clear_caches,
            "cache_commands": [list(command) for command in self.cache_commands],
        }

        with config_path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
