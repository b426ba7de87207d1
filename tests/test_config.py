"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from purge_deps.config import PurgeConfig, parse_bool
from purge_deps.errors import ConfigurationError
from purge_deps.finalizer import DEFAULT_CACHE_COMMANDS


class TestParseBool:
    """Tests for boolean parsing helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("YES", True),
            ("on", True),
            ("1", True),
            ("false", False),
            ("no", False),
            ("off", False),
            ("random", False),
            ("", False),
            (1, True),
            (0, False),
        ],
    )
    def test_parse_bool_values(self, value: bool | str | int, expected: bool) -> None:
        """Test parsing various boolean representations."""
        assert parse_bool(value, not expected) is expected

    def test_parse_bool_none_uses_default(self) -> None:
        """Test that None returns the default value."""
        assert parse_bool(None, True) is True
        assert parse_bool(None, False) is False


class TestPurgeConfigDefaults:
    """Tests for default configuration values."""

    def test_default_values(self) -> None:
        """Test that defaults are sensible."""
        config = PurgeConfig()

        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.tasks_disabled == []
        assert config.clear_caches is True
        assert config.cache_commands == [list(c) for c in DEFAULT_CACHE_COMMANDS]

    def test_defaults_not_shared(self) -> None:
        """Mutable defaults are per instance."""
        first = PurgeConfig()
        first.tasks_disabled.append("npm")
        first.cache_commands.clear()

        second = PurgeConfig()
        assert second.tasks_disabled == []
        assert len(second.cache_commands) == len(DEFAULT_CACHE_COMMANDS)

    def test_default_config_path(self) -> None:
        """The default file lives under ~/.config."""
        assert PurgeConfig.get_config_path() == Path.home() / ".config/purge-deps/config.yaml"


class TestPurgeConfigLoad:
    """Tests for reading YAML configuration."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A config path that does not exist yields defaults."""
        assert PurgeConfig.load(tmp_path / "absent.yaml") == PurgeConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """An empty YAML document yields defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        assert PurgeConfig.load(config_path) == PurgeConfig()

    def test_load_all_fields(self, tmp_path: Path) -> None:
        """Every supported key is read."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "log_level": "debug",
                    "log_file": "~/logs/purge.log",
                    "tasks_disabled": ["cargo", "dotnet"],
                    "clear_caches": "no",
                    "cache_commands": ["go clean -cache", ["npm", "cache", "clean", "--force"]],
                }
            )
        )

        config = PurgeConfig.load(config_path)

        assert config.log_level == "DEBUG"
        assert config.log_file == Path.home() / "logs/purge.log"
        assert config.tasks_disabled == ["cargo", "dotnet"]
        assert config.clear_caches is False
        assert config.cache_commands == [
            ["go", "clean", "-cache"],
            ["npm", "cache", "clean", "--force"],
        ]

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path) -> None:
        """Keys absent from the file keep their defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("tasks_disabled: [npm]\n")

        config = PurgeConfig.load(config_path)

        assert config.tasks_disabled == ["npm"]
        assert config.clear_caches is True
        assert config.log_level == "INFO"

    @pytest.mark.parametrize(
        "content",
        [
            "- just\n- a list\n",
            "tasks_disabled: npm\n",
            "cache_commands: go clean\n",
            "cache_commands: [[]]\n",
            "cache_commands: [42]\n",
            "log_level: [unclosed\n",
        ],
    )
    def test_malformed_file_raises(self, tmp_path: Path, content: str) -> None:
        """Structurally invalid files are configuration errors."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(content)

        with pytest.raises(ConfigurationError):
            PurgeConfig.load(config_path)


class TestPurgeConfigSave:
    """Tests for writing configuration."""

    def test_save_creates_parent_and_reloads(self, tmp_path: Path) -> None:
        """A saved config loads back with the same values."""
        config_path = tmp_path / "nested" / "config.yaml"
        config = PurgeConfig(
            log_level="WARNING",
            log_file=tmp_path / "purge.log",
            tasks_disabled=["composer"],
            clear_caches=False,
            cache_commands=[["composer", "clear-cache"]],
        )

        config.save(config_path)

        assert PurgeConfig.load(config_path) == config

    def test_save_writes_null_log_file(self, tmp_path: Path) -> None:
        """An unset log file is written as null."""
        config_path = tmp_path / "config.yaml"

        PurgeConfig().save(config_path)

        data = yaml.safe_load(config_path.read_text())
        assert data["log_file"] is None
