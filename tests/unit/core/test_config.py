"""Unit tests for config file I/O."""

from pathlib import Path

import pytest
import typer
from freshbox.core.config import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    config_to_dict,
    load_config,
    require_config,
    save_config,
)
from freshbox.models.config import DotfilesConfig, ProvisionConfig, default_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_valid_config(self, config_dir: Path) -> None:
        """A valid TOML file is loaded into a ProvisionConfig."""
        config = load_config(config_dir / "freshbox.toml")

        assert [s.label for s in config.steps] == [
            "Update apt",
            "Install apt apps",
            "Install cargo apps",
        ]
        assert config.dotfiles.enabled is False
        assert config.exports.targets == {"zshrc": "~/.zshrc", "bashrc": "~/.bashrc"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "freshbox.toml"
        path.write_text("[[steps]\nkind = ")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigValidationError."""
        path = tmp_path / "freshbox.toml"
        path.write_text('[[steps]]\nkind = "apt"\nlabel = "apt"\n')

        with pytest.raises(ConfigValidationError):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = default_config()
        path = tmp_path / "nested" / "freshbox.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config
        assert not list(path.parent.glob("*.tmp"))

    def test_repository_round_trip(self, tmp_path: Path) -> None:
        """An explicit repository survives a save/load cycle."""
        config = ProvisionConfig(
            dotfiles=DotfilesConfig(repository="https://example.com/dotfiles.git")
        )
        path = tmp_path / "freshbox.toml"

        save_config(config, path)

        assert load_config(path).dotfiles.repository == "https://example.com/dotfiles.git"


class TestConfigToDict:
    """Tests for config_to_dict."""

    def test_unset_repository_is_omitted(self) -> None:
        """TOML has no null, so None values are dropped."""
        data = config_to_dict(default_config())

        assert "repository" not in data["dotfiles"]
        assert data["steps"][0]["kind"] == "script"


class TestRequireConfig:
    """Tests for require_config."""

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        """A missing config exits with code 1."""
        with pytest.raises(typer.Exit) as exc_info:
            require_config(tmp_path / "missing.toml")

        assert exc_info.value.exit_code == 1

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        """An invalid config exits with code 1."""
        path = tmp_path / "freshbox.toml"
        path.write_text("steps = 3\n")

        with pytest.raises(typer.Exit):
            require_config(path)
