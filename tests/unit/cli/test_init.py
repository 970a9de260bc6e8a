"""Unit tests for init command."""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

from freshbox.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestInitCommand:
    """Tests for freshbox init command."""

    def test_init_help(self) -> None:
        """Init command shows help."""
        result = runner.invoke(app, ["init", "--help"])
        assert result.exit_code == 0
        assert "default provisioning config" in result.stdout

    def test_init_dry_run(self, tmp_path: Path) -> None:
        """--dry-run prints the config without writing anything."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = runner.invoke(app, ["init", "--dry-run"])

        assert result.exit_code == 0
        assert "[[steps]]" in result.stdout
        assert 'label = "Install cargo apps"' in result.stdout
        assert not (tmp_path / "freshbox").exists()

    def test_init_writes_config_and_lists(self, tmp_path: Path) -> None:
        """Init writes the config and empty companion files next to it."""
        output = tmp_path / "setup" / "freshbox.toml"

        result = runner.invoke(app, ["init", "--output", str(output)])

        assert result.exit_code == 0
        assert "Config written" in result.stdout
        with open(output, "rb") as f:
            data = tomllib.load(f)
        assert [s["label"] for s in data["steps"]][0] == "Update apt"
        for name in ("apt_apps", "cargo_apps", "exports"):
            assert (output.parent / name).read_text() == ""

    def test_init_keeps_existing_lists(self, tmp_path: Path) -> None:
        """Existing package lists are not truncated."""
        output = tmp_path / "freshbox.toml"
        (tmp_path / "apt_apps").write_text("git\n")

        result = runner.invoke(app, ["init", "-o", str(output)])

        assert result.exit_code == 0
        assert (tmp_path / "apt_apps").read_text() == "git\n"

    def test_init_default_location(self, tmp_path: Path) -> None:
        """Without --output the config goes to the XDG config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (tmp_path / "freshbox" / "freshbox.toml").exists()

    def test_init_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """An existing config is kept unless --force is given."""
        output = tmp_path / "freshbox.toml"
        output.write_text("# mine\n")

        result = runner.invoke(app, ["init", "-o", str(output)])

        assert result.exit_code == 1
        assert output.read_text() == "# mine\n"

    def test_init_force_overwrites(self, tmp_path: Path) -> None:
        """--force replaces an existing config."""
        output = tmp_path / "freshbox.toml"
        output.write_text("# mine\n")

        result = runner.invoke(app, ["init", "-o", str(output), "--force"])

        assert result.exit_code == 0
        assert "[[steps]]" in output.read_text()

    def test_init_with_repository(self, tmp_path: Path) -> None:
        """--repository is stored in the dotfiles section."""
        output = tmp_path / "freshbox.toml"

        result = runner.invoke(
            app, ["init", "-o", str(output), "-r", "https://example.com/dotfiles.git"]
        )

        assert result.exit_code == 0
        with open(output, "rb") as f:
            data = tomllib.load(f)
        assert data["dotfiles"]["repository"] == "https://example.com/dotfiles.git"
