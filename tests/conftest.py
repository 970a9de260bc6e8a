"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Home directory with existing (empty) .zshrc and .bashrc."""
    home = tmp_path / "home"
    home.mkdir()
    (home / ".zshrc").write_text("")
    (home / ".bashrc").write_text("")
    return home


@pytest.fixture
def rc_targets(home_dir: Path) -> dict[str, Path]:
    """Target mapping for the two standard shell startup files."""
    return {"zshrc": home_dir / ".zshrc", "bashrc": home_dir / ".bashrc"}


@pytest.fixture
def canonical_exports() -> str:
    """Sample canonical export file content."""
    return """# exports shared by every shell
export EDITOR=nvim
export PATH="$HOME/.cargo/bin:$PATH"

alias ll='ls -la'
export GOPATH="$HOME/go"
"""


@pytest.fixture
def config_dir(tmp_path: Path, canonical_exports: str) -> Path:
    """Directory with a config file, package lists and an export file."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "apt_apps").write_text("git\n\n  curl  \nzsh\n")
    (directory / "cargo_apps").write_text("ripgrep\nbat\n")
    (directory / "exports").write_text(canonical_exports)
    (directory / "freshbox.toml").write_text(
        """[[steps]]
kind = "script"
label = "Update apt"
command = ["sudo", "apt-get", "update"]

[[steps]]
kind = "apt"
label = "Install apt apps"
packages_file = "apt_apps"

[[steps]]
kind = "toolchain"
label = "Install cargo apps"
packages_file = "cargo_apps"

[dotfiles]
enabled = false

[exports]
source = "exports"

[exports.targets]
zshrc = "~/.zshrc"
bashrc = "~/.bashrc"
"""
    )
    return directory
