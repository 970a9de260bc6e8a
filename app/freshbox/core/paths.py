"""XDG-compliant path management for freshbox.

This module provides standardized paths following the XDG Base Directory
Specification, plus the locations the provisioning phases work with.

XDG defaults:
- Config: ~/.config/freshbox/
"""

import os
import tempfile
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "freshbox"

CONFIG_FILE_NAME = "freshbox.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/freshbox/ (or XDG_CONFIG_HOME/freshbox/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default provisioning config file path.

    Returns:
        Path to ~/.config/freshbox/freshbox.toml.
    """
    return get_config_dir() / CONFIG_FILE_NAME


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/freshbox/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_staging_dir() -> Path:
    """Get the staging directory dotfiles are cloned into.

    Returns:
        Path to <system temp dir>/freshbox.
    """
    return Path(tempfile.gettempdir()) / APP_NAME


def get_home_dir() -> Path:
    """Get the home directory dotfiles and shell exports are written to.

    Honors $HOME so tests and sudo-less runs can redirect it.

    Returns:
        Path to the user's home directory.
    """
    return Path.home()


def resolve_path(value: str | Path, base_dir: Path, home: Path | None = None) -> Path:
    """Resolve a configured path.

    ``~`` expands to the home directory; relative paths are taken relative
    to ``base_dir`` (normally the directory holding the config file).

    Args:
        value: Path as written in the configuration.
        base_dir: Directory relative paths are anchored to.
        home: Directory ``~`` stands for. Defaults to the user's home.

    Returns:
        Absolute path.
    """
    text = str(value)
    if home is not None and (text == "~" or text.startswith("~/")):
        path = home / text[2:]
    else:
        path = Path(text).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
