"""Init command implementation.

Creates a default freshbox.toml plus empty package list and export files.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from freshbox.core.config import ConfigError, config_to_dict, save_config
from freshbox.core.paths import ensure_config_dir, get_config_path, resolve_path
from freshbox.models.config import (
    AptStepConfig,
    ProvisionConfig,
    ToolchainStepConfig,
    default_config,
)
from freshbox.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Create a default provisioning config.",
    invoke_without_command=True,
)


def _companion_files(config: ProvisionConfig) -> list[str]:
    """List the package list and export files the config refers to."""
    files = [
        step.packages_file
        for step in config.steps
        if isinstance(step, AptStepConfig | ToolchainStepConfig)
    ]
    files.append(config.exports.source)
    return files


def _create_companion_files(config: ProvisionConfig, base_dir: Path) -> list[Path]:
    """Create empty companion files next to the config if they don't exist.

    Args:
        config: Config naming the files.
        base_dir: Directory relative names resolve against.

    Returns:
        Paths of the files that were created.
    """
    created: list[Path] = []
    for name in _companion_files(config):
        path = resolve_path(name, base_dir)
        if path.exists():
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        created.append(path)
    return created


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the config (default: ~/.config/freshbox/freshbox.toml).",
            dir_okay=False,
        ),
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option(
            "--repository",
            "-r",
            help="Git remote of your dotfiles.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Print the config instead of writing it.",
        ),
    ] = False,
) -> None:
    """Create a default provisioning config.

    The default config updates apt, installs the packages listed in
    `apt_apps`, installs oh-my-zsh, installs the crates listed in
    `cargo_apps` and syncs the `exports` file into ~/.zshrc and ~/.bashrc.
    Empty list files are created next to the config.

    Examples:
        freshbox init --dry-run                              # Preview
        freshbox init -r https://github.com/me/dotfiles     # With dotfiles
    """
    if ctx.invoked_subcommand is not None:
        return

    config = default_config()
    if repository:
        config.dotfiles.repository = repository

    if dry_run:
        console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)
        return

    if output is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
    path = (output or get_config_path()).expanduser().absolute()

    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        save_config(config, path)
        created = _create_companion_files(config, path.parent)
    except (ConfigError, OSError) as e:
        print_error(f"Failed to write config: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {path}")
    for companion in created:
        print_info(f"Created {companion}")
    if not config.dotfiles.repository:
        print_warning("No dotfiles repository set; the dotfiles phase will be skipped.")
