"""Shared option types and helpers for CLI commands.

This module provides the options and setup code common to the
provisioning commands to avoid duplicating them per command.
"""

from pathlib import Path
from typing import Annotated

import typer

from freshbox.cli.display import print_phase_start, print_step_outcome, print_step_start
from freshbox.core.config import require_config
from freshbox.core.paths import get_config_path
from freshbox.core.provision import Provisioner

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file to use (default: ~/.config/freshbox/freshbox.toml).",
        dir_okay=False,
    ),
]

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        "-n",
        help="Show what would be done without making changes.",
    ),
]


def build_provisioner(config_path: Path | None, dry_run: bool) -> Provisioner:
    """Load the config and create a provisioner that reports step progress.

    Relative paths in the config resolve against the config file's directory.

    Args:
        config_path: Config file given on the command line, if any.
        dry_run: Whether to run in dry-run mode.

    Returns:
        Configured Provisioner.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    path = (config_path or get_config_path()).expanduser().absolute()
    config = require_config(path)
    return Provisioner(
        config,
        base_dir=path.parent,
        dry_run=dry_run,
        on_step_start=print_step_start,
        on_step_finish=print_step_outcome,
        on_phase_start=print_phase_start,
        on_phase_finish=print_step_outcome,
    )
