"""CLI commands for freshbox.

This package contains all subcommand implementations.
"""

from freshbox.cli.commands import dotfiles, exports, init, packages, run

__all__ = ["dotfiles", "exports", "init", "packages", "run"]
