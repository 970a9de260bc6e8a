"""CLI package for freshbox.

This package contains the Typer application and all subcommands.
"""

from freshbox.cli.main import app

__all__ = ["app"]
