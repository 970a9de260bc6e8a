"""Main CLI application entry point.

Defines the Typer application, the global logging options and the
provisioning subcommands.
"""

from typing import Annotated

import typer

from freshbox import __version__
from freshbox.cli.commands import dotfiles, exports, init, packages, run
from freshbox.utils.log import configure_logging

app = typer.Typer(
    name="freshbox",
    help="Provision a freshly installed machine.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"freshbox version {__version__}")
        raise typer.Exit()


VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every command that is run."),
]

QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Only log errors."),
]


@app.callback()
def main(
    version: VersionOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """freshbox - Provision a freshly installed machine.

    Installs apt and toolchain packages, deploys your dotfiles and keeps
    shell startup files in sync with a canonical list of exports.
    """
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be combined")
    configure_logging(verbose=verbose, quiet=quiet)


app.add_typer(init.app, name="init")
app.add_typer(run.app, name="run")
app.add_typer(packages.app, name="packages")
app.add_typer(dotfiles.app, name="dotfiles")
app.add_typer(exports.app, name="exports")


if __name__ == "__main__":
    app()
