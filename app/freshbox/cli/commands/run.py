"""Run command implementation.

Provisions the machine in one invocation: install steps, then dotfiles,
then shell exports.
"""

from typing import Annotated

import typer

from freshbox.cli.display import print_report
from freshbox.cli.types import ConfigOption, DryRunOption, build_provisioner
from freshbox.utils.formatting import print_title

app = typer.Typer(
    help="Provision this machine.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_all(
    ctx: typer.Context,
    config: ConfigOption = None,
    dry_run: DryRunOption = False,
    skip_packages: Annotated[
        bool,
        typer.Option("--skip-packages", help="Do not run the install steps."),
    ] = False,
    skip_dotfiles: Annotated[
        bool,
        typer.Option("--skip-dotfiles", help="Do not deploy dotfiles."),
    ] = False,
    skip_exports: Annotated[
        bool,
        typer.Option("--skip-exports", help="Do not sync shell exports."),
    ] = False,
) -> None:
    """Provision this machine.

    Runs every configured install step in order, deploys the dotfiles
    repository into the home directory and appends missing canonical
    exports to each shell startup file. A failing step or phase is
    reported and the run continues; the exit code is 1 if anything failed.

    Examples:
        freshbox run --dry-run          # Preview everything
        freshbox run --skip-packages    # Only dotfiles and exports
    """
    if ctx.invoked_subcommand is not None:
        return

    provisioner = build_provisioner(config, dry_run)

    print_title("Setting up system (dry run)..." if dry_run else "Setting up system...")

    report = provisioner.run(
        packages=not skip_packages,
        dotfiles=not skip_dotfiles,
        exports=not skip_exports,
    )
    print_report(report)

    if not report.success:
        raise typer.Exit(code=report.exit_code)
