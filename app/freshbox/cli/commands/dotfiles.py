"""Dotfiles command implementation.

Clones the configured dotfiles repository and places it in the home
directory.
"""

import typer

from freshbox.cli.display import print_report
from freshbox.cli.types import ConfigOption, DryRunOption, build_provisioner

app = typer.Typer(
    help="Deploy dotfiles only.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def deploy_dotfiles(
    ctx: typer.Context,
    config: ConfigOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Deploy dotfiles only.

    Clones the repository into a staging directory and copies every entry
    into the home directory, skipping version-control metadata.
    """
    if ctx.invoked_subcommand is not None:
        return

    provisioner = build_provisioner(config, dry_run)
    report = provisioner.run(packages=False, dotfiles=True, exports=False)
    print_report(report)

    if not report.success:
        raise typer.Exit(code=report.exit_code)
