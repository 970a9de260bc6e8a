"""Packages command implementation.

Runs only the configured install steps.
"""

import typer

from freshbox.cli.display import print_report
from freshbox.cli.types import ConfigOption, DryRunOption, build_provisioner

app = typer.Typer(
    help="Run the install steps only.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def install_packages(
    ctx: typer.Context,
    config: ConfigOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Run the install steps only.

    Steps run in config order. A failing step is reported and the
    remaining steps still run.

    Examples:
        freshbox packages --dry-run     # Show the commands that would run
    """
    if ctx.invoked_subcommand is not None:
        return

    provisioner = build_provisioner(config, dry_run)
    report = provisioner.run(packages=True, dotfiles=False, exports=False)
    print_report(report)

    if not report.success:
        raise typer.Exit(code=report.exit_code)
