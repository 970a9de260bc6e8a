"""Exports command implementation.

Appends missing canonical exports to each configured shell startup file.
"""

import typer

from freshbox.cli.display import print_report
from freshbox.cli.types import ConfigOption, DryRunOption, build_provisioner

app = typer.Typer(
    help="Sync shell exports only.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def sync_exports(
    ctx: typer.Context,
    config: ConfigOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Sync shell exports only.

    Every `export` line of the canonical export file that a startup file
    does not already contain is appended to it. Existing lines are never
    changed, so running this again adds nothing.

    Startup files must already exist; a missing one fails the sync.

    Examples:
        freshbox exports --dry-run      # Show what would be appended
    """
    if ctx.invoked_subcommand is not None:
        return

    provisioner = build_provisioner(config, dry_run)
    report = provisioner.run(packages=False, dotfiles=False, exports=True)
    print_report(report)

    if not report.success:
        raise typer.Exit(code=report.exit_code)
