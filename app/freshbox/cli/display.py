"""Shared Rich display functions for steps, exports and run summaries.

Provides reusable table builders and printers used across CLI commands
(run, packages, dotfiles, exports).
"""

from rich.markup import escape
from rich.table import Table

from freshbox.core.provision import ProvisionReport
from freshbox.models.exports import SyncReport
from freshbox.models.step import StepOutcome, StepStatus
from freshbox.utils.formatting import console, print_header

_STATUS_MARKUP: dict[StepStatus, str] = {
    StepStatus.SUCCEEDED: "[success]OK[/success]",
    StepStatus.FAILED: "[error]FAIL[/error]",
    StepStatus.PARTIAL: "[warning]PARTIAL[/warning]",
    StepStatus.SKIPPED: "[muted]SKIP[/muted]",
}


def print_phase_start(label: str) -> None:
    """Print the banner shown before a phase runs."""
    console.print(f"\n[title]{escape(label)}[/title]")


def print_step_start(label: str) -> None:
    """Print the header shown before a step runs."""
    print_header(escape(label))


def print_step_outcome(outcome: StepOutcome) -> None:
    """Print a one-line result for a finished step or phase.

    Args:
        outcome: Outcome to print.
    """
    status = _STATUS_MARKUP[outcome.status]
    label = escape(outcome.label)
    if outcome.failed:
        console.print(f"{status} {label}: {escape(outcome.error or 'Unknown error')}")
        if outcome.failed_packages:
            names = escape(", ".join(outcome.failed_packages))
            console.print(f"  [muted]Failed packages:[/muted] {names}")
    else:
        console.print(f"{status} {label}: [muted]{escape(outcome.message or '')}[/muted]")


def create_sync_table(report: SyncReport) -> Table:
    """Create a Rich table showing what the export sync did per target.

    Added lines are shown in the "added" style, lines already present in
    the "unchanged" style.

    Args:
        report: Export sync report.

    Returns:
        Rich Table configured for export display.
    """
    title = "Shell Exports (Dry Run)" if report.dry_run else "Shell Exports"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Target", style="target", no_wrap=True)
    table.add_column("Status", width=10)
    table.add_column("Export")

    for target in report.targets:
        for line in target.added:
            table.add_row(
                escape(target.target), "[added]+added[/added]", f"[added]{escape(line)}[/added]"
            )
        for line in target.unchanged:
            table.add_row(
                escape(target.target),
                "[unchanged]unchanged[/unchanged]",
                f"[unchanged]{escape(line)}[/unchanged]",
            )

    return table


def create_summary_table(outcomes: list[StepOutcome]) -> Table:
    """Create a Rich table enumerating every step and phase with its outcome.

    Args:
        outcomes: Outcomes in run order.

    Returns:
        Rich Table configured for the run summary.
    """
    table = Table(
        title="Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Step", no_wrap=True)
    table.add_column("Details")

    for outcome in outcomes:
        if outcome.failed:
            details = outcome.error or "Unknown error"
            if outcome.failed_packages:
                details = f"failed: {', '.join(outcome.failed_packages)}"
        else:
            details = outcome.message or ""

        table.add_row(
            _STATUS_MARKUP[outcome.status],
            escape(outcome.label),
            f"[muted]{escape(details)}[/muted]",
        )

    return table


def print_outcomes_summary(outcomes: list[StepOutcome]) -> None:
    """Print the summary table and a closing status line.

    Args:
        outcomes: Outcomes in run order.
    """
    if not outcomes:
        return

    console.print()
    console.print(create_summary_table(outcomes))

    failed = [o for o in outcomes if o.failed]
    succeeded = len(outcomes) - len(failed)
    if failed:
        console.print(
            f"\n[success]{succeeded} succeeded[/success], [error]{len(failed)} failed[/error]"
        )
    else:
        console.print("\n[title]Done![/title]")


def print_report(report: ProvisionReport) -> None:
    """Print the export table (if the sync ran) and the run summary.

    Args:
        report: Report of a provisioning run.
    """
    if report.sync is not None and report.sync.targets:
        console.print()
        console.print(create_sync_table(report.sync))
    print_outcomes_summary(report.outcomes)
