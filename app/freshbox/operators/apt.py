"""APT install operator.

Installs a whole package list with one apt-get invocation.
"""

import logging

from freshbox.models.step import AptStep, StepOutcome, step_failed, step_succeeded
from freshbox.utils.shell import command_exists, format_command, run_command

logger = logging.getLogger(__name__)


class AptOperator:
    """Operator for apt-get package lists.

    apt-get aggregates per-package failures into a single exit code, so the
    step is treated as atomic: one non-zero exit fails the entire step and
    no package is retried on its own. Requires sudo privileges.

    Attributes:
        dry_run: If True, only log the command that would run.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def is_available(self) -> bool:
        """Check if apt-get is available."""
        return command_exists("apt-get")

    def build_command(self, packages: tuple[str, ...]) -> list[str]:
        """Build the unattended apt-get install command for a package list."""
        return ["sudo", "apt-get", "install", "-y", *packages]

    def run(self, step: AptStep) -> StepOutcome:
        """Install every package of the step in one apt-get call.

        Args:
            step: The apt step to run.

        Returns:
            StepOutcome for the whole step.

        Raises:
            RuntimeError: If apt-get is not available.
            OSError: If the command cannot be started.
        """
        if not step.packages:
            return step_succeeded(step.label, "No packages to install")

        args = self.build_command(step.packages)

        if self.dry_run:
            logger.info("Dry-run: would run %s", format_command(args))
            return step_succeeded(
                step.label, f"Dry-run: would install {len(step.packages)} package(s)"
            )

        if not self.is_available():
            msg = "APT package manager is not available on this system"
            raise RuntimeError(msg)

        logger.info(
            "Installing %d apt package(s): %s", len(step.packages), ", ".join(step.packages)
        )
        result = run_command(args)

        if result.success:
            return step_succeeded(step.label, f"Installed {len(step.packages)} package(s)")

        return step_failed(step.label, result.describe_failure("apt-get install failed"))
