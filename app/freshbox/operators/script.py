"""Script operator.

Runs a single external command, such as a remote installer script.
"""

import logging

from freshbox.models.step import ScriptStep, StepOutcome, step_failed, step_succeeded
from freshbox.utils.shell import format_command, run_command

logger = logging.getLogger(__name__)


class ScriptOperator:
    """Operator for one-shot commands without a package list.

    Attributes:
        dry_run: If True, only log the command that would run.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def run(self, step: ScriptStep) -> StepOutcome:
        """Run the step's command.

        Args:
            step: The script step to run.

        Returns:
            StepOutcome of the single invocation.

        Raises:
            OSError: If the command cannot be started.
        """
        args = list(step.command)

        if self.dry_run:
            logger.info("Dry-run: would run %s", format_command(args))
            return step_succeeded(step.label, "Dry-run: would run command")

        logger.info("Running %s", format_command(args))
        result = run_command(args)

        if result.success:
            return step_succeeded(step.label, "Command completed")

        return step_failed(step.label, result.describe_failure(f"{args[0]} failed"))
