"""Provisioning pipeline.

Runs install steps strictly in order, one at a time. A failing step is
recorded and the pipeline moves on: ecosystems have no data dependency on
each other, so an apt failure must not keep cargo packages (or the later
dotfiles and export phases) from running. Nothing is retried.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from freshbox.core.paths import resolve_path
from freshbox.models.config import (
    AptStepConfig,
    ScriptStepConfig,
    StepConfig,
    ToolchainStepConfig,
)
from freshbox.models.step import (
    AptStep,
    InstallStep,
    ScriptStep,
    StepOutcome,
    ToolchainStep,
    step_failed,
)
from freshbox.operators.apt import AptOperator
from freshbox.operators.script import ScriptOperator
from freshbox.operators.toolchain import ToolchainOperator
from freshbox.sources.packages import SourceUnavailableError, load_package_list
from freshbox.utils.shell import format_command

logger = logging.getLogger(__name__)


def describe_step(step: InstallStep) -> str:
    """Return a one-line description of what a step will do."""
    match step:
        case AptStep(packages=packages):
            return f"apt-get install {len(packages)} package(s)"
        case ToolchainStep(packages=packages, installer=installer):
            return f"{format_command(installer)} {len(packages)} package(s), one at a time"
        case ScriptStep(command=command):
            return f"run {format_command(command)}"


def run_step(step: InstallStep, dry_run: bool = False) -> StepOutcome:
    """Run one install step with the operator for its variant.

    Args:
        step: Step to run.
        dry_run: If True, only log what would run.

    Returns:
        StepOutcome of the step.

    Raises:
        RuntimeError: If the step's package manager is not available.
        OSError: If a command cannot be started.
    """
    match step:
        case AptStep():
            return AptOperator(dry_run=dry_run).run(step)
        case ToolchainStep():
            return ToolchainOperator(dry_run=dry_run).run(step)
        case ScriptStep():
            return ScriptOperator(dry_run=dry_run).run(step)


def build_step(config: StepConfig, base_dir: Path) -> InstallStep:
    """Create an install step from its configuration.

    Package lists are read here, so a step's list is loaded right before
    the step runs.

    Args:
        config: Step configuration.
        base_dir: Directory relative package list paths resolve against.

    Returns:
        Immutable install step.

    Raises:
        SourceUnavailableError: If the step's package list cannot be read.
    """
    match config:
        case AptStepConfig():
            packages = load_package_list(resolve_path(config.packages_file, base_dir))
            return AptStep(label=config.label, packages=tuple(packages))
        case ToolchainStepConfig():
            packages = load_package_list(resolve_path(config.packages_file, base_dir))
            return ToolchainStep(
                label=config.label,
                packages=tuple(packages),
                installer=tuple(config.installer),
            )
        case ScriptStepConfig():
            return ScriptStep(label=config.label, command=tuple(config.command))


@dataclass(frozen=True, slots=True)
class PipelineReport:
    """Outcomes of one pipeline run, in step order.

    Attributes:
        outcomes: One outcome per configured step.
    """

    outcomes: tuple[StepOutcome, ...]

    @property
    def failures(self) -> list[StepOutcome]:
        """Outcomes of steps that failed fully or partially."""
        return [o for o in self.outcomes if o.failed]

    @property
    def successes(self) -> list[StepOutcome]:
        """Outcomes of steps that succeeded."""
        return [o for o in self.outcomes if o.success]

    @property
    def success(self) -> bool:
        """Check if every step succeeded."""
        return not self.failures


class ProvisioningPipeline:
    """Runs install steps in order, recording each outcome.

    Attributes:
        dry_run: If True, steps only log what they would run.
    """

    def __init__(
        self,
        *,
        dry_run: bool = False,
        on_start: Callable[[str], None] | None = None,
        on_finish: Callable[[StepOutcome], None] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            dry_run: If True, steps only log what they would run.
            on_start: Called with a step's label before it runs.
            on_finish: Called with each outcome as soon as it is known.
        """
        self._dry_run = dry_run
        self._on_start = on_start
        self._on_finish = on_finish

    @property
    def dry_run(self) -> bool:
        """Check if pipeline is in dry-run mode."""
        return self._dry_run

    def run(self, steps: Sequence[InstallStep]) -> PipelineReport:
        """Run already-built steps.

        Args:
            steps: Steps to run, in order.

        Returns:
            PipelineReport with one outcome per step.
        """
        outcomes = [self._execute(step.label, lambda step=step: step) for step in steps]
        return PipelineReport(outcomes=tuple(outcomes))

    def run_configured(self, configs: Sequence[StepConfig], base_dir: Path) -> PipelineReport:
        """Build and run configured steps.

        A step whose package list cannot be read fails on its own; the
        remaining steps still run.

        Args:
            configs: Step configurations, in order.
            base_dir: Directory relative package list paths resolve against.

        Returns:
            PipelineReport with one outcome per configured step.
        """
        outcomes = [
            self._execute(config.label, lambda config=config: build_step(config, base_dir))
            for config in configs
        ]
        return PipelineReport(outcomes=tuple(outcomes))

    def _execute(self, label: str, resolve: Callable[[], InstallStep]) -> StepOutcome:
        """Resolve and run a single step, converting failures into an outcome.

        Args:
            label: Step label, used when the step cannot even be built.
            resolve: Returns the step to run.

        Returns:
            StepOutcome of the step.
        """
        if self._on_start is not None:
            self._on_start(label)

        try:
            step = resolve()
            logger.debug("Running step '%s': %s", label, describe_step(step))
            outcome = run_step(step, dry_run=self._dry_run)
        except (SourceUnavailableError, RuntimeError, OSError) as e:
            outcome = step_failed(label, str(e))

        if outcome.failed:
            logger.warning("Step '%s' failed: %s", label, outcome.error)
        else:
            logger.info("Step '%s' %s", label, outcome.status.value)

        if self._on_finish is not None:
            self._on_finish(outcome)
        return outcome
