"""Install step models.

An install step is one discrete provisioning action. Steps form a closed
set of variants (apt, toolchain, script); each variant carries only the
data it needs and is dispatched by ``freshbox.core.pipeline.run_step``.
"""

from dataclasses import dataclass, field
from enum import Enum


def _validate_packages(label: str, packages: tuple[str, ...]) -> None:
    """Reject package names that are blank or carry surrounding whitespace."""
    for package in packages:
        if not package or package != package.strip():
            msg = f"{label}: invalid package name {package!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class AptStep:
    """Install a package list with a single apt-get invocation.

    Attributes:
        label: Human-readable step name.
        packages: Package names, in list order.
    """

    label: str
    packages: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate step data after initialization."""
        _validate_packages(self.label, self.packages)


@dataclass(frozen=True, slots=True)
class ToolchainStep:
    """Install packages one at a time with a language toolchain installer.

    Attributes:
        label: Human-readable step name.
        packages: Package names, in list order.
        installer: Installer command; the package name is appended per call.
    """

    label: str
    packages: tuple[str, ...]
    installer: tuple[str, ...] = ("cargo", "install")

    def __post_init__(self) -> None:
        """Validate step data after initialization."""
        if not self.installer:
            msg = f"{self.label}: installer command cannot be empty"
            raise ValueError(msg)
        _validate_packages(self.label, self.packages)


@dataclass(frozen=True, slots=True)
class ScriptStep:
    """Run a single external command with no package list.

    Attributes:
        label: Human-readable step name.
        command: Command and arguments.
    """

    label: str
    command: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate step data after initialization."""
        if not self.command:
            msg = f"{self.label}: command cannot be empty"
            raise ValueError(msg)


InstallStep = AptStep | ToolchainStep | ScriptStep


class StepStatus(Enum):
    """Outcome status of a step or phase.

    Attributes:
        SUCCEEDED: Everything the step attempted succeeded.
        FAILED: The step failed as a whole.
        PARTIAL: Some packages of the step failed, others succeeded.
        SKIPPED: The step or phase was not run.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Result of running one step or phase.

    Attributes:
        label: Label of the step or phase that produced this outcome.
        status: Outcome status.
        message: Success message or additional information.
        error: Underlying cause when the step failed.
        failed_packages: Packages that did not install (toolchain steps).
    """

    label: str
    status: StepStatus
    message: str | None = None
    error: str | None = None
    failed_packages: tuple[str, ...] = field(default=())

    @property
    def success(self) -> bool:
        """Check if the step succeeded (or was skipped on purpose)."""
        return self.status in (StepStatus.SUCCEEDED, StepStatus.SKIPPED)

    @property
    def failed(self) -> bool:
        """Check if the step failed, fully or partially."""
        return not self.success


def step_succeeded(label: str, message: str | None = None) -> StepOutcome:
    """Create a success outcome."""
    return StepOutcome(label=label, status=StepStatus.SUCCEEDED, message=message)


def step_skipped(label: str, message: str | None = None) -> StepOutcome:
    """Create an outcome for a step that was not run."""
    return StepOutcome(label=label, status=StepStatus.SKIPPED, message=message)


def step_failed(
    label: str,
    error: str,
    failed_packages: tuple[str, ...] = (),
    partial: bool = False,
) -> StepOutcome:
    """Create a failure outcome.

    Args:
        label: Label of the failed step.
        error: Underlying cause.
        failed_packages: Packages that did not install.
        partial: True if some of the step's packages did install.

    Returns:
        StepOutcome with FAILED or PARTIAL status.
    """
    return StepOutcome(
        label=label,
        status=StepStatus.PARTIAL if partial else StepStatus.FAILED,
        error=error,
        failed_packages=failed_packages,
    )
