"""Language toolchain install operator.

Installs packages with a toolchain installer such as ``cargo install``.
These installers do not take a batch list reliably, so every package gets
its own invocation and its own result.
"""

import logging

from freshbox.models.step import StepOutcome, ToolchainStep, step_failed, step_succeeded
from freshbox.utils.shell import command_exists, format_command, run_command

logger = logging.getLogger(__name__)


class ToolchainOperator:
    """Operator for per-package toolchain installers.

    A failing package never stops the remaining ones from being attempted.
    The step fails if any package failed, and the outcome lists exactly
    the packages that did not install.

    Attributes:
        dry_run: If True, only log the commands that would run.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def is_available(self, step: ToolchainStep) -> bool:
        """Check if the step's installer executable is available."""
        return command_exists(step.installer[0])

    def run(self, step: ToolchainStep) -> StepOutcome:
        """Install each package of the step, one invocation per package.

        Args:
            step: The toolchain step to run.

        Returns:
            StepOutcome aggregating every package's result.

        Raises:
            RuntimeError: If the installer is not available.
        """
        if not step.packages:
            return step_succeeded(step.label, "No packages to install")

        if self.dry_run:
            for package in step.packages:
                logger.info("Dry-run: would run %s", format_command([*step.installer, package]))
            return step_succeeded(
                step.label, f"Dry-run: would install {len(step.packages)} package(s)"
            )

        if not self.is_available(step):
            msg = f"Installer '{step.installer[0]}' is not available on this system"
            raise RuntimeError(msg)

        failures: dict[str, str] = {}
        succeeded = 0
        total = len(step.packages)

        for index, package in enumerate(step.packages, start=1):
            logger.info("[%d/%d] Installing %s", index, total, package)
            error = self._install_single(step, package)
            if error is None:
                succeeded += 1
                logger.info("Installed %s", package)
            else:
                logger.warning("Failed to install %s: %s", package, error)
                failures[package] = error

        if not failures:
            return step_succeeded(step.label, f"Installed {total} package(s)")

        # A list may name a package twice; count invocations, report names once
        details = "; ".join(f"{name}: {error}" for name, error in failures.items())
        return step_failed(
            step.label,
            f"{total - succeeded} of {total} package(s) failed ({details})",
            failed_packages=tuple(failures),
            partial=succeeded > 0,
        )

    def _install_single(self, step: ToolchainStep, package: str) -> str | None:
        """Install one package.

        Args:
            step: Step providing the installer command.
            package: Package to install.

        Returns:
            None on success, otherwise the failure cause.
        """
        args = [*step.installer, package]
        try:
            result = run_command(args)
        except OSError as e:
            return f"cannot run {args[0]}: {e}"

        if result.success:
            return None
        return result.describe_failure(f"{' '.join(step.installer)} failed")
