"""Top-level provisioning run.

Runs the phases in order: install steps, dotfiles, shell exports. Each
phase catches its own failures and turns them into an outcome, so a
broken phase never keeps a later one from running and the caller always
gets a complete report. Nothing here exits the process.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from freshbox.core.exports import ExportSyncEngine
from freshbox.core.paths import get_home_dir, get_staging_dir, resolve_path
from freshbox.core.pipeline import PipelineReport, ProvisioningPipeline
from freshbox.core.rcfile import ExportSyncError
from freshbox.dotfiles.deployer import DeployResult, DotfileDeployer, DotfilesError
from freshbox.models.config import ProvisionConfig
from freshbox.models.exports import SyncReport
from freshbox.models.step import StepOutcome, step_failed, step_skipped, step_succeeded

logger = logging.getLogger(__name__)

PACKAGES_LABEL = "Install steps"
DOTFILES_LABEL = "Dotfiles"
EXPORTS_LABEL = "Shell exports"


@dataclass(frozen=True, slots=True)
class ProvisionReport:
    """Everything one provisioning run did.

    Attributes:
        steps: Install step outcomes, in order.
        phases: Outcomes of the dotfiles and export phases that were run.
        deploy: Dotfiles deployment details, if the phase ran successfully.
        sync: Export sync details, if the phase ran successfully.
    """

    steps: tuple[StepOutcome, ...] = field(default=())
    phases: tuple[StepOutcome, ...] = field(default=())
    deploy: DeployResult | None = None
    sync: SyncReport | None = None

    @property
    def outcomes(self) -> list[StepOutcome]:
        """Every step and phase outcome, in run order."""
        return [*self.steps, *self.phases]

    @property
    def failures(self) -> list[StepOutcome]:
        """Outcomes that failed fully or partially."""
        return [o for o in self.outcomes if o.failed]

    @property
    def success(self) -> bool:
        """Check if nothing failed."""
        return not self.failures

    @property
    def exit_code(self) -> int:
        """Process exit code for this run."""
        return 0 if self.success else 1


class Provisioner:
    """Runs the provisioning phases described by a config.

    Attributes:
        dry_run: If True, no command is run and no file is written.
    """

    def __init__(
        self,
        config: ProvisionConfig,
        base_dir: Path,
        *,
        dry_run: bool = False,
        home: Path | None = None,
        staging: Path | None = None,
        on_step_start: Callable[[str], None] | None = None,
        on_step_finish: Callable[[StepOutcome], None] | None = None,
        on_phase_start: Callable[[str], None] | None = None,
        on_phase_finish: Callable[[StepOutcome], None] | None = None,
    ) -> None:
        """Initialize the provisioner.

        Args:
            config: Validated provisioning config.
            base_dir: Directory relative config paths resolve against.
            dry_run: If True, no command is run and no file is written.
            home: Home directory for dotfiles and ``~`` in paths.
            staging: Scratch directory for the dotfiles clone.
            on_step_start: Called with an install step's label before it runs.
            on_step_finish: Called with each install step's outcome.
            on_phase_start: Called with a phase label before the phase runs.
            on_phase_finish: Called with the dotfiles and export phase outcomes.
        """
        self._config = config
        self._base_dir = base_dir
        self._dry_run = dry_run
        self._home = home or get_home_dir()
        self._staging = staging or get_staging_dir()
        self._on_step_start = on_step_start
        self._on_step_finish = on_step_finish
        self._on_phase_start = on_phase_start
        self._on_phase_finish = on_phase_finish

    @property
    def dry_run(self) -> bool:
        """Check if provisioner is in dry-run mode."""
        return self._dry_run

    def export_targets(self) -> dict[str, Path]:
        """Resolve the configured shell startup files."""
        return {
            name: resolve_path(path, self._base_dir, self._home)
            for name, path in self._config.exports.targets.items()
        }

    def run_packages(self) -> PipelineReport:
        """Run every configured install step."""
        pipeline = ProvisioningPipeline(
            dry_run=self._dry_run,
            on_start=self._on_step_start,
            on_finish=self._on_step_finish,
        )
        return pipeline.run_configured(self._config.steps, self._base_dir)

    def run_dotfiles(self) -> tuple[StepOutcome, DeployResult | None]:
        """Deploy the configured dotfiles repository into the home directory.

        Returns:
            Tuple of (phase outcome, deployment details or None).
        """
        settings = self._config.dotfiles
        if not settings.enabled:
            return step_skipped(DOTFILES_LABEL, "Disabled in config"), None
        if not settings.repository:
            return step_skipped(DOTFILES_LABEL, "No repository configured"), None

        deployer = DotfileDeployer(dry_run=self._dry_run)
        try:
            result = deployer.deploy(
                settings.repository,
                destination=self._home,
                staging=self._staging,
                skip=settings.skip,
            )
        except DotfilesError as e:
            logger.warning("Dotfiles deployment failed: %s", e)
            return step_failed(DOTFILES_LABEL, str(e)), None

        if result.dry_run:
            message = f"Dry-run: would deploy {settings.repository}"
        else:
            message = (
                f"Placed {len(result.copied_files)} file(s) and created "
                f"{len(result.created_dirs)} director(ies) from {settings.repository}"
            )
        return step_succeeded(DOTFILES_LABEL, message), result

    def run_exports(self) -> tuple[StepOutcome, SyncReport | None]:
        """Sync the canonical exports into every configured startup file.

        Returns:
            Tuple of (phase outcome, sync details or None).
        """
        settings = self._config.exports
        if not settings.enabled:
            return step_skipped(EXPORTS_LABEL, "Disabled in config"), None

        source = resolve_path(settings.source, self._base_dir, self._home)
        engine = ExportSyncEngine(dry_run=self._dry_run)
        try:
            report = engine.sync_file(source, self.export_targets())
        except ExportSyncError as e:
            logger.warning("Export sync failed: %s", e)
            return step_failed(EXPORTS_LABEL, str(e)), None

        verb = "Would add" if report.dry_run else "Added"
        message = f"{verb} {report.total_added} export(s) across {len(report.targets)} file(s)"
        return step_succeeded(EXPORTS_LABEL, message), report

    def run(
        self,
        *,
        packages: bool = True,
        dotfiles: bool = True,
        exports: bool = True,
    ) -> ProvisionReport:
        """Run the selected phases in order.

        Args:
            packages: Run the install steps.
            dotfiles: Run the dotfiles deployment.
            exports: Run the export sync.

        Returns:
            ProvisionReport covering every phase that ran.
        """
        steps: tuple[StepOutcome, ...] = ()
        phases: list[StepOutcome] = []
        deploy: DeployResult | None = None
        sync: SyncReport | None = None

        if packages:
            self._phase_started(PACKAGES_LABEL)
            steps = self.run_packages().outcomes

        if dotfiles:
            self._phase_started(DOTFILES_LABEL)
            outcome, deploy = self.run_dotfiles()
            self._phase_finished(outcome)
            phases.append(outcome)

        if exports:
            self._phase_started(EXPORTS_LABEL)
            outcome, sync = self.run_exports()
            self._phase_finished(outcome)
            phases.append(outcome)

        report = ProvisionReport(steps=steps, phases=tuple(phases), deploy=deploy, sync=sync)
        logger.info(
            "Provisioning finished: %d outcome(s), %d failure(s)",
            len(report.outcomes),
            len(report.failures),
        )
        return report

    def _phase_started(self, label: str) -> None:
        if self._on_phase_start is not None:
            self._on_phase_start(label)

    def _phase_finished(self, outcome: StepOutcome) -> None:
        if self._on_phase_finish is not None:
            self._on_phase_finish(outcome)
