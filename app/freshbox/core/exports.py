"""Export sync engine.

Reconciles the canonical list of shell ``export`` lines against each shell
startup file and appends whatever is missing. Targets are independent: a
declaration present in one file has no bearing on another. Running the
sync twice with unchanged inputs appends nothing the second time, because
every line added by the first run is part of the second run's snapshot.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from freshbox.core.rcfile import ConfigUnavailableError, ShellConfigStore
from freshbox.models.exports import (
    CanonicalExportList,
    ExportDeclaration,
    RcFileSnapshot,
    SyncReport,
    TargetSync,
    is_export_declaration,
)

logger = logging.getLogger(__name__)


def load_canonical(path: Path) -> CanonicalExportList:
    """Read the canonical export list.

    Only lines starting with ``export `` are meaningful; every other line
    is ignored.

    Args:
        path: Source-of-truth export file.

    Returns:
        Export declarations in file order.

    Raises:
        ConfigUnavailableError: If the file cannot be opened or read.
    """
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            lines = [line[:-1] if line.endswith("\n") else line for line in f]
    except OSError as e:
        msg = f"Cannot read canonical export file {path}: {e}"
        raise ConfigUnavailableError(msg) from e

    declarations = tuple(line for line in lines if is_export_declaration(line))
    logger.debug("Loaded %d canonical export(s) from %s", len(declarations), path)
    return declarations


def plan_target(
    canonical: CanonicalExportList,
    snapshot: RcFileSnapshot,
) -> tuple[tuple[ExportDeclaration, ...], tuple[ExportDeclaration, ...]]:
    """Split the canonical list into lines to append and lines already present.

    A declaration repeated in the canonical list is appended at most once.

    Args:
        canonical: Canonical declarations, in order.
        snapshot: Snapshot of one target.

    Returns:
        Tuple of (to_add, unchanged), both in canonical order.
    """
    to_add: list[ExportDeclaration] = []
    unchanged: list[ExportDeclaration] = []
    planned: set[ExportDeclaration] = set()

    for declaration in canonical:
        if declaration in snapshot:
            unchanged.append(declaration)
        elif declaration not in planned:
            planned.add(declaration)
            to_add.append(declaration)

    return tuple(to_add), tuple(unchanged)


class ExportSyncEngine:
    """Appends missing canonical exports to shell startup files.

    Attributes:
        dry_run: If True, compute the result without writing.
    """

    def __init__(self, store: ShellConfigStore | None = None, *, dry_run: bool = False) -> None:
        """Initialize the engine.

        Args:
            store: Startup file access. Defaults to a new ShellConfigStore.
            dry_run: If True, compute the result without writing.
        """
        self._store = store or ShellConfigStore()
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if engine is in dry-run mode."""
        return self._dry_run

    def sync(
        self,
        canonical: CanonicalExportList,
        targets: Mapping[str, Path],
    ) -> SyncReport:
        """Append every missing canonical declaration to every target.

        All snapshots are read (and their files closed) before the first
        append, so a missing target aborts the pass without partial writes.

        Args:
            canonical: Canonical declarations, in order.
            targets: Target identifier to startup file path.

        Returns:
            SyncReport with what was added and left unchanged per target.

        Raises:
            TargetMissingError: If a target file does not exist.
            ConfigUnavailableError: If a target cannot be read or appended to.
        """
        snapshots = {name: self._store.read(path) for name, path in targets.items()}

        results: list[TargetSync] = []
        for name, snapshot in snapshots.items():
            to_add, unchanged = plan_target(canonical, snapshot)

            if to_add and not self._dry_run:
                self._store.append(snapshot, to_add)
            elif to_add:
                logger.info(
                    "Dry-run: would append %d export(s) to %s", len(to_add), snapshot.path
                )

            results.append(
                TargetSync(target=name, path=snapshot.path, added=to_add, unchanged=unchanged)
            )

        return SyncReport(targets=tuple(results), dry_run=self._dry_run)

    def sync_file(self, source: Path, targets: Mapping[str, Path]) -> SyncReport:
        """Load the canonical list from a file and sync it into the targets.

        Args:
            source: Canonical export file.
            targets: Target identifier to startup file path.

        Returns:
            SyncReport for the pass.

        Raises:
            ConfigUnavailableError: If the source cannot be read, or a target
                cannot be read or appended to.
            TargetMissingError: If a target file does not exist.
        """
        return self.sync(load_canonical(source), targets)
