"""Export declaration models.

An export declaration is a single shell line starting with ``export ``.
Declarations are opaque: two are equal iff their full text is identical.
"""

from dataclasses import dataclass
from pathlib import Path

EXPORT_PREFIX = "export "

# Full line text of an export, without line terminator
ExportDeclaration = str

# Ordered declarations from the source-of-truth file
CanonicalExportList = tuple[ExportDeclaration, ...]


def is_export_declaration(line: str) -> bool:
    """Check if a line (without terminator) declares an export."""
    return line.startswith(EXPORT_PREFIX)


@dataclass(frozen=True, slots=True)
class RcFileSnapshot:
    """Export declarations present in one shell startup file at read time.

    Attributes:
        path: File the snapshot was read from.
        declarations: Set of export lines found in the file.
        ends_with_newline: False if the last line has no terminator.
    """

    path: Path
    declarations: frozenset[ExportDeclaration]
    ends_with_newline: bool = True

    def __contains__(self, declaration: object) -> bool:
        return declaration in self.declarations


@dataclass(frozen=True, slots=True)
class TargetSync:
    """Sync result for a single shell startup file.

    Attributes:
        target: Target identifier (e.g., "zshrc").
        path: Path of the startup file.
        added: Declarations appended, in canonical order.
        unchanged: Declarations that were already present.
    """

    target: str
    path: Path
    added: tuple[ExportDeclaration, ...]
    unchanged: tuple[ExportDeclaration, ...]

    @property
    def changed(self) -> bool:
        """Check if anything was appended to this target."""
        return bool(self.added)


@dataclass(frozen=True, slots=True)
class SyncReport:
    """Result of one export sync pass over all targets.

    Attributes:
        targets: Per-target results, in processing order.
        dry_run: True if nothing was actually written.
    """

    targets: tuple[TargetSync, ...]
    dry_run: bool = False

    @property
    def appended(self) -> dict[str, tuple[ExportDeclaration, ...]]:
        """Lines appended per target identifier."""
        return {t.target: t.added for t in self.targets}

    @property
    def total_added(self) -> int:
        """Total number of lines appended across all targets."""
        return sum(len(t.added) for t in self.targets)
