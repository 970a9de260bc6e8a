"""Shell startup file access.

Reads the export declarations already present in a shell startup file
(``~/.bashrc``, ``~/.zshrc``, ...) and appends new ones. Startup files are
only ever appended to: existing content is never rewritten, reordered or
truncated, and missing files are not created.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from freshbox.models.exports import ExportDeclaration, RcFileSnapshot, is_export_declaration

logger = logging.getLogger(__name__)

# Shell files may hold arbitrary bytes; round-trip them untouched
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ExportSyncError(Exception):
    """Base exception for export sync errors."""


class ConfigUnavailableError(ExportSyncError):
    """Raised when the canonical export file or a target cannot be opened."""


class TargetMissingError(ExportSyncError):
    """Raised when a shell startup file does not exist."""


def _strip_terminator(line: str) -> str:
    """Remove the line terminator and nothing else."""
    return line[:-1] if line.endswith("\n") else line


class ShellConfigStore:
    """Reads snapshots of, and appends to, shell startup files."""

    def read(self, path: Path) -> RcFileSnapshot:
        """Read the export declarations present in a startup file.

        A line belongs to the snapshot iff it starts with ``export ``
        (case-sensitive, no trimming beyond the line terminator).
        Identical lines collapse into one member.

        Args:
            path: Startup file to read.

        Returns:
            Immutable snapshot of the file's export declarations.

        Raises:
            TargetMissingError: If the file does not exist.
            ConfigUnavailableError: If the file exists but cannot be read.
        """
        declarations: set[ExportDeclaration] = set()
        ends_with_newline = True

        try:
            with open(path, encoding=_ENCODING, errors=_ERRORS) as f:
                for raw in f:
                    ends_with_newline = raw.endswith("\n")
                    line = _strip_terminator(raw)
                    if is_export_declaration(line):
                        declarations.add(line)
        except FileNotFoundError as e:
            msg = f"Shell startup file not found: {path}"
            raise TargetMissingError(msg) from e
        except OSError as e:
            msg = f"Cannot read {path}: {e}"
            raise ConfigUnavailableError(msg) from e

        logger.debug("Found %d export(s) in %s", len(declarations), path)
        return RcFileSnapshot(
            path=path,
            declarations=frozenset(declarations),
            ends_with_newline=ends_with_newline,
        )

    def append(
        self,
        snapshot: RcFileSnapshot,
        declarations: Iterable[ExportDeclaration],
    ) -> None:
        """Append declarations to the file a snapshot was read from.

        The file is opened for appending once. If its last line has no
        terminator, one is written first so each declaration starts on its
        own line.

        Args:
            snapshot: Snapshot of the target, read earlier in the same pass.
            declarations: Lines to append, without terminators.

        Raises:
            ConfigUnavailableError: If the file cannot be opened or written.
        """
        lines = list(declarations)
        if not lines:
            return

        try:
            with open(snapshot.path, "a", encoding=_ENCODING, errors=_ERRORS) as f:
                if not snapshot.ends_with_newline:
                    f.write("\n")
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            msg = f"Cannot append to {snapshot.path}: {e}"
            raise ConfigUnavailableError(msg) from e

        logger.info("Appended %d export(s) to %s", len(lines), snapshot.path)
