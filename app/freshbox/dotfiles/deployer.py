"""Dotfiles deployment.

Clones a dotfiles repository into a staging directory and mirrors it into
the home directory, preserving the directory structure and skipping
version-control metadata.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from freshbox.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

DEFAULT_SKIP: tuple[str, ...] = (".git",)


class DotfilesError(Exception):
    """Raised when dotfiles cannot be fetched or placed."""


@dataclass(frozen=True, slots=True)
class DeployResult:
    """Result of a dotfiles deployment.

    Attributes:
        repository: Remote that was cloned.
        destination: Directory the tree was mirrored into.
        created_dirs: Directories created under the destination.
        copied_files: Files written under the destination.
        dry_run: Whether this was a dry-run (nothing fetched or copied).
    """

    repository: str
    destination: Path
    created_dirs: tuple[Path, ...] = field(default=())
    copied_files: tuple[Path, ...] = field(default=())
    dry_run: bool = False


def _copy_entry(src: Path, dst: Path) -> None:
    """Copy a file or symlink over any non-directory entry at the destination.

    A real directory at the destination is left alone and the copy fails.
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    if dst.is_symlink():
        dst.unlink()
    elif dst.is_dir():
        # shutil.copy2 would silently copy into the directory
        raise IsADirectoryError(errno.EISDIR, "Refusing to replace a directory", str(dst))
    elif src.is_symlink() and dst.exists():
        dst.unlink()
    shutil.copy2(src, dst, follow_symlinks=False)


def mirror_tree(
    source: Path,
    destination: Path,
    skip: Iterable[str] = DEFAULT_SKIP,
) -> tuple[list[Path], list[Path]]:
    """Copy every entry of ``source`` into ``destination``.

    Existing files are overwritten; nothing is deleted from the destination.
    Symlinks are copied as links.

    Args:
        source: Directory to copy from.
        destination: Directory to copy into.
        skip: Path segments that are never copied.

    Returns:
        Tuple of (created directories, copied files).

    Raises:
        OSError: If a directory cannot be created or a file cannot be copied.
    """
    skipped = set(skip)
    created: list[Path] = []
    copied: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(source):
        current = Path(dirpath)
        # Prune in place so os.walk never descends into skipped directories
        dirnames[:] = sorted(d for d in dirnames if d not in skipped)

        for dirname in dirnames:
            src = current / dirname
            dst = destination / src.relative_to(source)
            if src.is_symlink():
                # os.walk does not follow links; place the link itself
                _copy_entry(src, dst)
                copied.append(dst)
            elif not dst.is_dir():
                dst.mkdir(parents=True, exist_ok=True)
                created.append(dst)
                logger.debug("Created directory %s", dst)

        for filename in sorted(filenames):
            if filename in skipped:
                continue
            src = current / filename
            dst = destination / src.relative_to(source)
            _copy_entry(src, dst)
            copied.append(dst)
            logger.debug("Copied %s to %s", src, dst)

    return created, copied


class DotfileDeployer:
    """Fetches a dotfiles repository and places it in a directory.

    Attributes:
        dry_run: If True, only report what would be done.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the DotfileDeployer.

        Args:
            dry_run: If True, nothing is cloned or copied.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if deployer is in dry-run mode."""
        return self._dry_run

    def deploy(
        self,
        repository: str,
        destination: Path,
        staging: Path,
        skip: Iterable[str] = DEFAULT_SKIP,
    ) -> DeployResult:
        """Clone ``repository`` into ``staging`` and mirror it into ``destination``.

        Args:
            repository: Git remote of the dotfiles.
            destination: Directory to place the files in (usually $HOME).
            staging: Scratch directory for the clone; recreated on every run.
            skip: Path segments that are never copied.

        Returns:
            DeployResult describing what was placed.

        Raises:
            DotfilesError: If the clone fails or a file cannot be placed.
        """
        if self._dry_run:
            logger.info(
                "Dry-run: would clone %s into %s and copy it to %s",
                repository,
                staging,
                destination,
            )
            return DeployResult(repository=repository, destination=destination, dry_run=True)

        self._fetch(repository, staging)

        try:
            created, copied = mirror_tree(staging, destination, skip)
        except OSError as e:
            msg = f"Failed to place dotfiles in {destination}: {e}"
            raise DotfilesError(msg) from e

        logger.info("Placed %d file(s) from %s in %s", len(copied), repository, destination)
        return DeployResult(
            repository=repository,
            destination=destination,
            created_dirs=tuple(created),
            copied_files=tuple(copied),
        )

    def _fetch(self, repository: str, staging: Path) -> None:
        """Clone the repository into a fresh staging directory.

        Raises:
            DotfilesError: If git is missing or the clone fails.
        """
        if not command_exists("git"):
            msg = "git is not available on this system"
            raise DotfilesError(msg)

        try:
            if staging.exists():
                shutil.rmtree(staging)
            staging.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot prepare staging directory {staging}: {e}"
            raise DotfilesError(msg) from e

        logger.info("Cloning %s into %s", repository, staging)
        try:
            result = run_command(["git", "clone", repository, str(staging)])
        except OSError as e:
            msg = f"Cannot run git: {e}"
            raise DotfilesError(msg) from e

        if not result.success:
            msg = f"Failed to clone {repository}: {result.describe_failure('git clone failed')}"
            raise DotfilesError(msg)
