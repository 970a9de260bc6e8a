"""Package list loading.

Package lists are plain text files with one package identifier per line.
Blank lines are ignored; there is no comment syntax.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):
    """Raised when a package list cannot be opened or read."""


def parse_package_list(text: str) -> list[str]:
    """Split package list text into package names.

    Args:
        text: Raw file content.

    Returns:
        Trimmed, non-empty package names in file order.
    """
    return [name for name in (line.strip() for line in text.splitlines()) if name]


def load_package_list(path: Path) -> list[str]:
    """Load a newline-delimited package list.

    Args:
        path: Package list file.

    Returns:
        Trimmed, non-empty package names in file order.

    Raises:
        SourceUnavailableError: If the file cannot be opened or read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read package list {path}: {e}"
        raise SourceUnavailableError(msg) from e

    packages = parse_package_list(text)
    logger.debug("Loaded %d package(s) from %s", len(packages), path)
    return packages
