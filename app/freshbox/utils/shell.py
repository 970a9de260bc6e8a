"""Subprocess helpers for the install steps and the dotfiles clone.

Commands are run from an argument list, never through an implicit shell,
and without a timeout: a package install takes as long as it takes.
"""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured result of one finished command.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0

    @property
    def last_error_line(self) -> str | None:
        """Last non-blank stderr line, usually the most specific message."""
        for line in reversed(self.stderr.splitlines()):
            if line.strip():
                return line.strip()
        return None

    def describe_failure(self, fallback: str) -> str:
        """Summarize a failed run as exit status plus the stderr cause.

        Args:
            fallback: Text used when the command wrote nothing to stderr.
        """
        return f"exit status {self.returncode}: {self.last_error_line or fallback}"


def format_command(args: Sequence[str]) -> str:
    """Render an argument list the way it would be typed in a shell."""
    return shlex.join(args)


def run_command(args: Sequence[str]) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit is reported through the result, not raised.
    Undecodable output bytes are replaced rather than failing the step.

    Args:
        args: Executable followed by its arguments.

    Returns:
        CommandResult of the finished command.

    Raises:
        FileNotFoundError: If the executable does not exist.
        OSError: If the command cannot be started.
    """
    command = list(args)
    logger.debug("Running: %s", format_command(command))

    completed = subprocess.run(
        command,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )
    if completed.stderr.strip():
        logger.debug("%s stderr:\n%s", command[0], completed.stderr.rstrip())

    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None
