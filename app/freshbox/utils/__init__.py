"""Utility modules for freshbox.

This module exports commonly used utility functions.
"""

from freshbox.utils.formatting import (
    console,
    err_console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_title,
    print_warning,
)
from freshbox.utils.shell import CommandResult, command_exists, format_command, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "format_command",
    "print_error",
    "print_header",
    "print_info",
    "print_success",
    "print_title",
    "print_warning",
    "run_command",
]
