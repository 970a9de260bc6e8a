"""Logging setup for the CLI.

Library modules only create module-level loggers; handlers are installed
once here when the CLI starts.
"""

import logging

from rich.logging import RichHandler

from freshbox.utils.formatting import err_console

_HANDLER_NAME = "freshbox-rich"


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route log records to the stderr console through Rich.

    Args:
        verbose: Show DEBUG records.
        quiet: Only show ERROR records. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
