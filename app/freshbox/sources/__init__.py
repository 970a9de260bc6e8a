"""Input sources for install steps."""

from freshbox.sources.packages import (
    SourceUnavailableError,
    load_package_list,
    parse_package_list,
)

__all__ = ["SourceUnavailableError", "load_package_list", "parse_package_list"]
