"""freshbox - provision a freshly installed machine.

Installs apt and toolchain packages, deploys dotfiles and keeps shell
startup files in sync with a canonical list of exports.
"""

__version__ = "0.1.0"
