"""Dotfiles deployment from a git remote."""

from freshbox.dotfiles.deployer import DeployResult, DotfileDeployer, DotfilesError

__all__ = ["DeployResult", "DotfileDeployer", "DotfilesError"]
