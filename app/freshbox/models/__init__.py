"""Data models for freshbox.

This module exports the core data structures used throughout the application.
"""

from freshbox.models.config import (
    AptStepConfig,
    DotfilesConfig,
    ExportsConfig,
    ProvisionConfig,
    ScriptStepConfig,
    ToolchainStepConfig,
    default_config,
)
from freshbox.models.exports import (
    CanonicalExportList,
    ExportDeclaration,
    RcFileSnapshot,
    SyncReport,
    TargetSync,
)
from freshbox.models.step import (
    AptStep,
    InstallStep,
    ScriptStep,
    StepOutcome,
    StepStatus,
    ToolchainStep,
)

__all__ = [
    "AptStep",
    "AptStepConfig",
    "CanonicalExportList",
    "DotfilesConfig",
    "ExportDeclaration",
    "ExportsConfig",
    "InstallStep",
    "ProvisionConfig",
    "RcFileSnapshot",
    "ScriptStep",
    "ScriptStepConfig",
    "StepOutcome",
    "StepStatus",
    "SyncReport",
    "TargetSync",
    "ToolchainStep",
    "ToolchainStepConfig",
    "default_config",
]
