"""Step operators for executing install steps.

This module provides one operator per install step variant (apt,
toolchain, script).
"""

from freshbox.operators.apt import AptOperator
from freshbox.operators.script import ScriptOperator
from freshbox.operators.toolchain import ToolchainOperator

__all__ = ["AptOperator", "ScriptOperator", "ToolchainOperator"]
