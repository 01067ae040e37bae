"""Adapters — bindings to the external toolchain.

Public re-exports for convenient access.
"""

from xtask.adapters.base import Adapter, ExecutionContext
from xtask.adapters.mock import MockAdapter
from xtask.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
