"""Command handlers exposed to the planner.

Importing this package registers every handler with the global
:class:`ToolRegistry`.
"""

from monad_agent.tools import batch, help, market_tools, wallet_tools  # noqa: F401
from monad_agent.tools.registry import Operation, Tool, ToolRegistry, tool

__all__ = ["Operation", "Tool", "ToolRegistry", "tool"]
