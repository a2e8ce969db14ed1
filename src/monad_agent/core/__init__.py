"""The planner/dispatcher loop."""

from monad_agent.core.agent import AgentResult, WalletAgent
from monad_agent.core.planner import FinalText, LLMPlanner, Planner, PlanStep, ToolInvocation

__all__ = [
    "AgentResult",
    "FinalText",
    "LLMPlanner",
    "PlanStep",
    "Planner",
    "ToolInvocation",
    "WalletAgent",
]
