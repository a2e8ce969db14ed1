"""WalletAgent - runs the plan/execute loop for one request."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from monad_agent.core.planner import FinalText, Planner
from monad_agent.llm.base import LLMMessage
from monad_agent.tools.registry import Operation, ToolRegistry

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

logger = logging.getLogger("monad_agent.agent")

DEFAULT_MAX_ITERATIONS = 10
REDACTED = "***"


@dataclass
class AgentResult:
    response: str
    steps: int = 0
    tool_calls: list[str] = field(default_factory=list)
    conversation: list[LLMMessage] = field(default_factory=list)
    completed: bool = True


class WalletAgent:
    """Alternates between asking the planner and running one tool.

    The loop ends on the first plain-text answer. If ``max_iterations``
    planning rounds pass without one, the request ends with an
    "unable to complete" answer. Planner errors propagate to the caller;
    tool errors never do, since tools always return text.
    """

    def __init__(
        self,
        planner: Planner,
        registry: ToolRegistry | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.planner = planner
        self.registry = registry if registry is not None else ToolRegistry.get()
        self.max_iterations = max_iterations

    async def run(
        self,
        user_input: str,
        session: SessionContext,
        private_key: str | None = None,
    ) -> AgentResult:
        conversation: list[LLMMessage] = []
        result = AgentResult(response="", conversation=conversation)

        if private_key:
            await self._connect_wallet(private_key, session, conversation, result)
        conversation.append(LLMMessage(role="user", content=user_input))

        catalog = self.registry.definitions()
        for _ in range(self.max_iterations):
            step = await self.planner.plan(conversation, catalog)
            result.steps += 1

            if isinstance(step, FinalText):
                reply = step.text or "(no response)"
                conversation.append(LLMMessage(role="assistant", content=reply))
                result.response = reply
                return result

            if step.dropped:
                logger.warning(
                    "Model requested %d extra tool call(s) %s; only %s runs",
                    len(step.dropped), step.dropped, step.name,
                )

            call_id = step.call_id or f"call_{uuid.uuid4().hex[:12]}"
            recorded = step.arguments if isinstance(step.arguments, dict) else {}
            conversation.append(LLMMessage(
                role="assistant",
                content=step.content,
                tool_calls=[{"id": call_id, "name": step.name, "arguments": recorded}],
            ))
            output = await self._execute_tool(step.name, step.arguments, session)
            result.tool_calls.append(step.name)
            conversation.append(LLMMessage(role="tool", content=output, tool_call_id=call_id))

        logger.warning("Gave up after %d planning rounds", self.max_iterations)
        result.completed = False
        result.response = f"Unable to complete the request within {self.max_iterations} steps."
        return result

    async def _execute_tool(self, name: str, arguments: Any, session: SessionContext) -> str:
        if not isinstance(arguments, dict):
            logger.warning("Tool %s called with %s arguments", name, type(arguments).__name__)
            return f"Error: Invalid arguments for '{name}', expected an object"
        shown = {k: (REDACTED if k == "privateKey" else v) for k, v in arguments.items()}
        logger.info("calling tool: %s(%s)", name, shown)
        tool = self.registry.get_tool(name)
        if tool is None:
            return f"Error: Unknown tool '{name}'"
        return await tool.execute(session, arguments)

    async def _connect_wallet(
        self,
        private_key: str,
        session: SessionContext,
        conversation: list[LLMMessage],
        result: AgentResult,
    ) -> None:
        """Run ``setWallet`` directly and record it with the key redacted."""
        name = Operation.SET_WALLET.value
        call_id = f"call_{uuid.uuid4().hex[:12]}"
        output = await self._execute_tool(name, {"privateKey": private_key}, session)
        result.tool_calls.append(name)
        conversation.append(LLMMessage(role="user", content=f"{name} {REDACTED}"))
        conversation.append(LLMMessage(
            role="assistant",
            tool_calls=[{"id": call_id, "name": name, "arguments": {"privateKey": REDACTED}}],
        ))
        conversation.append(LLMMessage(role="tool", content=output, tool_call_id=call_id))
