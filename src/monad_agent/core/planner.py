"""Deciding which tool, if any, to run next."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from monad_agent.llm.base import BaseLLMProvider, LLMMessage, ToolDefinition

logger = logging.getLogger("monad_agent.planner")


@dataclass
class ToolInvocation:
    """Run ``name`` with ``arguments`` next."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    call_id: str = ""
    content: str = ""  # text the model sent alongside the call
    dropped: list[str] = field(default_factory=list)  # names of extra calls not taken


@dataclass
class FinalText:
    """The conversation is finished; ``text`` is the answer."""

    text: str


PlanStep = Union[ToolInvocation, FinalText]


class Planner(Protocol):
    async def plan(
        self,
        conversation: list[LLMMessage],
        catalog: list[ToolDefinition],
    ) -> PlanStep: ...


class LLMPlanner:
    """Asks a hosted model for the next step.

    The system prompt is prepended on every call and is not part of the
    conversation. When the model requests several tool calls in one turn only
    the first is taken; the rest are reported in ``ToolInvocation.dropped``.
    """

    def __init__(self, provider: BaseLLMProvider, system_prompt: str = ""):
        self.provider = provider
        self.system_prompt = system_prompt

    async def plan(
        self,
        conversation: list[LLMMessage],
        catalog: list[ToolDefinition],
    ) -> PlanStep:
        messages = list(conversation)
        if self.system_prompt:
            messages.insert(0, LLMMessage(role="system", content=self.system_prompt))

        response = await self.provider.complete(messages=messages, tools=catalog)
        if not response.tool_calls:
            return FinalText(text=response.content)

        first, *rest = response.tool_calls
        return ToolInvocation(
            name=first.name,
            arguments=first.arguments or {},
            call_id=first.id,
            content=response.content,
            dropped=[tc.name for tc in rest],
        )
