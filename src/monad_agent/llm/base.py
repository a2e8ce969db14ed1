"""Provider-neutral message, tool and response types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolDefinition:
    """A tool the model may ask to call, described by a JSON schema."""

    name: str
    description: str
    parameters: dict[str, Any]


@dataclass
class ToolCall:
    """A structured tool invocation requested by the model."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class LLMMessage:
    """One conversation entry.

    ``role`` is one of ``system``, ``user``, ``assistant`` or ``tool``.
    Assistant messages may carry ``tool_calls`` (dicts with ``id``, ``name``
    and ``arguments``); tool messages reference their call via
    ``tool_call_id``.
    """

    role: str
    content: str = ""
    tool_calls: list[dict[str, Any]] | None = None
    tool_call_id: str | None = None


@dataclass
class LLMResponse:
    content: str = ""
    tool_calls: list[ToolCall] | None = None
    usage: dict[str, int] | None = None
    stop_reason: str | None = None


class BaseLLMProvider(ABC):
    """A hosted model that accepts messages plus a tool catalog."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @abstractmethod
    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[ToolDefinition] | None = None,
    ) -> LLMResponse:
        """Return either text or tool calls for the conversation so far."""
