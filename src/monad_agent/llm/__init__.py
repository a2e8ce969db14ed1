"""Hosted language-model providers.

A common set of message/tool types plus adapters for the Anthropic and
OpenAI APIs (and any OpenAI-compatible endpoint), selected by name through
:class:`LLMRouter`.
"""

from monad_agent.llm.base import (
    BaseLLMProvider,
    LLMMessage,
    LLMResponse,
    ToolCall,
    ToolDefinition,
)
from monad_agent.llm.router import LLMRouter

__all__ = [
    "BaseLLMProvider",
    "LLMMessage",
    "LLMResponse",
    "LLMRouter",
    "ToolCall",
    "ToolDefinition",
]
