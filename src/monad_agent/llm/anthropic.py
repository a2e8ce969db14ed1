"""Anthropic Messages API provider."""

from __future__ import annotations

import logging

import anthropic

from monad_agent.llm.base import (
    BaseLLMProvider,
    LLMMessage,
    LLMResponse,
    ToolCall,
    ToolDefinition,
)

logger = logging.getLogger("monad_agent.llm.anthropic")


class AnthropicProvider(BaseLLMProvider):
    """Plans tool calls with :class:`anthropic.AsyncAnthropic`."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        client_kwargs: dict = {"api_key": self.api_key, "timeout": self.timeout}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        self._client = anthropic.AsyncAnthropic(**client_kwargs)

    @staticmethod
    def _split_system(messages: list[LLMMessage]) -> tuple[str | None, list[LLMMessage]]:
        """Anthropic takes the system prompt as a top-level parameter."""
        system = [m.content for m in messages if m.role == "system"]
        rest = [m for m in messages if m.role != "system"]
        return ("\n".join(system) if system else None), rest

    @staticmethod
    def _convert_messages(messages: list[LLMMessage]) -> list[dict]:
        """Tool calls become ``tool_use`` blocks; tool results are user turns."""
        converted: list[dict] = []
        for msg in messages:
            if msg.role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": msg.tool_call_id or "",
                    "content": msg.content,
                }
                converted.append({"role": "user", "content": [block]})
            elif msg.role == "assistant" and msg.tool_calls:
                blocks: list[dict] = []
                if msg.content:
                    blocks.append({"type": "text", "text": msg.content})
                for call in msg.tool_calls:
                    blocks.append(
                        {
                            "type": "tool_use",
                            "id": call.get("id", ""),
                            "name": call.get("name", ""),
                            "input": call.get("arguments") or {},
                        }
                    )
                converted.append({"role": "assistant", "content": blocks})
            else:
                converted.append({"role": msg.role, "content": msg.content})
        return converted

    @staticmethod
    def _convert_tools(tools: list[ToolDefinition]) -> list[dict]:
        return [
            {"name": t.name, "description": t.description, "input_schema": t.parameters}
            for t in tools
        ]

    @staticmethod
    def _parse_response(response) -> LLMResponse:
        text: list[str] = []
        calls: list[ToolCall] = []
        for block in response.content:
            if block.type == "text":
                text.append(block.text)
            elif block.type == "tool_use":
                arguments = block.input if isinstance(block.input, dict) else {}
                calls.append(ToolCall(id=block.id, name=block.name, arguments=arguments))

        usage = None
        if response.usage:
            usage = {
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            }

        return LLMResponse(
            content="\n".join(text),
            tool_calls=calls or None,
            usage=usage,
            stop_reason=response.stop_reason,
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[ToolDefinition] | None = None,
    ) -> LLMResponse:
        system, rest = self._split_system(messages)
        kwargs: dict = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": self._convert_messages(rest),
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = self._convert_tools(tools)

        try:
            response = await self._client.messages.create(**kwargs)
        except Exception as exc:
            logger.error("Anthropic API call failed: %s", exc)
            raise

        return self._parse_response(response)
