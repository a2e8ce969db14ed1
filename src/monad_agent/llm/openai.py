"""OpenAI chat-completions provider."""

from __future__ import annotations

import json
import logging

import openai

from monad_agent.llm.base import (
    BaseLLMProvider,
    LLMMessage,
    LLMResponse,
    ToolCall,
    ToolDefinition,
)

logger = logging.getLogger("monad_agent.llm.openai")


class OpenAIProvider(BaseLLMProvider):
    """Plans tool calls with the OpenAI Chat Completions API.

    ``base_url`` is forwarded to :class:`openai.AsyncOpenAI`, so any
    OpenAI-compatible endpoint works as well.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        client_kwargs: dict = {"api_key": self.api_key, "timeout": self.timeout}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        self._client = openai.AsyncOpenAI(**client_kwargs)

    @staticmethod
    def _convert_messages(messages: list[LLMMessage]) -> list[dict]:
        """Map conversation entries onto the chat-completions message shapes."""
        converted: list[dict] = []
        for msg in messages:
            if msg.role == "tool":
                converted.append(
                    {
                        "role": "tool",
                        "tool_call_id": msg.tool_call_id or "",
                        "content": msg.content,
                    }
                )
            elif msg.role == "assistant" and msg.tool_calls:
                converted.append(
                    {
                        "role": "assistant",
                        "content": msg.content or None,
                        "tool_calls": [
                            {
                                "id": call.get("id", ""),
                                "type": "function",
                                "function": {
                                    "name": call.get("name", ""),
                                    "arguments": json.dumps(call.get("arguments") or {}),
                                },
                            }
                            for call in msg.tool_calls
                        ],
                    }
                )
            else:
                converted.append({"role": msg.role, "content": msg.content})
        return converted

    @staticmethod
    def _convert_tools(tools: list[ToolDefinition]) -> list[dict]:
        return [
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": t.parameters,
                },
            }
            for t in tools
        ]

    @staticmethod
    def _parse_response(response) -> LLMResponse:
        choice = response.choices[0]
        message = choice.message

        calls: list[ToolCall] = []
        for tc in message.tool_calls or []:
            try:
                arguments = json.loads(tc.function.arguments or "{}")
            except (json.JSONDecodeError, TypeError):
                logger.warning("Unparseable arguments for tool %s", tc.function.name)
                arguments = {}
            if not isinstance(arguments, dict):
                logger.warning("Non-object arguments for tool %s", tc.function.name)
                arguments = {}
            calls.append(ToolCall(id=tc.id, name=tc.function.name, arguments=arguments))

        usage = None
        if response.usage:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
            }

        return LLMResponse(
            content=message.content or "",
            tool_calls=calls or None,
            usage=usage,
            stop_reason=choice.finish_reason,
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[ToolDefinition] | None = None,
    ) -> LLMResponse:
        kwargs: dict = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": self._convert_messages(messages),
        }
        if tools:
            kwargs["tools"] = self._convert_tools(tools)

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except Exception as exc:
            logger.error("OpenAI API call failed: %s", exc)
            raise

        return self._parse_response(response)
