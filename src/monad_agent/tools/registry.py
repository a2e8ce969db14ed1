"""Tool registry - the closed catalog of operations the planner can invoke."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from monad_agent.llm.base import ToolDefinition

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

logger = logging.getLogger("monad_agent.tools.registry")


class Operation(str, Enum):
    """Every command the agent knows. Tool names are the enum values."""

    SET_WALLET = "setWallet"
    DISCONNECT_WALLET = "disconnectWallet"
    GET_WALLET_ADDRESS = "getWalletAddress"
    GET_BALANCE = "getBalance"
    TRANSFER_NATIVE = "transferTokens"
    TRANSFER_TOKEN = "transferToken"
    SIGN_MESSAGE = "signMessage"
    GET_TRANSACTION_HISTORY = "getTransactionHistory"
    GET_GAS_PRICE = "getGasPrice"
    GET_TOKEN_PRICE = "getTokenPrice"
    GET_TRENDING_TOKENS = "getTrendingTokens"
    CREATE_TOKEN = "createToken"
    GET_FAUCET_TOKENS = "getFaucetTokens"
    BATCH_TRANSFER = "batchMixedTransfer"
    HELP = "help"


class NoArguments(BaseModel):
    pass


def _schema_for(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for the model's fields, keyed by alias."""
    schema = model.model_json_schema(by_alias=True)
    properties = schema.get("properties", {})
    for prop in properties.values():
        prop.pop("title", None)
    return {
        "type": "object",
        "properties": properties,
        "required": schema.get("required", []),
    }


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "input"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


@dataclass
class Tool:
    operation: Operation
    description: str
    func: Callable[..., Any] | Callable[..., Awaitable[Any]]
    input_model: type[BaseModel] = NoArguments
    is_async: bool = False

    @property
    def name(self) -> str:
        return self.operation.value

    @property
    def parameters(self) -> dict[str, Any]:
        return _schema_for(self.input_model)

    def to_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )

    async def execute(self, session: SessionContext, arguments: dict[str, Any] | None = None) -> str:
        """Validate *arguments* and run the handler. Always returns text."""
        try:
            validated = self.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            return f"Invalid arguments for {self.name}: {_format_validation_error(exc)}"

        kwargs = validated.model_dump()
        try:
            if self.is_async:
                result = await self.func(session, **kwargs)
            else:
                # Blocking RPC calls stay off the event loop
                result = await asyncio.to_thread(self.func, session, **kwargs)
        except Exception as exc:
            logger.exception("Tool %s failed", self.name)
            return f"Tool error: {exc}"

        if isinstance(result, str):
            return result
        return json.dumps(result, default=str)


class ToolRegistry:
    """Global registry mapping operation names to tools."""

    _instance: ToolRegistry | None = None
    _tools: dict[str, Tool]

    def __init__(self):
        self._tools = {}

    @classmethod
    def get(cls) -> ToolRegistry:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_tools(self, names: list[str] | None = None) -> list[Tool]:
        if names is None:
            return list(self._tools.values())
        return [self._tools[n] for n in names if n in self._tools]

    def list_names(self) -> list[str]:
        return list(self._tools.keys())

    def definitions(self) -> list[ToolDefinition]:
        return [t.to_definition() for t in self._tools.values()]

    def missing(self) -> list[Operation]:
        """Operations that have no registered tool."""
        return [op for op in Operation if op.value not in self._tools]


def tool(
    operation: Operation,
    description: str,
    input_model: type[BaseModel] = NoArguments,
):
    """Decorator to register a handler for an operation.

    The handler receives the :class:`SessionContext` first and then the
    validated fields of *input_model* as keyword arguments::

        class SignInput(BaseModel):
            message: str

        @tool(Operation.SIGN_MESSAGE, "Sign a message", SignInput)
        def sign_message(session, message: str) -> str:
            ...
    """

    def decorator(func: Callable) -> Callable:
        ToolRegistry.get().register(
            Tool(
                operation=operation,
                description=description,
                func=func,
                input_model=input_model,
                is_async=inspect.iscoroutinefunction(func),
            )
        )
        return func

    return decorator
