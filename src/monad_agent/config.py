"""Configuration system for Monad Agent.

Settings come either from a YAML file (with ``${VAR}`` placeholders expanded
from the environment) or directly from environment variables. Both paths
produce the same validated :class:`AppConfig`, which is read once at startup.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Environment-variable expansion helper
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with their environment values.

    ``${VAR:-default}`` falls back to *default* when the variable is unset.
    Unset variables without a default expand to an empty string so that
    optional keys simply come out blank.
    """

    def _replace(match: re.Match) -> str:
        name, _, default = match.group(1).partition(":-")
        return os.environ.get(name, default)

    return _ENV_VAR_RE.sub(_replace, value)


def _expand_env_recursive(obj: object) -> object:
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _expand_env_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# Pydantic v2 models
# ---------------------------------------------------------------------------

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant that helps users interact with the Monad Testnet "
    "blockchain. Use the provided tools to assist the user. The wallet private "
    "key persists until the user explicitly disconnects. Format answers in "
    "markdown and include explorer links returned by tools."
)


class LLMProviderConfig(BaseModel):
    """Configuration for a single hosted model provider."""

    api_key: str = ""
    model: str = ""
    base_url: Optional[str] = None  # OpenAI-compatible endpoints
    max_tokens: int = 1024
    temperature: float = 0.0
    timeout_seconds: float = 60.0


class LLMConfig(BaseModel):
    """Which provider plans tool calls, plus the per-provider blocks."""

    default_provider: str = "openai"
    openai: Optional[LLMProviderConfig] = None
    anthropic: Optional[LLMProviderConfig] = None


class NetworkConfig(BaseModel):
    """The single EVM network the agent operates on."""

    name: str = "monad-testnet"
    chain_id: int = 10143
    rpc_url: str = "https://testnet-rpc.monad.xyz"
    native_symbol: str = "MON"
    explorer_url: str = "https://monad-testnet.socialscan.io"
    faucet_url: str = "https://testnet.monad.xyz/"
    rpc_timeout_seconds: float = 30.0
    receipt_timeout_seconds: float = 120.0
    history_block_window: int = 100


class MarketConfig(BaseModel):
    """Market-data API access for price lookups."""

    coingecko_api_key: str = ""
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    request_timeout_seconds: float = 15.0


class AgentLoopConfig(BaseModel):
    """Limits for the plan/execute loop."""

    max_iterations: int = 10
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    """Root configuration object."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)
    agent: AgentLoopConfig = Field(default_factory=AgentLoopConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

CONFIG_ENV_VAR = "MONAD_AGENT_CONFIG"


def load_config(path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file.

    Environment variable placeholders (``${VAR}``) are expanded before
    validation.
    """
    raw_text = path.read_text(encoding="utf-8")
    raw_data = yaml.safe_load(raw_text) or {}
    expanded = _expand_env_recursive(raw_data)
    return AppConfig.model_validate(expanded)


def config_from_env(environ: dict[str, str] | None = None) -> AppConfig:
    """Build the configuration purely from environment variables."""
    env = os.environ if environ is None else environ
    defaults = NetworkConfig()

    llm = LLMConfig(default_provider=env.get("LLM_PROVIDER", "openai"))
    if env.get("OPENAI_API_KEY") or llm.default_provider == "openai":
        llm.openai = LLMProviderConfig(
            api_key=env.get("OPENAI_API_KEY", ""),
            model=env.get("OPENAI_MODEL", "gpt-4o-mini"),
            base_url=env.get("OPENAI_BASE_URL") or None,
        )
    if env.get("ANTHROPIC_API_KEY") or llm.default_provider == "anthropic":
        llm.anthropic = LLMProviderConfig(
            api_key=env.get("ANTHROPIC_API_KEY", ""),
            model=env.get("ANTHROPIC_MODEL", "claude-sonnet-4-5-20250929"),
            base_url=env.get("ANTHROPIC_BASE_URL") or None,
        )

    network = NetworkConfig(
        rpc_url=env.get("MONAD_RPC_URL", defaults.rpc_url),
        explorer_url=env.get("MONAD_EXPLORER_URL", defaults.explorer_url),
        faucet_url=env.get("MONAD_FAUCET_URL", defaults.faucet_url),
        chain_id=int(env.get("MONAD_CHAIN_ID", defaults.chain_id)),
    )
    market = MarketConfig(coingecko_api_key=env.get("COINGECKO_API_KEY", ""))
    agent = AgentLoopConfig(
        max_iterations=int(env.get("AGENT_MAX_ITERATIONS", AgentLoopConfig().max_iterations)),
    )
    server = ServerConfig(
        host=env.get("HOST", ServerConfig().host),
        port=int(env.get("PORT", ServerConfig().port)),
    )
    return AppConfig(llm=llm, network=network, market=market, agent=agent, server=server)


def resolve_config(path: Path | None = None) -> AppConfig:
    """Return the config from *path*, ``$MONAD_AGENT_CONFIG``, or the environment."""
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
    if path is not None:
        return load_config(path)
    return config_from_env()
