"""Wiring from configuration to a ready agent and session store."""

from __future__ import annotations

import logging

from monad_agent.chain.client import ChainClient
from monad_agent.chain.network import Network
from monad_agent.config import AppConfig
from monad_agent.core.agent import WalletAgent
from monad_agent.core.planner import LLMPlanner, Planner
from monad_agent.llm.router import LLMRouter
from monad_agent.session import SessionContext, SessionStore
from monad_agent.tools.registry import ToolRegistry

logger = logging.getLogger("monad_agent.factory")


def create_session_store(config: AppConfig, chain: ChainClient | None = None) -> SessionStore:
    """All sessions share one chain client; each gets its own wallet and tokens."""
    network = Network.from_config(config.network)
    shared_chain = chain if chain is not None else ChainClient(network)

    def _new_session(session_id: str) -> SessionContext:
        logger.debug("Creating session %s", session_id)
        return SessionContext(
            chain=shared_chain,
            network=network,
            market=config.market,
            session_id=session_id,
        )

    return SessionStore(_new_session)


def create_planner(config: AppConfig, provider_name: str | None = None) -> Planner:
    """Build the model-backed planner. Raises ``ValueError`` if no model is configured."""
    provider = LLMRouter(config.llm).get_provider(provider_name)
    return LLMPlanner(provider, system_prompt=config.agent.system_prompt)


def create_agent(config: AppConfig, planner: Planner | None = None) -> WalletAgent:
    return WalletAgent(
        planner=planner if planner is not None else create_planner(config),
        registry=ToolRegistry.get(),
        max_iterations=config.agent.max_iterations,
    )
