"""The EVM network the agent talks to."""

from __future__ import annotations

from dataclasses import dataclass

from monad_agent.config import NetworkConfig


@dataclass(frozen=True)
class Network:
    """An EVM-compatible blockchain network."""

    name: str
    chain_id: int
    rpc_url: str
    native_symbol: str
    explorer_url: str
    faucet_url: str = ""
    rpc_timeout: float = 30.0
    receipt_timeout: float = 120.0
    history_block_window: int = 100

    @classmethod
    def from_config(cls, config: NetworkConfig) -> Network:
        return cls(
            name=config.name,
            chain_id=config.chain_id,
            rpc_url=config.rpc_url,
            native_symbol=config.native_symbol,
            explorer_url=config.explorer_url.rstrip("/"),
            faucet_url=config.faucet_url,
            rpc_timeout=config.rpc_timeout_seconds,
            receipt_timeout=config.receipt_timeout_seconds,
            history_block_window=config.history_block_window,
        )

    @property
    def is_mainnet(self) -> bool:
        return self.chain_id == 1

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url}/tx/{tx_hash}"

    def address_url(self, address: str) -> str:
        return f"{self.explorer_url}/address/{address}"


MONAD_TESTNET = Network.from_config(NetworkConfig())
