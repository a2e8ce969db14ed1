"""Chain access for Monad Agent.

A thin adapter over web3.py for the single configured EVM network: balances,
fee data, native and ERC-20 transfers, contract deployment and log queries.
"""

from monad_agent.chain.client import (
    ChainClient,
    ChainError,
    FeeData,
    InvalidAddressError,
    LogEntry,
    TransactionFailedError,
    TransactionResult,
    validate_address,
)
from monad_agent.chain.network import MONAD_TESTNET, Network

__all__ = [
    "ChainClient",
    "ChainError",
    "FeeData",
    "InvalidAddressError",
    "LogEntry",
    "MONAD_TESTNET",
    "Network",
    "TransactionFailedError",
    "TransactionResult",
    "validate_address",
]
