"""Per-session state handed to every command handler.

A session owns at most one signing credential and the registry of tokens
deployed during the session. Nothing here is ever written to disk; a process
restart forgets all of it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from eth_account import Account
from eth_account.signers.local import LocalAccount

from monad_agent.config import MarketConfig

if TYPE_CHECKING:
    from monad_agent.chain.client import ChainClient
    from monad_agent.chain.network import Network

logger = logging.getLogger("monad_agent.session")

DEFAULT_SESSION_ID = "default"


def _normalize_private_key(key: str) -> str:
    key = key.strip()
    if not key.startswith("0x"):
        key = "0x" + key
    return key


@dataclass(frozen=True)
class Credential:
    """A signing account. Key material is kept out of ``repr``."""

    account: LocalAccount = field(repr=False)

    @classmethod
    def from_private_key(cls, private_key: str) -> Credential:
        """Derive the account for *private_key* (with or without ``0x``).

        Raises ``ValueError`` for anything that is not a valid secp256k1 key.
        """
        try:
            account = Account.from_key(_normalize_private_key(private_key))
        except Exception as exc:
            raise ValueError(f"Invalid private key: {exc}") from exc
        return cls(account=account)

    @property
    def address(self) -> str:
        return self.account.address

    def __repr__(self) -> str:
        return f"Credential(address={self.address})"


class WalletHolder:
    """Slot for at most one credential. The last ``set`` wins."""

    def __init__(self) -> None:
        self._credential: Credential | None = None

    def set(self, credential: Credential) -> None:
        self._credential = credential
        logger.info("Wallet set to address: %s", credential.address)

    def get(self) -> Credential | None:
        return self._credential

    def clear(self) -> None:
        if self._credential is not None:
            logger.info("Wallet %s cleared from memory", self._credential.address)
        self._credential = None


class TokenRegistry:
    """Case-sensitive token symbol -> deployed contract address."""

    def __init__(self) -> None:
        self._tokens: dict[str, str] = {}

    def register(self, symbol: str, address: str) -> None:
        previous = self._tokens.get(symbol)
        if previous and previous != address:
            logger.warning("Token %s re-registered: %s -> %s", symbol, previous, address)
        self._tokens[symbol] = address

    def get(self, symbol: str) -> str | None:
        return self._tokens.get(symbol)

    def symbols(self) -> list[str]:
        return list(self._tokens)

    def items(self) -> list[tuple[str, str]]:
        return list(self._tokens.items())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)


@dataclass
class SessionContext:
    """Everything a command handler may touch."""

    chain: ChainClient
    network: Network
    market: MarketConfig = field(default_factory=MarketConfig)
    wallet: WalletHolder = field(default_factory=WalletHolder)
    tokens: TokenRegistry = field(default_factory=TokenRegistry)
    session_id: str = DEFAULT_SESSION_ID


class SessionStore:
    """Maps session ids to contexts; contexts are created on first use."""

    def __init__(self, factory: Callable[[str], SessionContext]) -> None:
        self._factory = factory
        self._sessions: dict[str, SessionContext] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str | None = None) -> SessionContext:
        key = session_id or DEFAULT_SESSION_ID
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                session = self._factory(key)
                self._sessions[key] = session
            return session

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
