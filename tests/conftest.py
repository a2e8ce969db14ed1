"""Pytest configuration and fixtures for Monad Agent tests."""

from __future__ import annotations

import pytest
from eth_account import Account
from web3 import Web3

import monad_agent.tools  # noqa: F401  registers every handler
from monad_agent.chain.client import (
    FeeData,
    LogEntry,
    TransactionFailedError,
    TransactionResult,
)
from monad_agent.chain.network import Network
from monad_agent.config import NetworkConfig
from monad_agent.core.planner import FinalText
from monad_agent.session import SessionContext, SessionStore
from monad_agent.tools.registry import ToolRegistry

# Well-known throwaway key from the eth-account documentation
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = Account.from_key(TEST_PRIVATE_KEY).address

RECIPIENT = "0x" + "11" * 20
OTHER_RECIPIENT = "0x" + "22" * 20


class FakeChainClient:
    """In-memory stand-in for :class:`ChainClient`.

    Every send is recorded in ``sent`` (including failed ones) together with
    the nonce it was given. Indices listed in ``fail_on`` raise ``failure``.
    """

    def __init__(self):
        self.native_balance = Web3.to_wei(5, "ether")
        self.token_balances: dict[str, int] = {}
        self.broken_tokens: set[str] = set()
        self.gas_price = Web3.to_wei(52, "gwei")
        self.next_nonce = 7
        self.block_number = 1000
        self.logs: list[LogEntry] = []
        self.sent: list[dict] = []
        self.deployed: list[dict] = []
        self.fail_on: set[int] = set()
        self.failure: Exception | None = None
        self.nonce_requests = 0

    # reads

    def get_balance(self, address):
        return self.native_balance

    def get_token_balance(self, token_address, address):
        if token_address in self.broken_tokens:
            raise RuntimeError("execution reverted")
        return self.token_balances.get(token_address, 0)

    def get_fee_data(self):
        return FeeData(gas_price=self.gas_price)

    def get_transaction_count(self, address):
        self.nonce_requests += 1
        return self.next_nonce

    def get_block_number(self):
        return self.block_number

    def get_logs(self, address=None, from_block=0, to_block="latest", topics=None):
        matched = []
        for entry in self.logs:
            if not from_block <= entry.block_number <= to_block:
                continue
            wanted = list(topics or [])
            if all(
                want is None or (i < len(entry.topics) and entry.topics[i] == want)
                for i, want in enumerate(wanted)
            ):
                matched.append(entry)
        return matched

    # writes

    def _send(self, kind, to, amount, nonce, token=None):
        index = len(self.sent)
        self.sent.append(
            {"kind": kind, "to": to, "amount": amount, "nonce": nonce, "token": token}
        )
        if index in self.fail_on:
            raise self.failure or TransactionFailedError(
                f"Transaction 0x{index + 1:064x} reverted", f"0x{index + 1:064x}"
            )
        return TransactionResult(tx_hash=f"0x{index + 1:064x}", block_number=self.block_number)

    def send_native_transfer(self, account, to_address, amount_wei, nonce=None):
        return self._send("native", to_address, amount_wei, nonce)

    def call_token_transfer(self, account, token_address, to_address, amount, nonce=None):
        return self._send("token", to_address, amount, nonce, token=token_address)

    def deploy_contract(self, account, bytecode, abi, constructor_args=(), nonce=None):
        address = Web3.to_checksum_address("0x" + f"{len(self.deployed) + 0xA0:040x}")
        self.deployed.append({"address": address, "args": tuple(constructor_args)})
        return address


class ScriptedPlanner:
    """Returns pre-baked steps and records the conversation it was shown."""

    def __init__(self, steps=None, repeat=None):
        self.steps = list(steps or [])
        self.repeat = repeat
        self.seen: list[list] = []

    async def plan(self, conversation, catalog):
        self.seen.append(list(conversation))
        if self.steps:
            return self.steps.pop(0)
        if self.repeat is not None:
            return self.repeat
        return FinalText(text="done")


@pytest.fixture
def network():
    return Network.from_config(NetworkConfig())


@pytest.fixture
def fake_chain():
    return FakeChainClient()


@pytest.fixture
def session(fake_chain, network):
    return SessionContext(chain=fake_chain, network=network)


@pytest.fixture
def wallet_session(session):
    """A session with the test wallet already connected."""
    from monad_agent.session import Credential

    session.wallet.set(Credential.from_private_key(TEST_PRIVATE_KEY))
    return session


@pytest.fixture
def session_store(fake_chain, network):
    return SessionStore(
        lambda session_id: SessionContext(chain=fake_chain, network=network, session_id=session_id)
    )


@pytest.fixture
def call_tool():
    """Run a registered tool by name the way the agent loop does."""

    async def _call(session, tool_name, /, **arguments):
        tool = ToolRegistry.get().get_tool(tool_name)
        assert tool is not None, f"tool {tool_name} is not registered"
        return await tool.execute(session, arguments)

    return _call
