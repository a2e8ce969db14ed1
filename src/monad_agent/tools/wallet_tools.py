"""Wallet and chain command handlers.

Every handler receives the caller's :class:`SessionContext` and returns text.
Validation problems, a missing wallet and chain failures all come back as
readable messages so the planner loop can keep going.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from eth_account.messages import encode_defunct
from pydantic import BaseModel, ConfigDict, Field
from web3 import Web3

from monad_agent.chain.client import InvalidAddressError, LogEntry, validate_address
from monad_agent.chain.contracts import (
    BURNABLE_TOKEN_ABI,
    BURNABLE_TOKEN_BYTECODE,
    TRANSFER_EVENT_TOPIC,
)
from monad_agent.session import Credential
from monad_agent.tools.common import NO_WALLET, format_units, parse_amount, to_base_units
from monad_agent.tools.registry import Operation, tool

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

logger = logging.getLogger("monad_agent.tools.wallet")


# ------------------------------------------------------------------
# Input models
# ------------------------------------------------------------------


class SetWalletInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_key: str = Field(alias="privateKey", description="The private key to set the wallet")


class TransferNativeInput(BaseModel):
    to: str = Field(description="The recipient address")
    amount: str = Field(description="The amount of native currency to transfer, e.g. 0.01")


class TransferTokenInput(BaseModel):
    token: str = Field(description="Symbol of a token created in this session (case-sensitive)")
    to: str = Field(description="The recipient address")
    amount: str = Field(description="The amount of tokens to transfer, in whole units")


class SignMessageInput(BaseModel):
    message: str = Field(description="The message to sign")


class HistoryInput(BaseModel):
    count: int = Field(default=5, ge=1, le=50, description="Number of transactions to fetch")


class CreateTokenInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="The name of the token")
    symbol: str = Field(description="The symbol of the token")
    total_supply: str = Field(
        alias="totalSupply",
        description="The total supply in whole units, e.g. 1000 for 1000 tokens",
    )


class FaucetInput(BaseModel):
    address: str = Field(description="The wallet address to receive testnet tokens")


# ------------------------------------------------------------------
# Wallet lifecycle
# ------------------------------------------------------------------


@tool(
    Operation.SET_WALLET,
    "Set the wallet using a private key. Stays until explicitly disconnected.",
    SetWalletInput,
)
def set_wallet(session: SessionContext, private_key: str) -> str:
    try:
        credential = Credential.from_private_key(private_key)
    except ValueError:
        return "Failed to set wallet: the private key is not valid."
    session.wallet.set(credential)
    return f"Wallet set to address: {credential.address}"


@tool(Operation.DISCONNECT_WALLET, "Disconnect the current wallet and clear it from memory")
def disconnect_wallet(session: SessionContext) -> str:
    session.wallet.clear()
    return "Wallet disconnected successfully"


@tool(Operation.GET_WALLET_ADDRESS, "Get the current wallet address")
def get_wallet_address(session: SessionContext) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    return credential.address


# ------------------------------------------------------------------
# Balances and transfers
# ------------------------------------------------------------------


@tool(
    Operation.GET_BALANCE,
    "Get the native balance and the balances of every token created in this session",
)
def get_balance(session: SessionContext) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET

    symbol = session.network.native_symbol
    try:
        native = session.chain.get_balance(credential.address)
    except Exception as exc:
        logger.error("Failed to fetch %s balance: %s", symbol, exc)
        return f"Failed to fetch balance: {exc}"

    lines = [f"{symbol} Balance: {format_units(native)} {symbol}"]
    for token_symbol, token_address in session.tokens.items():
        try:
            balance = session.chain.get_token_balance(token_address, credential.address)
        except Exception as exc:
            logger.error("Error fetching balance for %s: %s", token_symbol, exc)
            lines.append(f"{token_symbol} Balance: Unable to fetch")
            continue
        lines.append(f"{token_symbol} Balance: {format_units(balance)} {token_symbol}")
    return "\n".join(lines)


@tool(Operation.TRANSFER_NATIVE, "Transfer native MON to an address", TransferNativeInput)
def transfer_native(session: SessionContext, to: str, amount: str) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    symbol = session.network.native_symbol
    try:
        recipient = validate_address(to)
        value = to_base_units(parse_amount(amount))
    except ValueError as exc:
        return str(exc)

    try:
        result = session.chain.send_native_transfer(credential.account, recipient, value)
    except Exception as exc:
        logger.error("Native transfer to %s failed: %s", recipient, exc)
        return f"Failed to transfer {symbol}: {exc}"

    logger.info("Transfer: %s %s to %s, tx %s", amount, symbol, recipient, result.tx_hash)
    return (
        f"Transferred {amount} {symbol} to {recipient}. "
        f"Tx: {session.network.tx_url(result.tx_hash)}"
    )


@tool(
    Operation.TRANSFER_TOKEN,
    "Transfer an ERC-20 token created in this session, referenced by its symbol",
    TransferTokenInput,
)
def transfer_token(session: SessionContext, token: str, to: str, amount: str) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    token_address = session.tokens.get(token)
    if token_address is None:
        return f"Token {token} not found. Please create it first using createToken."
    try:
        recipient = validate_address(to)
        value = to_base_units(parse_amount(amount))
    except ValueError as exc:
        return str(exc)

    try:
        result = session.chain.call_token_transfer(
            credential.account, token_address, recipient, value
        )
    except Exception as exc:
        logger.error("Token transfer of %s to %s failed: %s", token, recipient, exc)
        return f"Failed to transfer {token}: {exc}"

    logger.info("Token transfer: %s %s to %s, tx %s", amount, token, recipient, result.tx_hash)
    return (
        f"Transferred {amount} {token} to {recipient}. "
        f"Tx: {session.network.tx_url(result.tx_hash)}"
    )


@tool(Operation.SIGN_MESSAGE, "Sign a message with the wallet", SignMessageInput)
def sign_message(session: SessionContext, message: str) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    try:
        signed = credential.account.sign_message(encode_defunct(text=message))
    except Exception as exc:
        logger.error("Signing failed: %s", exc)
        return f"Failed to sign message: {exc}"
    return f"Message signed: {Web3.to_hex(signed.signature)}"


# ------------------------------------------------------------------
# Chain queries
# ------------------------------------------------------------------


def _address_topic(address: str) -> str:
    return "0x" + address.lower().removeprefix("0x").rjust(64, "0")


def _topic_address(topic: str) -> str:
    return Web3.to_checksum_address("0x" + topic[-40:])


@tool(
    Operation.GET_TRANSACTION_HISTORY,
    "Get recent token transfers involving the wallet, with explorer links",
    HistoryInput,
)
def get_transaction_history(session: SessionContext, count: int = 5) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET

    window = session.network.history_block_window
    wallet_topic = _address_topic(credential.address)
    try:
        latest = session.chain.get_block_number()
        from_block = max(latest - window + 1, 0)
        sent = session.chain.get_logs(
            from_block=from_block, to_block=latest,
            topics=[TRANSFER_EVENT_TOPIC, wallet_topic],
        )
        received = session.chain.get_logs(
            from_block=from_block, to_block=latest,
            topics=[TRANSFER_EVENT_TOPIC, None, wallet_topic],
        )
    except Exception as exc:
        logger.error("Fetching transaction history failed: %s", exc)
        return f"Failed to fetch transaction history: {exc}"

    seen: set[tuple[str, str, str]] = set()
    entries: list[LogEntry] = []
    for entry in sent + received:
        key = (entry.tx_hash, entry.address, entry.data)
        if key not in seen:
            seen.add(key)
            entries.append(entry)
    entries.sort(key=lambda e: e.block_number, reverse=True)

    if not entries:
        return f"No token transfers involving {credential.address} in the last {window} blocks."

    symbols = {Web3.to_checksum_address(a): s for s, a in session.tokens.items()}
    lines = [f"Recent {min(count, len(entries))} transactions:"]
    for i, entry in enumerate(entries[:count], start=1):
        token = symbols.get(Web3.to_checksum_address(entry.address), entry.address)
        amount = format_units(int(entry.data, 16)) if entry.data not in ("", "0x") else "?"
        if len(entry.topics) > 2 and entry.topics[1].lower() == wallet_topic:
            detail = f"sent {amount} {token} to {_topic_address(entry.topics[2])}"
        elif len(entry.topics) > 1:
            detail = f"received {amount} {token} from {_topic_address(entry.topics[1])}"
        else:
            detail = f"{amount} {token}"
        lines.append(
            f"{i}. Block {entry.block_number}: {detail} - "
            f"[View Transaction]({session.network.tx_url(entry.tx_hash)})"
        )
    return "\n".join(lines)


@tool(Operation.GET_GAS_PRICE, "Estimate current gas price")
def get_gas_price(session: SessionContext) -> str:
    try:
        fees = session.chain.get_fee_data()
    except Exception as exc:
        logger.error("Fetching fee data failed: %s", exc)
        return f"Failed to fetch gas price: {exc}"
    if not fees.gas_price:
        return "Unable to fetch gas price."
    return f"Current gas price: {format_units(fees.gas_price, 9)} gwei"


# ------------------------------------------------------------------
# Tokens and faucet
# ------------------------------------------------------------------


@tool(
    Operation.CREATE_TOKEN,
    "Create a new ERC-20 token with burn functionality on the network",
    CreateTokenInput,
)
def create_token(session: SessionContext, name: str, symbol: str, total_supply: str) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    name, symbol = name.strip(), symbol.strip()
    if not name or not symbol:
        return "Token name and symbol are required."
    try:
        supply = to_base_units(parse_amount(total_supply))
    except ValueError as exc:
        return str(exc)

    try:
        address = session.chain.deploy_contract(
            credential.account,
            BURNABLE_TOKEN_BYTECODE,
            BURNABLE_TOKEN_ABI,
            (name, symbol, supply),
        )
    except Exception as exc:
        logger.error("Creating token %s failed: %s", symbol, exc)
        return f"Failed to create token: {exc}"

    session.tokens.register(symbol, address)
    logger.info("Token %s (%s) created at %s", name, symbol, address)
    return (
        f"Token {name} ({symbol}) created successfully at "
        f"{session.network.address_url(address)}"
    )


@tool(
    Operation.GET_FAUCET_TOKENS,
    "Request testnet MON tokens from the Monad faucet",
    FaucetInput,
)
def get_faucet_tokens(session: SessionContext, address: str) -> str:
    try:
        address = validate_address(address)
    except InvalidAddressError:
        return "Invalid Ethereum address provided."
    faucet = session.network.faucet_url
    return (
        f"To get testnet {session.network.native_symbol} tokens for {address}, visit {faucet}, "
        f"connect your wallet, paste your address ({address}), and click "
        f"'Get Testnet {session.network.native_symbol}'. Tokens are available every 12 hours "
        f"based on eligibility (e.g., Discord role or ETH activity)."
    )
