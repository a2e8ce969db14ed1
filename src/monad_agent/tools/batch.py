"""Batch transfers of native currency and session tokens.

The whole instruction string is parsed and validated before anything is sent.
Transfers then go out one by one with a nonce fetched once and incremented
locally, so this assumes nothing else is sending from the same wallet while a
batch runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from monad_agent.chain.client import (
    InvalidAddressError,
    TransactionFailedError,
    validate_address,
)
from monad_agent.session import TokenRegistry
from monad_agent.tools.common import NO_WALLET, parse_amount, to_base_units
from monad_agent.tools.registry import Operation, tool

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

logger = logging.getLogger("monad_agent.tools.batch")

USAGE = (
    "batchMixedTransfer <type1> <to1> <amount1> [tokenName1] "
    "<type2> <to2> <amount2> [tokenName2] ..."
)

NATIVE_KINDS = {"MONAD", "NATIVE"}
TOKEN_KIND = "TOKEN"


class TransferKind(str, Enum):
    NATIVE = "native"
    TOKEN = "token"


@dataclass(frozen=True)
class TransferInstruction:
    kind: TransferKind
    to: str
    amount: Decimal
    token: str | None = None

    def label(self, native_symbol: str) -> str:
        return native_symbol if self.kind is TransferKind.NATIVE else str(self.token)


class BatchParseError(ValueError):
    """The instruction string is malformed or references unknown data."""


def parse_transfer_instructions(
    text: str,
    tokens: TokenRegistry,
    native_symbol: str = "MON",
) -> list[TransferInstruction]:
    """Parse ``<type> <to> <amount> [symbol]`` groups.

    ``type`` is ``MONAD``/``NATIVE``/the native symbol for native transfers or
    ``TOKEN`` followed by a registered symbol. Raises :class:`BatchParseError`
    on the first problem, so a bad batch never executes partially.
    """
    parts = text.split()
    if len(parts) < 3:
        raise BatchParseError(f"Invalid format. Use: {USAGE}")

    native_kinds = NATIVE_KINDS | {native_symbol.upper()}
    instructions: list[TransferInstruction] = []
    i = 0
    while i < len(parts):
        position = len(instructions) + 1
        kind_word = parts[i].upper()
        if i + 2 >= len(parts):
            raise BatchParseError(f"Incomplete transfer at position {position}. Use: {USAGE}")
        to, amount_text = parts[i + 1], parts[i + 2]

        token: str | None = None
        if kind_word == TOKEN_KIND:
            if i + 3 >= len(parts):
                raise BatchParseError(f"Missing token name for TOKEN transfer at position {position}")
            token = parts[i + 3]
            if token not in tokens:
                raise BatchParseError(
                    f"Token {token} not found. Please create it first using createToken."
                )
            kind = TransferKind.TOKEN
            i += 4
        elif kind_word in native_kinds:
            kind = TransferKind.NATIVE
            i += 3
        else:
            raise BatchParseError(f"Invalid type: {parts[i]}. Use 'MONAD' or 'TOKEN'")

        try:
            to = validate_address(to)
        except InvalidAddressError:
            raise BatchParseError(f"Invalid address: {to}") from None
        try:
            amount = parse_amount(amount_text)
            to_base_units(amount)
        except ValueError:
            raise BatchParseError(f"Invalid amount: {amount_text}") from None

        instructions.append(TransferInstruction(kind=kind, to=to, amount=amount, token=token))
    return instructions


class BatchTransferInput(BaseModel):
    transfers: str = Field(
        description=(
            "A space-separated list of mixed transfers in the format "
            "'<type1> <to1> <amount1> [tokenName1] <type2> <to2> <amount2> [tokenName2]'. "
            "Use 'MONAD' for native tokens or 'TOKEN' for ERC-20 tokens with token name "
            "(e.g., 'MONAD 0x123... 0.01 TOKEN 0x456... 10 MKING')"
        )
    )


@tool(
    Operation.BATCH_TRANSFER,
    f"Transfer MONAD and ERC-20 tokens in a single batch using token names. Format: {USAGE}",
    BatchTransferInput,
)
def batch_transfer(session: SessionContext, transfers: str) -> str:
    credential = session.wallet.get()
    if credential is None:
        return NO_WALLET
    try:
        instructions = parse_transfer_instructions(
            transfers, session.tokens, session.network.native_symbol
        )
    except BatchParseError as exc:
        return str(exc)

    try:
        nonce = session.chain.get_transaction_count(credential.address)
    except Exception as exc:
        logger.error("Could not fetch nonce for batch: %s", exc)
        return f"Failed to start batch transfer: {exc}"

    native_symbol = session.network.native_symbol
    results: list[str] = []
    for index, ins in enumerate(instructions, start=1):
        label = ins.label(native_symbol)
        header = f"{index}. **{label} Transfer to {ins.to}**:\n   - Amount: {ins.amount} {label}"
        try:
            value = to_base_units(ins.amount)
            if ins.kind is TransferKind.NATIVE:
                result = session.chain.send_native_transfer(
                    credential.account, ins.to, value, nonce=nonce
                )
            else:
                result = session.chain.call_token_transfer(
                    credential.account, session.tokens.get(ins.token), ins.to, value, nonce=nonce
                )
        except Exception as exc:
            if isinstance(exc, TransactionFailedError):
                # already broadcast, so its nonce is taken
                nonce += 1
            logger.error("Transfer to %s failed: %s", ins.to, exc)
            results.append(f"{header}\n   - Status: Failed\n   - Error: {exc}")
            continue

        nonce += 1
        logger.info("%s transfer: %s to %s, tx %s", label, ins.amount, ins.to, result.tx_hash)
        results.append(
            f"{header}\n   - Status: Successful\n"
            f"   - Transaction Link: [View Transaction]({session.network.tx_url(result.tx_hash)})"
        )

    summary = (
        f"The batch mixed transfer completed with {len(results)} operations:\n\n"
        + "\n\n".join(results)
    )
    logger.info("Batch transfer finished: %d instructions", len(results))
    return summary
