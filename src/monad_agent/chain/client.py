"""Web3 client for the agent's single EVM network."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TimeExhausted
from web3.middleware import ExtraDataToPOAMiddleware

from monad_agent.chain.contracts import ERC20_ABI
from monad_agent.chain.network import Network

logger = logging.getLogger("monad_agent.chain.client")


class ChainError(RuntimeError):
    """An RPC call or transaction did not complete successfully."""


class TransactionFailedError(ChainError):
    """The transaction was broadcast, so its nonce is spent, but it did not succeed."""

    def __init__(self, message: str, tx_hash: str):
        super().__init__(message)
        self.tx_hash = tx_hash


class InvalidAddressError(ValueError):
    """An address failed format or checksum validation."""


@dataclass(frozen=True)
class TransactionResult:
    """A mined transaction."""

    tx_hash: str
    block_number: int
    gas_used: int = 0
    contract_address: str | None = None


@dataclass(frozen=True)
class FeeData:
    gas_price: int
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None


@dataclass(frozen=True)
class LogEntry:
    tx_hash: str
    block_number: int
    address: str
    topics: tuple[str, ...]
    data: str


def validate_address(address: str) -> str:
    """Return the checksummed form of *address* or raise ``InvalidAddressError``.

    All-lowercase and all-uppercase hex is accepted as-is; mixed case must be
    a valid EIP-55 checksum.
    """
    if not isinstance(address, str) or not Web3.is_address(address.strip()):
        raise InvalidAddressError(f"Invalid address: {address}")
    address = address.strip()
    body = address[2:] if address[:2].lower() == "0x" else address
    if body != body.lower() and body != body.upper() and not Web3.is_checksum_address(address):
        raise InvalidAddressError(f"Invalid address checksum: {address}")
    return Web3.to_checksum_address(address)


class ChainClient:
    """Balance, fee, transfer, deployment and log primitives over JSON-RPC.

    Every mutating call blocks until the transaction receipt is available.
    A missing receipt, a receipt without a hash, or a reverted transaction
    raises :class:`ChainError`.
    """

    DEFAULT_PRIORITY_FEE_GWEI = 1.5

    def __init__(self, network: Network, web3: Web3 | None = None) -> None:
        self.network = network
        self._w3 = web3

    @property
    def w3(self) -> Web3:
        """Return a (cached) Web3 instance for the network."""
        if self._w3 is None:
            w3 = Web3(
                Web3.HTTPProvider(
                    self.network.rpc_url,
                    request_kwargs={"timeout": self.network.rpc_timeout},
                )
            )
            # Testnets and L2s put extra data in block headers
            if not self.network.is_mainnet:
                w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
            self._w3 = w3
        return self._w3

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_balance(self, address: str) -> int:
        """Native balance in wei."""
        checksum = validate_address(address)
        return self._rpc("get_balance", lambda: self.w3.eth.get_balance(checksum))

    def get_token_balance(self, token_address: str, address: str) -> int:
        """ERC-20 balance in base units."""
        token = validate_address(token_address)
        owner = validate_address(address)
        contract = self.w3.eth.contract(address=token, abi=ERC20_ABI)
        return self._rpc("balanceOf", lambda: contract.functions.balanceOf(owner).call())

    def get_fee_data(self) -> FeeData:
        gas_price = self._rpc("gas_price", lambda: self.w3.eth.gas_price)
        try:
            latest = self.w3.eth.get_block("latest")
            base_fee = latest.get("baseFeePerGas")
        except Exception as exc:
            logger.debug("Could not read latest block for base fee: %s", exc)
            base_fee = None
        if base_fee is None:
            return FeeData(gas_price=gas_price)
        priority = Web3.to_wei(self.DEFAULT_PRIORITY_FEE_GWEI, "gwei")
        return FeeData(
            gas_price=gas_price,
            max_fee_per_gas=base_fee * 2 + priority,
            max_priority_fee_per_gas=priority,
        )

    def get_transaction_count(self, address: str) -> int:
        """Next nonce for *address*, counting pending transactions."""
        checksum = validate_address(address)
        return self._rpc(
            "get_transaction_count",
            lambda: self.w3.eth.get_transaction_count(checksum, "pending"),
        )

    def get_block_number(self) -> int:
        return self._rpc("block_number", lambda: self.w3.eth.block_number)

    def get_logs(
        self,
        address: str | Sequence[str] | None = None,
        from_block: int = 0,
        to_block: int | str = "latest",
        topics: Sequence[Any] | None = None,
    ) -> list[LogEntry]:
        """Fetch logs matching an address filter and block range."""
        params: dict[str, Any] = {"fromBlock": from_block, "toBlock": to_block}
        if isinstance(address, str):
            params["address"] = validate_address(address)
        elif address:
            params["address"] = [validate_address(a) for a in address]
        if topics:
            params["topics"] = list(topics)

        raw_logs = self._rpc("get_logs", lambda: self.w3.eth.get_logs(params))
        return [
            LogEntry(
                tx_hash=Web3.to_hex(log["transactionHash"]),
                block_number=int(log["blockNumber"]),
                address=log["address"],
                topics=tuple(Web3.to_hex(t) for t in log.get("topics", [])),
                data=Web3.to_hex(log["data"]) if log.get("data") else "0x",
            )
            for log in raw_logs
        ]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def send_native_transfer(
        self,
        account: LocalAccount,
        to_address: str,
        amount_wei: int,
        nonce: int | None = None,
    ) -> TransactionResult:
        """Send native currency and wait for the receipt."""
        tx: dict[str, Any] = {
            "from": account.address,
            "to": validate_address(to_address),
            "value": int(amount_wei),
        }
        return self._sign_and_send(account, tx, nonce)

    def call_token_transfer(
        self,
        account: LocalAccount,
        token_address: str,
        to_address: str,
        amount: int,
        nonce: int | None = None,
    ) -> TransactionResult:
        """Call ``transfer(to, amount)`` on an ERC-20 contract and wait for the receipt."""
        token = validate_address(token_address)
        recipient = validate_address(to_address)
        contract = self.w3.eth.contract(address=token, abi=ERC20_ABI)
        data = contract.encode_abi("transfer", args=[recipient, int(amount)])
        tx: dict[str, Any] = {"from": account.address, "to": token, "value": 0, "data": data}
        return self._sign_and_send(account, tx, nonce)

    def deploy_contract(
        self,
        account: LocalAccount,
        bytecode: str,
        abi: list[dict],
        constructor_args: Sequence[Any] = (),
        nonce: int | None = None,
    ) -> str:
        """Deploy a contract and return its checksummed address."""
        factory = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        data = factory.constructor(*constructor_args).data_in_transaction
        tx: dict[str, Any] = {"from": account.address, "value": 0, "data": data}
        result = self._sign_and_send(account, tx, nonce)
        if not result.contract_address:
            raise ChainError(f"Deployment receipt for {result.tx_hash} has no contract address")
        return Web3.to_checksum_address(result.contract_address)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rpc(self, what: str, call):
        try:
            return call()
        except (ChainError, InvalidAddressError):
            raise
        except Exception as exc:
            raise ChainError(f"RPC call '{what}' failed: {exc}") from exc

    def _apply_fees(self, tx: dict[str, Any]) -> None:
        """Use EIP-1559 fee parameters, falling back to a legacy gas price."""
        fees = self.get_fee_data()
        if fees.max_fee_per_gas is not None:
            tx["maxFeePerGas"] = fees.max_fee_per_gas
            tx["maxPriorityFeePerGas"] = fees.max_priority_fee_per_gas
        else:
            tx["gasPrice"] = fees.gas_price

    def _sign_and_send(
        self,
        account: LocalAccount,
        tx: dict[str, Any],
        nonce: int | None,
    ) -> TransactionResult:
        tx["chainId"] = self.network.chain_id
        tx["nonce"] = nonce if nonce is not None else self.get_transaction_count(account.address)
        self._apply_fees(tx)
        tx["gas"] = self._rpc("estimate_gas", lambda: self.w3.eth.estimate_gas(tx))
        tx.pop("from", None)

        signed = account.sign_transaction(tx)
        tx_hash = self._rpc(
            "send_raw_transaction",
            lambda: self.w3.eth.send_raw_transaction(signed.raw_transaction),
        )
        return self._wait_for_receipt(tx_hash)

    def _wait_for_receipt(self, tx_hash) -> TransactionResult:
        hex_hash = Web3.to_hex(tx_hash)
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.network.receipt_timeout
            )
        except TimeExhausted as exc:
            raise TransactionFailedError(
                f"Timed out after {self.network.receipt_timeout:.0f}s waiting for {hex_hash}",
                hex_hash,
            ) from exc
        except Exception as exc:
            raise TransactionFailedError(
                f"Failed to get receipt for {hex_hash}: {exc}", hex_hash
            ) from exc

        if not receipt or not receipt.get("transactionHash"):
            raise TransactionFailedError("Transaction receipt is null or invalid", hex_hash)
        if receipt.get("status") == 0:
            raise TransactionFailedError(f"Transaction {hex_hash} reverted", hex_hash)

        return TransactionResult(
            tx_hash=Web3.to_hex(receipt["transactionHash"]),
            block_number=int(receipt.get("blockNumber") or 0),
            gas_used=int(receipt.get("gasUsed") or 0),
            contract_address=receipt.get("contractAddress"),
        )
