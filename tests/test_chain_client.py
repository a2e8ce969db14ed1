from unittest.mock import MagicMock

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted

from monad_agent.chain.client import (
    ChainClient,
    ChainError,
    InvalidAddressError,
    TransactionFailedError,
    validate_address,
)
from monad_agent.chain.network import MONAD_TESTNET

from conftest import RECIPIENT, TEST_PRIVATE_KEY

TX_HASH = HexBytes("0x" + "aa" * 32)


@pytest.fixture
def w3():
    mock = MagicMock()
    mock.eth.gas_price = Web3.to_wei(50, "gwei")
    mock.eth.get_block.return_value = {"baseFeePerGas": Web3.to_wei(10, "gwei")}
    mock.eth.get_transaction_count.return_value = 3
    mock.eth.estimate_gas.return_value = 21000
    mock.eth.send_raw_transaction.return_value = TX_HASH
    mock.eth.wait_for_transaction_receipt.return_value = {
        "transactionHash": TX_HASH,
        "blockNumber": 42,
        "gasUsed": 21000,
        "status": 1,
        "contractAddress": None,
    }
    return mock


@pytest.fixture
def client(w3):
    return ChainClient(MONAD_TESTNET, web3=w3)


@pytest.fixture
def account():
    return Account.from_key(TEST_PRIVATE_KEY)


class TestValidateAddress:
    def test_checksums(self):
        assert validate_address(RECIPIENT) == Web3.to_checksum_address(RECIPIENT)

    @pytest.mark.parametrize("bad", ["", "0x123", "hello", "0x" + "g" * 40])
    def test_rejects(self, bad):
        with pytest.raises(InvalidAddressError):
            validate_address(bad)

    def test_rejects_bad_checksum(self):
        good = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
        broken = good[:2] + good[2:].swapcase()
        with pytest.raises(InvalidAddressError, match="checksum"):
            validate_address(broken)

    @pytest.mark.parametrize("form", [str.lower, str.upper, lambda a: a])
    def test_accepts_single_case_and_valid_checksum(self, form):
        good = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
        assert validate_address("0x" + form(good[2:])) == good


class TestNetwork:
    def test_links(self):
        assert MONAD_TESTNET.tx_url("0xabc") == "https://monad-testnet.socialscan.io/tx/0xabc"
        assert MONAD_TESTNET.address_url("0x1") == "https://monad-testnet.socialscan.io/address/0x1"
        assert MONAD_TESTNET.chain_id == 10143
        assert not MONAD_TESTNET.is_mainnet


class TestReads:
    def test_fee_data_eip1559(self, client):
        fees = client.get_fee_data()
        assert fees.gas_price == Web3.to_wei(50, "gwei")
        assert fees.max_priority_fee_per_gas == Web3.to_wei(1.5, "gwei")
        assert fees.max_fee_per_gas == Web3.to_wei(20, "gwei") + Web3.to_wei(1.5, "gwei")

    def test_fee_data_legacy(self, client, w3):
        w3.eth.get_block.return_value = {}
        fees = client.get_fee_data()
        assert fees.max_fee_per_gas is None

    def test_rpc_errors_wrapped(self, client, w3):
        w3.eth.get_balance.side_effect = ConnectionError("refused")
        with pytest.raises(ChainError, match="get_balance"):
            client.get_balance(RECIPIENT)

    def test_invalid_address_before_rpc(self, client, w3):
        with pytest.raises(InvalidAddressError):
            client.get_balance("nope")
        w3.eth.get_balance.assert_not_called()

    def test_get_logs(self, client, w3):
        w3.eth.get_logs.return_value = [{
            "transactionHash": TX_HASH,
            "blockNumber": 7,
            "address": RECIPIENT,
            "topics": [HexBytes("0x" + "01" * 32)],
            "data": HexBytes("0x" + "00" * 31 + "05"),
        }]
        (entry,) = client.get_logs(from_block=1, to_block=10, topics=["0x" + "01" * 32])
        assert entry.tx_hash == "0x" + "aa" * 32
        assert entry.block_number == 7
        assert entry.topics == ("0x" + "01" * 32,)
        assert int(entry.data, 16) == 5
        params = w3.eth.get_logs.call_args.args[0]
        assert params["fromBlock"] == 1
        assert params["topics"] == ["0x" + "01" * 32]


class TestWrites:
    def test_native_transfer(self, client, w3, account):
        result = client.send_native_transfer(account, RECIPIENT, 10**18)
        assert result.tx_hash == "0x" + "aa" * 32
        assert result.block_number == 42
        tx = w3.eth.estimate_gas.call_args.args[0]
        assert tx["chainId"] == 10143
        assert tx["nonce"] == 3
        assert tx["value"] == 10**18
        assert "maxFeePerGas" in tx
        w3.eth.send_raw_transaction.assert_called_once()

    def test_explicit_nonce(self, client, w3, account):
        client.send_native_transfer(account, RECIPIENT, 1, nonce=99)
        assert w3.eth.estimate_gas.call_args.args[0]["nonce"] == 99
        w3.eth.get_transaction_count.assert_not_called()

    def test_reverted(self, client, w3, account):
        w3.eth.wait_for_transaction_receipt.return_value = {
            "transactionHash": TX_HASH, "blockNumber": 42, "status": 0,
        }
        with pytest.raises(TransactionFailedError, match="reverted") as info:
            client.send_native_transfer(account, RECIPIENT, 1)
        assert info.value.tx_hash == "0x" + "aa" * 32

    def test_null_receipt(self, client, w3, account):
        w3.eth.wait_for_transaction_receipt.return_value = None
        with pytest.raises(TransactionFailedError, match="null or invalid"):
            client.send_native_transfer(account, RECIPIENT, 1)

    def test_receipt_timeout(self, client, w3, account):
        w3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("slow")
        with pytest.raises(TransactionFailedError, match="Timed out"):
            client.send_native_transfer(account, RECIPIENT, 1)

    def test_deploy_requires_contract_address(self, client, w3, account):
        w3.eth.contract.return_value.constructor.return_value.data_in_transaction = "0x6080"
        with pytest.raises(ChainError, match="no contract address"):
            client.deploy_contract(account, "0x6080", [], ())

    def test_deploy_returns_address(self, client, w3, account):
        w3.eth.contract.return_value.constructor.return_value.data_in_transaction = "0x6080"
        w3.eth.wait_for_transaction_receipt.return_value = {
            "transactionHash": TX_HASH,
            "blockNumber": 42,
            "status": 1,
            "contractAddress": RECIPIENT,
        }
        address = client.deploy_contract(account, "0x6080", [], ())
        assert address == Web3.to_checksum_address(RECIPIENT)
