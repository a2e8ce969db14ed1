import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from web3 import Web3

from monad_agent.chain.client import ChainError, LogEntry
from monad_agent.chain.contracts import TRANSFER_EVENT_TOPIC
from monad_agent.tools.common import NO_WALLET, format_units, parse_amount, to_base_units

from conftest import RECIPIENT, TEST_ADDRESS, TEST_PRIVATE_KEY


def _topic(address: str) -> str:
    return "0x" + address.lower()[2:].rjust(64, "0")


class TestAmounts:
    def test_parse_amount(self):
        assert str(parse_amount(" 0.01 ")) == "0.01"

    @pytest.mark.parametrize("bad", ["", "abc", "0", "-2", "NaN", "Infinity"])
    def test_parse_amount_rejects(self, bad):
        with pytest.raises(ValueError, match="Invalid amount"):
            parse_amount(bad)

    def test_to_base_units(self):
        assert to_base_units(parse_amount("1.5")) == 1_500_000_000_000_000_000

    def test_to_base_units_rejects_dust(self):
        with pytest.raises(ValueError, match="decimal places"):
            to_base_units(parse_amount("0.0000000000000000001"))

    def test_to_base_units_is_exact_for_large_amounts(self):
        assert to_base_units(parse_amount("123456789012345678901234567890")) == (
            123456789012345678901234567890 * 10**18
        )

    def test_to_base_units_rejects_dust_on_large_amounts(self):
        with pytest.raises(ValueError, match="decimal places"):
            to_base_units(parse_amount("12345678901.1234567890123456789"))

    def test_format_units(self):
        assert format_units(1_500_000_000_000_000_000) == "1.5"
        assert format_units(0) == "0"
        assert format_units(52_000_000_000, 9) == "52"
        assert format_units(123456789012345678901234567890 * 10**18) == (
            "123456789012345678901234567890"
        )


class TestWalletLifecycle:
    @pytest.mark.asyncio
    async def test_set_wallet(self, session, call_tool):
        result = await call_tool(session, "setWallet", privateKey=TEST_PRIVATE_KEY)
        assert result == f"Wallet set to address: {TEST_ADDRESS}"
        assert session.wallet.get().address == TEST_ADDRESS

    @pytest.mark.asyncio
    async def test_set_wallet_invalid_key(self, session, call_tool):
        result = await call_tool(session, "setWallet", privateKey="nope")
        assert result.startswith("Failed to set wallet")
        assert session.wallet.get() is None

    @pytest.mark.asyncio
    async def test_disconnect_then_balance_needs_wallet(self, wallet_session, call_tool):
        assert await call_tool(wallet_session, "disconnectWallet") == (
            "Wallet disconnected successfully"
        )
        assert await call_tool(wallet_session, "getBalance") == NO_WALLET

    @pytest.mark.asyncio
    async def test_get_wallet_address(self, wallet_session, call_tool):
        assert await call_tool(wallet_session, "getWalletAddress") == TEST_ADDRESS

    @pytest.mark.asyncio
    async def test_get_wallet_address_without_wallet(self, session, call_tool):
        result = await call_tool(session, "getWalletAddress")
        assert result == NO_WALLET


class TestWalletRequired:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,arguments",
        [
            ("getWalletAddress", {}),
            ("getBalance", {}),
            ("transferTokens", {"to": RECIPIENT, "amount": "1"}),
            ("transferToken", {"token": "MKING", "to": RECIPIENT, "amount": "1"}),
            ("signMessage", {"message": "hi"}),
            ("getTransactionHistory", {}),
            ("createToken", {"name": "King", "symbol": "MKING", "totalSupply": "100"}),
        ],
    )
    async def test_no_wallet(self, session, fake_chain, call_tool, name, arguments):
        assert await call_tool(session, name, **arguments) == NO_WALLET
        assert fake_chain.sent == []
        assert fake_chain.deployed == []


class TestBalances:
    @pytest.mark.asyncio
    async def test_native_only(self, wallet_session, call_tool):
        assert await call_tool(wallet_session, "getBalance") == "MON Balance: 5 MON"

    @pytest.mark.asyncio
    async def test_create_token_large_supply_is_exact(self, wallet_session, fake_chain, call_tool):
        await call_tool(
            wallet_session, "createToken",
            name="Big", symbol="BIG", totalSupply="123456789012345678901234567890",
        )
        assert fake_chain.deployed[0]["args"][2] == 123456789012345678901234567890 * 10**18

    @pytest.mark.asyncio
    async def test_created_token_appears_in_balance(self, wallet_session, fake_chain, call_tool):
        result = await call_tool(
            wallet_session, "createToken", name="King", symbol="MKING", totalSupply="1000"
        )
        address = fake_chain.deployed[0]["address"]
        assert result == (
            f"Token King (MKING) created successfully at "
            f"https://monad-testnet.socialscan.io/address/{address}"
        )
        assert fake_chain.deployed[0]["args"] == ("King", "MKING", 1000 * 10**18)

        fake_chain.token_balances[address] = 1000 * 10**18
        balance = await call_tool(wallet_session, "getBalance")
        assert balance.splitlines() == ["MON Balance: 5 MON", "MKING Balance: 1000 MKING"]

    @pytest.mark.asyncio
    async def test_unreadable_token_is_reported(self, wallet_session, fake_chain, call_tool):
        wallet_session.tokens.register("BAD", "0xbad")
        fake_chain.broken_tokens.add("0xbad")
        balance = await call_tool(wallet_session, "getBalance")
        assert "BAD Balance: Unable to fetch" in balance
        assert balance.startswith("MON Balance: 5 MON")


class TestTransfers:
    @pytest.mark.asyncio
    async def test_native_transfer(self, wallet_session, fake_chain, call_tool):
        result = await call_tool(wallet_session, "transferTokens", to=RECIPIENT, amount="0.25")
        checksum = Web3.to_checksum_address(RECIPIENT)
        assert result.startswith(f"Transferred 0.25 MON to {checksum}. Tx: ")
        assert "https://monad-testnet.socialscan.io/tx/0x" in result
        assert fake_chain.sent[0]["amount"] == 250_000_000_000_000_000
        assert fake_chain.sent[0]["nonce"] is None

    @pytest.mark.asyncio
    async def test_native_transfer_bad_address(self, wallet_session, fake_chain, call_tool):
        result = await call_tool(wallet_session, "transferTokens", to="0x123", amount="1")
        assert result == "Invalid address: 0x123"
        assert fake_chain.sent == []

    @pytest.mark.asyncio
    async def test_native_transfer_failure(self, wallet_session, fake_chain, call_tool):
        fake_chain.fail_on = {0}
        fake_chain.failure = ChainError("RPC call 'estimate_gas' failed: out of gas")
        result = await call_tool(wallet_session, "transferTokens", to=RECIPIENT, amount="1")
        assert result.startswith("Failed to transfer MON:")

    @pytest.mark.asyncio
    async def test_token_transfer_unknown_symbol(self, wallet_session, call_tool):
        result = await call_tool(
            wallet_session, "transferToken", token="NOPE", to=RECIPIENT, amount="1"
        )
        assert result == "Token NOPE not found. Please create it first using createToken."

    @pytest.mark.asyncio
    async def test_token_transfer(self, wallet_session, fake_chain, call_tool):
        wallet_session.tokens.register("MKING", "0x" + "ab" * 20)
        result = await call_tool(
            wallet_session, "transferToken", token="MKING", to=RECIPIENT, amount="10"
        )
        assert result.startswith("Transferred 10 MKING to")
        assert fake_chain.sent[0]["token"] == "0x" + "ab" * 20
        assert fake_chain.sent[0]["amount"] == 10 * 10**18


class TestSignAndQueries:
    @pytest.mark.asyncio
    async def test_sign_message_recovers_to_wallet(self, wallet_session, call_tool):
        result = await call_tool(wallet_session, "signMessage", message="hello monad")
        assert result.startswith("Message signed: 0x")
        signature = result.removeprefix("Message signed: ")
        recovered = Account.recover_message(encode_defunct(text="hello monad"), signature=signature)
        assert recovered == TEST_ADDRESS

    @pytest.mark.asyncio
    async def test_gas_price(self, session, call_tool):
        assert await call_tool(session, "getGasPrice") == "Current gas price: 52 gwei"

    @pytest.mark.asyncio
    async def test_faucet_valid_address(self, session, call_tool):
        result = await call_tool(session, "getFaucetTokens", address=RECIPIENT)
        assert "https://testnet.monad.xyz/" in result
        assert Web3.to_checksum_address(RECIPIENT) in result

    @pytest.mark.asyncio
    async def test_faucet_invalid_address(self, session, call_tool):
        result = await call_tool(session, "getFaucetTokens", address="garbage")
        assert result == "Invalid Ethereum address provided."


class TestTransactionHistory:
    @pytest.mark.asyncio
    async def test_empty_history(self, wallet_session, call_tool):
        result = await call_tool(wallet_session, "getTransactionHistory")
        assert result == f"No token transfers involving {TEST_ADDRESS} in the last 100 blocks."

    @pytest.mark.asyncio
    async def test_history_newest_first(self, wallet_session, fake_chain, call_tool):
        token = Web3.to_checksum_address("0x" + "ab" * 20)
        wallet_session.tokens.register("MKING", token)
        me, other = _topic(TEST_ADDRESS), _topic(RECIPIENT)
        fake_chain.logs = [
            LogEntry("0x" + "01" * 32, 950, token, (TRANSFER_EVENT_TOPIC, me, other), hex(10**18)),
            LogEntry("0x" + "02" * 32, 990, token, (TRANSFER_EVENT_TOPIC, other, me), hex(2 * 10**18)),
            LogEntry("0x" + "03" * 32, 800, token, (TRANSFER_EVENT_TOPIC, me, other), hex(10**18)),
        ]

        result = await call_tool(wallet_session, "getTransactionHistory", count=5)
        lines = result.splitlines()
        assert lines[0] == "Recent 2 transactions:"
        assert lines[1].startswith("1. Block 990: received 2 MKING from ")
        assert lines[2].startswith("2. Block 950: sent 1 MKING to ")
        assert "[View Transaction](https://monad-testnet.socialscan.io/tx/0x0202" in lines[1]

    @pytest.mark.asyncio
    async def test_history_count_limits(self, wallet_session, fake_chain, call_tool):
        me = _topic(TEST_ADDRESS)
        fake_chain.logs = [
            LogEntry(f"0x{i:064x}", 990 + i, RECIPIENT, (TRANSFER_EVENT_TOPIC, me, me), hex(1))
            for i in range(4)
        ]
        result = await call_tool(wallet_session, "getTransactionHistory", count=2)
        assert result.splitlines()[0] == "Recent 2 transactions:"
        assert len(result.splitlines()) == 3

    @pytest.mark.asyncio
    async def test_history_count_out_of_range(self, wallet_session, call_tool):
        result = await call_tool(wallet_session, "getTransactionHistory", count=0)
        assert result.startswith("Invalid arguments for getTransactionHistory: count:")
