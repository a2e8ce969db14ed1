"""The fixed command catalog shown by ``help``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from monad_agent.tools.batch import USAGE as BATCH_USAGE
from monad_agent.tools.registry import Operation, tool

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

COMMANDS: dict[Operation, str] = {
    Operation.SET_WALLET: "setWallet <privateKey> - Set your wallet",
    Operation.DISCONNECT_WALLET: "disconnectWallet - Disconnect and clear your wallet",
    Operation.GET_WALLET_ADDRESS: "getWalletAddress - Get your wallet address",
    Operation.GET_BALANCE: "getBalance - Check your MONAD and token balances",
    Operation.TRANSFER_NATIVE: "transferTokens <to> <amount> - Transfer MONAD tokens",
    Operation.TRANSFER_TOKEN: "transferToken <token> <to> <amount> - Transfer a token you created",
    Operation.SIGN_MESSAGE: "signMessage <message> - Sign a message",
    Operation.GET_TRANSACTION_HISTORY: (
        "getTransactionHistory [count] - Get recent transactions (default 5)"
    ),
    Operation.GET_GAS_PRICE: "getGasPrice - Get current gas price",
    Operation.GET_TOKEN_PRICE: "getTokenPrice <token> - Get token price (e.g., MONAD)",
    Operation.GET_TRENDING_TOKENS: "getTrendingTokens - Get trending tokens from Monad explorer",
    Operation.CREATE_TOKEN: "createToken <name> <symbol> <totalSupply> - Create a new token",
    Operation.GET_FAUCET_TOKENS: (
        "getFaucetTokens <address> - Request testnet MON tokens from Monad faucet"
    ),
    Operation.BATCH_TRANSFER: f"{BATCH_USAGE} - Transfer MONAD and tokens",
    Operation.HELP: "help - Show this list",
}

HELP_TEXT = "Available commands:\n" + "\n".join(COMMANDS[op] for op in Operation)


@tool(Operation.HELP, "List all available commands")
def show_help(session: SessionContext) -> str:
    return HELP_TEXT
