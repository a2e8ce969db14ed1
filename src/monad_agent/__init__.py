"""Monad Agent - chat with a language model that drives a testnet wallet."""

__version__ = "0.1.0"
