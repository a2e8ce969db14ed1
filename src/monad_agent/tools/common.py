"""Helpers shared by the command handlers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext, localcontext

from monad_agent.chain.contracts import TOKEN_DECIMALS

NO_WALLET = "No wallet set. Please set a wallet first."


def parse_amount(amount: str | int | float) -> Decimal:
    """Parse a human amount; raise ``ValueError`` unless it is a positive number."""
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {amount}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError(f"Invalid amount: {amount}")
    return value


def _exact_context(digits: int, decimals: int):
    ctx = getcontext().copy()
    ctx.prec = max(28, digits + abs(decimals) + 2)
    return localcontext(ctx)


def to_base_units(amount: Decimal, decimals: int = TOKEN_DECIMALS) -> int:
    """Whole units -> integer base units, rejecting dust below one base unit."""
    with _exact_context(len(amount.as_tuple().digits), decimals):
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
        return int(scaled)


def format_units(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Integer base units -> plain decimal string without trailing zeros."""
    with _exact_context(len(str(abs(value))), decimals):
        text = format(Decimal(value).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
