"""Price and trending-token lookups over public HTTP APIs."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, Field

from monad_agent.tools.registry import Operation, tool

if TYPE_CHECKING:
    from monad_agent.session import SessionContext

logger = logging.getLogger("monad_agent.tools.market")

USER_AGENT = "Mozilla/5.0 (compatible; MonadAgent/0.1)"
TRENDING_LIMIT = 5

# Explorer token table: first cell is the token, second the price
_ROW_RE = re.compile(r"<tr[^>]*>(.*?)</tr>", re.DOTALL | re.IGNORECASE)
_CELL_RE = re.compile(r"<td[^>]*>(.*?)</td>", re.DOTALL | re.IGNORECASE)
_TBODY_RE = re.compile(r"<tbody[^>]*>(.*?)</tbody>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def _strip_tags(html: str) -> str:
    """Remove HTML tags and decode common entities."""
    text = _TAG_RE.sub(" ", html)
    text = text.replace("&amp;", "&").replace("&lt;", "<").replace("&gt;", ">")
    text = text.replace("&quot;", '"').replace("&#x27;", "'").replace("&nbsp;", " ")
    return _WS_RE.sub(" ", text).strip()


def parse_token_table(html: str) -> list[tuple[str, str]]:
    """Return ``(token, price)`` pairs from the table bodies of an explorer page."""
    rows: list[tuple[str, str]] = []
    for body in _TBODY_RE.findall(html):
        for row in _ROW_RE.findall(body):
            cells = [_strip_tags(c) for c in _CELL_RE.findall(row)]
            if len(cells) >= 2 and cells[0] and cells[1]:
                rows.append((cells[0], cells[1]))
    return rows


def _http_client(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


class TokenPriceInput(BaseModel):
    token: str = Field(description="CoinGecko token id or ticker, e.g. monad, ethereum")


@tool(Operation.GET_TOKEN_PRICE, "Get real-time token price from CoinGecko", TokenPriceInput)
async def get_token_price(session: SessionContext, token: str) -> str:
    coin_id = token.strip().lower()
    if not coin_id:
        return "A token id is required."
    market = session.market
    headers = {"User-Agent": USER_AGENT}
    if market.coingecko_api_key:
        headers["x-cg-demo-api-key"] = market.coingecko_api_key

    try:
        async with _http_client(market.request_timeout_seconds) as client:
            resp = await client.get(
                f"{market.coingecko_base_url.rstrip('/')}/simple/price",
                params={"ids": coin_id, "vs_currencies": "usd"},
                headers=headers,
            )
            resp.raise_for_status()
            data = resp.json()
    except Exception as e:
        logger.error("Price lookup for %s failed: %s", coin_id, e)
        return f"Failed to fetch price: {e}"

    price = (data.get(coin_id) or {}).get("usd") if isinstance(data, dict) else None
    if price is None:
        return f"Price not found for {token}"
    return f"Price of {token}: ${price} USD"


@tool(Operation.GET_TRENDING_TOKENS, "Get trending tokens from the Monad Testnet explorer")
async def get_trending_tokens(session: SessionContext) -> str:
    url = f"{session.network.explorer_url}/tokens"
    try:
        async with _http_client(session.market.request_timeout_seconds) as client:
            resp = await client.get(url, headers={"User-Agent": USER_AGENT})
            resp.raise_for_status()
            html = resp.text
    except Exception as e:
        logger.error("Trending tokens scrape failed: %s", e)
        return f"Failed to fetch trending tokens: {e}"

    tokens = parse_token_table(html)
    if not tokens:
        return "No token data found on the explorer."
    lines = [f"- **{name}**: {price}" for name, price in tokens[:TRENDING_LIMIT]]
    return "Trending tokens from Monad Testnet:\n" + "\n".join(lines)
