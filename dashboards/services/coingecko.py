"""Helpers for interacting with the public CoinGecko API."""

from __future__ import annotations

from typing import Any, List

from dashboards.config.settings import get_settings
from dashboards.schemas.coingecko import GlobalMarketSnapshot, MarketChart, MarketCoin
from dashboards.services.fetch import FetchFailure, decode_payload, fetch_json


async def fetch_global_data() -> GlobalMarketSnapshot:
    """Aggregate market figures; the API wraps them in {"data": ...}."""
    s = get_settings()
    raw = await fetch_json("coingecko.global", f"{s.COINGECKO_API_BASE}/global", ttl=s.COINGECKO_CACHE_TTL)
    if not isinstance(raw, dict) or "data" not in raw:
        raise FetchFailure("coingecko.global", None, "missing data envelope")
    return decode_payload("coingecko.global", GlobalMarketSnapshot, raw["data"])


async def fetch_top_coins(
    limit: int = 10,
    vs_currency: str = "usd",
    order: str = "market_cap_desc",
    page: int = 1,
) -> List[MarketCoin]:
    """Top coins by market cap, with the 24h change included."""
    s = get_settings()
    params: dict[str, Any] = {
        "vs_currency": vs_currency,
        "order": order,
        "per_page": limit,
        "page": page,
        "sparkline": "false",
        "price_change_percentage": "24h",
    }
    raw = await fetch_json(
        "coingecko.markets",
        f"{s.COINGECKO_API_BASE}/coins/markets",
        params,
        ttl=s.COINGECKO_CACHE_TTL,
    )
    return decode_payload("coingecko.markets", List[MarketCoin], raw)


async def fetch_market_chart(coin_id: str = "bitcoin", days: int = 30, vs_currency: str = "usd") -> MarketChart:
    s = get_settings()
    params = {"vs_currency": vs_currency, "days": days}
    raw = await fetch_json(
        "coingecko.market_chart",
        f"{s.COINGECKO_API_BASE}/coins/{coin_id}/market_chart",
        params,
        ttl=s.COINGECKO_CACHE_TTL,
    )
    return decode_payload("coingecko.market_chart", MarketChart, raw)
