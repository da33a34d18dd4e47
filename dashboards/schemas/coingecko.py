"""Pydantic models for the CoinGecko payloads consumed by the crypto dashboard."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class GlobalMarketSnapshot(BaseModel):
    """Body of GET /global (unwrapped from its "data" envelope)."""

    active_cryptocurrencies: int = 0
    markets: int = 0
    total_market_cap: Dict[str, float] = Field(default_factory=dict)
    total_volume: Dict[str, float] = Field(default_factory=dict)
    market_cap_percentage: Dict[str, float] = Field(default_factory=dict)
    market_cap_change_percentage_24h_usd: float = 0.0


class MarketCoin(BaseModel):
    """One item of GET /coins/markets."""

    id: str
    symbol: str
    name: str
    image: str = ""
    current_price: float = 0.0
    market_cap: float = 0.0
    total_volume: Optional[float] = None
    # None means "no data", which is not the same as a flat day.
    price_change_percentage_24h: Optional[float] = None
    market_cap_rank: Optional[int] = None

    @field_validator("current_price", "market_cap", mode="before")
    @classmethod
    def null_as_zero(cls, value):
        return 0.0 if value is None else value


class MarketChart(BaseModel):
    """GET /coins/{id}/market_chart. Each series is [timestamp_ms, value] pairs."""

    prices: List[Tuple[float, float]] = Field(default_factory=list)
    market_caps: List[Tuple[float, float]] = Field(default_factory=list)
    total_volumes: List[Tuple[float, float]] = Field(default_factory=list)
