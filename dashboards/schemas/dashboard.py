"""Derived, display-ready records returned by the dashboard endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dashboards.schemas.nasa import ApodItem


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class DerivedBar(_Frozen):
    """Bar with its raw value and a height in percent of the series max."""

    label: str
    value: float
    height: int = Field(ge=0, le=100)


class GreenRate(_Frozen):
    up: int
    down: int
    green_rate: float


class MarketShareItem(_Frozen):
    id: str
    symbol: str
    name: str
    share: float


class CoinMove(_Frozen):
    id: str
    symbol: str
    name: str
    current_price: float
    price_change_percentage_24h: float


class MarketMovers(_Frozen):
    top_gainer: Optional[CoinMove] = None
    top_loser: Optional[CoinMove] = None
    avg_change_24h: float = 0.0


class TopCoinRow(_Frozen):
    rank: Optional[int]
    id: str
    symbol: str
    name: str
    image: str
    current_price: float
    price_display: str
    price_change_percentage_24h: Optional[float]
    change_display: str
    change_positive: bool
    market_cap: float
    total_volume: float


class CryptoKpis(_Frozen):
    total_market_cap_usd: float
    total_volume_usd: float
    market_cap_change_24h_pct: float
    active_cryptocurrencies: int
    markets: int
    btc_dominance: float
    eth_dominance: float


class NeoDayBar(_Frozen):
    date: str
    label: str
    count: int
    height: int = Field(ge=0, le=100)


class NeoHazardSummary(_Frozen):
    total: int
    hazardous: int
    hazard_rate: float
    avg_diameter_km: float


class ClosestNeo(_Frozen):
    id: str
    name: str
    hazardous: bool
    date: str
    miss_km: float
    velocity_km_s: float
    orbiting_body: str
    diameter_min_km: float
    diameter_max_km: float


class FlareDayCount(_Frozen):
    date: str
    count: int


class FlareClassCount(_Frozen):
    flare_class: str
    count: int


class LatestFlare(_Frozen):
    flr_id: str
    class_type: Optional[str]
    begin_time: str
    peak_time: Optional[str]
    peak_label: Optional[str]
    source_location: str


class CryptoDashboard(BaseModel):
    kpis: CryptoKpis
    movers: MarketMovers
    chart_coin: str
    price_bars: List[DerivedBar]
    green_rate: GreenRate
    top_coins: List[TopCoinRow]
    market_share: List[MarketShareItem]
    volume_bars: List[DerivedBar]


class SpaceDashboard(BaseModel):
    window_days: int
    start_date: str
    end_date: str
    neo_hazards: NeoHazardSummary
    neo_bars: List[NeoDayBar]
    closest_neos: List[ClosestNeo]
    flare_count: int
    flares_by_day: List[FlareDayCount]
    flares_by_class: List[FlareClassCount]
    latest_flare: Optional[LatestFlare] = None
    featured_apod: Optional[ApodItem] = None
