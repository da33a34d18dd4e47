"""
Pure data transformation helpers for the crypto dashboard.
Nothing in here calls an API, the functions only shape payloads for display.
"""

from __future__ import annotations

from typing import Sequence

from dashboards.schemas.coingecko import GlobalMarketSnapshot, MarketCoin
from dashboards.schemas.dashboard import (
    CoinMove,
    CryptoKpis,
    DerivedBar,
    GreenRate,
    MarketMovers,
    MarketShareItem,
    TopCoinRow,
)
from dashboards.services.bars import bar_height
from dashboards.utils.formatting import format_change_pct, format_usd, is_non_negative_change
from dashboards.utils.time import label_from_epoch_ms

PricePoint = Sequence[float]  # (timestamp_ms, price)


def build_price_bars(prices: Sequence[PricePoint], max_points: int = 12) -> list[DerivedBar]:
    """
    Downsample a price series to at most max_points bars.

    Keeps every step-th sample (step = len // max_points, at least 1), then the
    most recent max_points of those. Heights are relative to the highest
    retained price, not the whole series.
    """
    if not prices or max_points <= 0:
        return []

    step = max(1, len(prices) // max_points)
    sampled = [p for idx, p in enumerate(prices) if idx % step == 0][-max_points:]

    max_value = max(price for _, price in sampled)

    return [
        DerivedBar(
            label=label_from_epoch_ms(ts),
            value=price,
            height=bar_height(price, max_value),
        )
        for ts, price in sampled
    ]


def compute_green_rate(prices: Sequence[PricePoint]) -> GreenRate:
    """
    Share of decisive moves that went up. Flat moves count as neither up nor down.
    """
    if len(prices) < 2:
        return GreenRate(up=0, down=0, green_rate=0.0)

    up = 0
    down = 0
    for i in range(1, len(prices)):
        diff = prices[i][1] - prices[i - 1][1]
        if diff > 0:
            up += 1
        elif diff < 0:
            down += 1

    total = up + down
    green_rate = (up / total) * 100 if total else 0.0
    return GreenRate(up=up, down=down, green_rate=green_rate)


def build_volume_bars(coins: Sequence[MarketCoin]) -> list[DerivedBar]:
    """24h volume per coin; a missing volume is a zero-height bar."""
    if not coins:
        return []

    volumes = [coin.total_volume or 0.0 for coin in coins]
    max_volume = max(volumes)

    return [
        DerivedBar(
            label=coin.symbol.upper(),
            value=volume,
            height=bar_height(volume, max_volume),
        )
        for coin, volume in zip(coins, volumes)
    ]


def compute_market_share(coins: Sequence[MarketCoin], top_k: int = 5) -> list[MarketShareItem]:
    """
    Market-cap share of each of the first top_k coins within that group.
    Coins are expected in market-cap order, as /coins/markets returns them.
    """
    top = list(coins[: max(0, top_k)])
    total = sum(coin.market_cap for coin in top)

    return [
        MarketShareItem(
            id=coin.id,
            symbol=coin.symbol,
            name=coin.name,
            share=(coin.market_cap / total) * 100 if total else 0.0,
        )
        for coin in top
    ]


def _as_move(coin: MarketCoin) -> CoinMove:
    return CoinMove(
        id=coin.id,
        symbol=coin.symbol,
        name=coin.name,
        current_price=coin.current_price,
        price_change_percentage_24h=coin.price_change_percentage_24h,
    )


def pick_market_movers(coins: Sequence[MarketCoin]) -> MarketMovers:
    """
    Top gainer / loser by 24h change plus the average change.
    Coins without a 24h change are left out entirely. On ties the first coin
    in input order wins.
    """
    with_change = [c for c in coins if c.price_change_percentage_24h is not None]
    if not with_change:
        return MarketMovers()

    # max()/min() keep the first of equal keys
    gainer = max(with_change, key=lambda c: c.price_change_percentage_24h)
    loser = min(with_change, key=lambda c: c.price_change_percentage_24h)
    avg = sum(c.price_change_percentage_24h for c in with_change) / len(with_change)

    return MarketMovers(top_gainer=_as_move(gainer), top_loser=_as_move(loser), avg_change_24h=avg)


def build_top_coin_rows(coins: Sequence[MarketCoin]) -> list[TopCoinRow]:
    return [
        TopCoinRow(
            rank=coin.market_cap_rank,
            id=coin.id,
            symbol=coin.symbol.upper(),
            name=coin.name,
            image=coin.image,
            current_price=coin.current_price,
            price_display=format_usd(coin.current_price),
            price_change_percentage_24h=coin.price_change_percentage_24h,
            change_display=format_change_pct(coin.price_change_percentage_24h),
            change_positive=is_non_negative_change(coin.price_change_percentage_24h),
            market_cap=coin.market_cap,
            total_volume=coin.total_volume or 0.0,
        )
        for coin in coins
    ]


def build_crypto_kpis(snapshot: GlobalMarketSnapshot) -> CryptoKpis:
    return CryptoKpis(
        total_market_cap_usd=snapshot.total_market_cap.get("usd", 0.0),
        total_volume_usd=snapshot.total_volume.get("usd", 0.0),
        market_cap_change_24h_pct=snapshot.market_cap_change_percentage_24h_usd,
        active_cryptocurrencies=snapshot.active_cryptocurrencies,
        markets=snapshot.markets,
        btc_dominance=snapshot.market_cap_percentage.get("btc", 0.0),
        eth_dominance=snapshot.market_cap_percentage.get("eth", 0.0),
    )
