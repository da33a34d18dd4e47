# dashboards/services/dashboards.py
from __future__ import annotations

import logging
import time
from datetime import date

from dashboards.config.settings import get_settings
from dashboards.schemas.dashboard import CryptoDashboard, SpaceDashboard
from dashboards.services.coingecko import fetch_global_data, fetch_market_chart, fetch_top_coins
from dashboards.services.fetch import gather_all
from dashboards.services.flares import count_flares_by_class, group_flares_by_day, pick_latest_flare
from dashboards.services.metrics import (
    build_crypto_kpis,
    build_price_bars,
    build_top_coin_rows,
    build_volume_bars,
    compute_green_rate,
    compute_market_share,
    pick_market_movers,
)
from dashboards.services.nasa import fetch_apod_range, fetch_neo_feed, fetch_solar_flares
from dashboards.services.neo import build_neo_bars, compute_neo_hazards, flatten_neos, pick_closest_neos
from dashboards.utils.time import date_range

logger = logging.getLogger("dashboards.assembly")

PRICE_BAR_COUNT = 12
MARKET_SHARE_TOP_K = 5
CLOSEST_NEO_LIMIT = 8


async def build_crypto_dashboard() -> CryptoDashboard:
    """
    Fetch global stats, top coins and the chart coin's history together,
    then derive every widget's data. Any fetch failure aborts the whole build.
    """
    s = get_settings()
    t0 = time.time()

    snapshot, coins, chart = await gather_all(
        fetch_global_data(),
        fetch_top_coins(limit=s.TOP_COINS_LIMIT),
        fetch_market_chart(s.CHART_COIN, s.CHART_DAYS),
    )

    dashboard = CryptoDashboard(
        kpis=build_crypto_kpis(snapshot),
        movers=pick_market_movers(coins),
        chart_coin=s.CHART_COIN,
        price_bars=build_price_bars(chart.prices, PRICE_BAR_COUNT),
        green_rate=compute_green_rate(chart.prices),
        top_coins=build_top_coin_rows(coins),
        market_share=compute_market_share(coins, MARKET_SHARE_TOP_K),
        volume_bars=build_volume_bars(coins),
    )

    logger.info(
        "crypto dashboard built | coins=%s | price_points=%s | %dms",
        len(coins),
        len(chart.prices),
        int((time.time() - t0) * 1000),
    )
    return dashboard


async def build_space_dashboard(today: date | None = None) -> SpaceDashboard:
    s = get_settings()
    days = s.SPACE_WINDOW_DAYS
    start, end = date_range(days, today)
    t0 = time.time()

    apods, neo_feed, flares = await gather_all(
        fetch_apod_range(days, today),
        fetch_neo_feed(days, today),
        fetch_solar_flares(days, today),
    )

    neos = flatten_neos(neo_feed)

    dashboard = SpaceDashboard(
        window_days=days,
        start_date=start,
        end_date=end,
        neo_hazards=compute_neo_hazards(neos),
        neo_bars=build_neo_bars(neo_feed),
        closest_neos=pick_closest_neos(neos, CLOSEST_NEO_LIMIT),
        flare_count=len(flares),
        flares_by_day=group_flares_by_day(flares),
        flares_by_class=count_flares_by_class(flares),
        latest_flare=pick_latest_flare(flares),
        # latest picture of the window
        featured_apod=apods[-1] if apods else None,
    )

    logger.info(
        "space dashboard built | neos=%s | flares=%s | apods=%s | %dms",
        len(neos),
        len(flares),
        len(apods),
        int((time.time() - t0) * 1000),
    )
    return dashboard
