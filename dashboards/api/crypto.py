from fastapi import APIRouter, Query

from dashboards.schemas.coingecko import GlobalMarketSnapshot, MarketChart, MarketCoin
from dashboards.schemas.dashboard import CryptoDashboard
from dashboards.services.coingecko import fetch_global_data, fetch_market_chart, fetch_top_coins
from dashboards.services.dashboards import build_crypto_dashboard


router = APIRouter(prefix="/crypto", tags=["crypto"])


@router.get("/dashboard", response_model=CryptoDashboard)
async def get_crypto_dashboard():
    """
    Everything the crypto page renders: KPI cards, movers, price bars,
    green-day gauge, top coins table, market share and volume bars.
    """
    return await build_crypto_dashboard()


@router.get("/global", response_model=GlobalMarketSnapshot)
async def get_global():
    return await fetch_global_data()


@router.get("/coins", response_model=list[MarketCoin])
async def get_coins(limit: int = Query(10, ge=1, le=250)):
    return await fetch_top_coins(limit=limit)


@router.get("/chart", response_model=MarketChart)
async def get_chart(
    coin: str = "bitcoin",
    days: int = Query(30, ge=1, le=365),
):
    """
    Raw price / market cap / volume history.
    Example: /crypto/chart?coin=ethereum&days=7
    """
    return await fetch_market_chart(coin, days)
