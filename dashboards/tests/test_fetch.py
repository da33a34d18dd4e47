from __future__ import annotations

import asyncio
from datetime import date

import httpx
import pytest

from dashboards.config import settings as settings_module
from dashboards.services import fetch as fetch_module
from dashboards.services.coingecko import fetch_global_data, fetch_market_chart, fetch_top_coins
from dashboards.services.fetch import FetchFailure, fetch_json, gather_all
from dashboards.services.nasa import fetch_apod_range, fetch_neo_feed, fetch_solar_flares
from dashboards.utils import cache as cache_module
from dashboards.utils.cache import cache_size, clear_cache, get_cache, set_cache

TODAY = date(2024, 3, 7)


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch):
    monkeypatch.delenv("NASA_API_KEY", raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture()
def upstream(monkeypatch):
    """Route every outbound request to a handler; returns the list of seen requests."""
    seen: list[httpx.Request] = []
    routes: dict[str, httpx.Response] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        for path, response in routes.items():
            if request.url.path.endswith(path):
                return httpx.Response(response.status_code, headers=response.headers, content=response.content)
        return httpx.Response(404, json={"error": "not found"})

    def _client(timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=timeout)

    monkeypatch.setattr(fetch_module, "_build_client", _client)
    return routes, seen


# ----------------------------
# CoinGecko
# ----------------------------
@pytest.mark.asyncio
async def test_global_data_unwraps_envelope(upstream):
    routes, seen = upstream
    routes["/global"] = httpx.Response(
        200,
        json={
            "data": {
                "active_cryptocurrencies": 10,
                "markets": 5,
                "total_market_cap": {"usd": 100.0},
                "total_volume": {"usd": 10.0},
                "market_cap_percentage": {"btc": 50.0, "eth": 20.0},
                "market_cap_change_percentage_24h_usd": 1.5,
            }
        },
    )

    snapshot = await fetch_global_data()
    assert snapshot.market_cap_percentage["btc"] == 50.0
    assert seen[0].url.host == "api.coingecko.com"
    assert seen[0].url.path == "/api/v3/global"


@pytest.mark.asyncio
async def test_top_coins_query_and_nullable_change(upstream):
    routes, seen = upstream
    routes["/coins/markets"] = httpx.Response(
        200,
        json=[
            {
                "id": "bitcoin",
                "symbol": "btc",
                "name": "Bitcoin",
                "image": "https://img/btc.png",
                "current_price": 60000,
                "market_cap": 1.2e12,
                "total_volume": 3.0e10,
                "price_change_percentage_24h": None,
                "market_cap_rank": 1,
            }
        ],
    )

    coins = await fetch_top_coins(limit=10)

    assert coins[0].price_change_percentage_24h is None
    params = dict(seen[0].url.params)
    assert params == {
        "vs_currency": "usd",
        "order": "market_cap_desc",
        "per_page": "10",
        "page": "1",
        "sparkline": "false",
        "price_change_percentage": "24h",
    }


@pytest.mark.asyncio
async def test_market_chart_path(upstream):
    routes, seen = upstream
    routes["/coins/ethereum/market_chart"] = httpx.Response(
        200, json={"prices": [[1, 2.0]], "market_caps": [], "total_volumes": []}
    )

    chart = await fetch_market_chart("ethereum", 7)

    assert chart.prices == [(1.0, 2.0)]
    assert dict(seen[0].url.params) == {"vs_currency": "usd", "days": "7"}


# ----------------------------
# failures
# ----------------------------
@pytest.mark.asyncio
async def test_non_success_status_raises_fetch_failure(upstream):
    routes, _ = upstream
    routes["/global"] = httpx.Response(429, json={"status": "rate limited"})

    with pytest.raises(FetchFailure) as excinfo:
        await fetch_global_data()

    assert excinfo.value.resource == "coingecko.global"
    assert excinfo.value.status_code == 429


@pytest.mark.asyncio
async def test_transport_error_raises_fetch_failure(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    monkeypatch.setattr(
        fetch_module,
        "_build_client",
        lambda timeout: httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=timeout),
    )

    with pytest.raises(FetchFailure) as excinfo:
        await fetch_json("thing", "https://example.invalid/thing")
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_unexpected_shape_raises_fetch_failure(upstream):
    routes, _ = upstream
    routes["/coins/markets"] = httpx.Response(200, json={"not": "a list"})

    with pytest.raises(FetchFailure) as excinfo:
        await fetch_top_coins()
    assert excinfo.value.resource == "coingecko.markets"


# ----------------------------
# cache
# ----------------------------
@pytest.mark.asyncio
async def test_fresh_responses_served_from_cache(upstream):
    routes, seen = upstream
    routes["/thing"] = httpx.Response(200, json={"n": 1})

    first = await fetch_json("thing", "https://example.invalid/thing", {"a": 1}, ttl=60)
    second = await fetch_json("thing", "https://example.invalid/thing", {"a": 1}, ttl=60)
    await fetch_json("thing", "https://example.invalid/thing", {"a": 2}, ttl=60)

    assert first == second == {"n": 1}
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_cache_disabled_by_setting(upstream, monkeypatch):
    monkeypatch.setenv("CACHE_ENABLED", "false")
    routes, seen = upstream
    routes["/thing"] = httpx.Response(200, json={"n": 1})

    await fetch_json("thing", "https://example.invalid/thing", ttl=60)
    await fetch_json("thing", "https://example.invalid/thing", ttl=60)

    assert len(seen) == 2


# ----------------------------
# NASA
# ----------------------------
@pytest.mark.asyncio
async def test_nasa_requests_carry_key_and_window(upstream, monkeypatch):
    monkeypatch.setenv("NASA_API_KEY", "secret")
    routes, seen = upstream
    routes["/neo/rest/v1/feed"] = httpx.Response(200, json={"element_count": 0, "near_earth_objects": {}})

    feed = await fetch_neo_feed(7, today=TODAY)

    assert feed.element_count == 0
    assert dict(seen[0].url.params) == {
        "api_key": "secret",
        "start_date": "2024-03-01",
        "end_date": "2024-03-07",
    }


@pytest.mark.asyncio
async def test_nasa_falls_back_to_demo_key(upstream):
    routes, seen = upstream
    routes["/DONKI/FLR"] = httpx.Response(200, content=b"")

    flares = await fetch_solar_flares(3, today=TODAY)

    assert flares == []
    params = dict(seen[0].url.params)
    assert params["api_key"] == "DEMO_KEY"
    assert (params["startDate"], params["endDate"]) == ("2024-03-05", "2024-03-07")


@pytest.mark.asyncio
async def test_apod_and_flares_sorted_ascending(upstream):
    routes, _ = upstream
    routes["/planetary/apod"] = httpx.Response(
        200,
        json=[
            {"date": "2024-03-07", "title": "B", "url": "u", "explanation": "", "media_type": "image"},
            {"date": "2024-03-05", "title": "A", "url": "u", "explanation": "", "media_type": "video"},
        ],
    )
    routes["/DONKI/FLR"] = httpx.Response(
        200,
        json=[
            {"flrID": "2", "beginTime": "2024-03-06T10:00Z", "classType": "M1.0"},
            {"flrID": "1", "beginTime": "2024-03-05T09:00Z", "classType": "C2.0"},
        ],
    )

    apods = await fetch_apod_range(7, today=TODAY)
    flares = await fetch_solar_flares(7, today=TODAY)

    assert [a.title for a in apods] == ["A", "B"]
    assert [f.flr_id for f in flares] == ["1", "2"]


# ----------------------------
# fan-out
# ----------------------------
@pytest.mark.asyncio
async def test_gather_all_preserves_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_all(value(1, 0.02), value(2, 0.0), value(3, 0.01)) == [1, 2, 3]


@pytest.mark.asyncio
async def test_gather_all_fails_fast_and_cancels_siblings():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def failing():
        raise FetchFailure("nasa.apod", 503)

    with pytest.raises(FetchFailure):
        await asyncio.wait_for(gather_all(slow(), failing()), timeout=2)

    assert cancelled.is_set()


# ----------------------------
# cache edge cases
# ----------------------------
class _Clock:
    def __init__(self, now: float):
        self.now = now

    def time(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_empty_body_is_cached_like_any_other(upstream):
    routes, seen = upstream
    routes["/DONKI/FLR"] = httpx.Response(200, content=b"")

    for _ in range(3):
        assert await fetch_solar_flares(7, today=TODAY) == []

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_expired_entries_dropped_when_new_ones_are_stored(upstream, monkeypatch):
    routes, seen = upstream
    routes["/market_chart"] = httpx.Response(200, json={"prices": [], "market_caps": [], "total_volumes": []})
    clock = _Clock(1_000_000.0)
    monkeypatch.setattr(cache_module, "time", clock)

    for days in range(1, 31):
        await fetch_market_chart("bitcoin", days)
    assert cache_size() == 30

    clock.now += 61
    await fetch_market_chart("bitcoin", 365)

    assert cache_size() == 1
    assert len(seen) == 31


def test_get_cache_default_separates_cached_none_from_miss(monkeypatch):
    clock = _Clock(500.0)
    monkeypatch.setattr(cache_module, "time", clock)
    missing = object()

    set_cache("k", None, 10)
    assert get_cache("k", 10, missing) is None
    assert get_cache("other", 10, missing) is missing

    clock.now += 11
    assert get_cache("k", 10, missing) is missing


def test_cache_key_encodes_params():
    # without encoding both would read "?a=1&b=2"
    assert fetch_module._cache_key("https://x.invalid/p", {"a": "1&b=2"}) != fetch_module._cache_key(
        "https://x.invalid/p", {"a": "1", "b": "2"}
    )
    assert fetch_module._cache_key("https://x.invalid/p", {"b": 2, "a": 1}) == fetch_module._cache_key(
        "https://x.invalid/p", {"a": "1", "b": "2"}
    )
