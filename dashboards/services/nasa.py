"""Wrappers for the NASA Open APIs (APOD, NeoWs, DONKI)."""

from __future__ import annotations

from datetime import date
from typing import Any, List

from dashboards.config.settings import get_settings
from dashboards.schemas.nasa import ApodItem, NeoFeed, SolarFlareEvent
from dashboards.services.fetch import decode_payload, fetch_json
from dashboards.utils.time import date_range


async def fetch_nasa(resource: str, path: str, params: dict[str, Any]) -> Any:
    """GET a NASA endpoint with the api_key injected."""
    s = get_settings()
    query = {"api_key": s.NASA_API_KEY, **params}
    return await fetch_json(resource, f"{s.NASA_API_BASE}{path}", query, ttl=s.NASA_CACHE_TTL)


async def fetch_apod_range(days: int, today: date | None = None) -> List[ApodItem]:
    start, end = date_range(days, today)
    raw = await fetch_nasa(
        "nasa.apod",
        "/planetary/apod",
        {"start_date": start, "end_date": end, "thumbs": "true"},
    )
    items = decode_payload("nasa.apod", List[ApodItem], raw)
    return sorted(items, key=lambda a: a.date)


async def fetch_neo_feed(days: int, today: date | None = None) -> NeoFeed:
    """NeoWs feed; the upstream rejects windows longer than 7 days."""
    start, end = date_range(days, today)
    raw = await fetch_nasa("nasa.neo_feed", "/neo/rest/v1/feed", {"start_date": start, "end_date": end})
    return decode_payload("nasa.neo_feed", NeoFeed, raw)


async def fetch_solar_flares(days: int, today: date | None = None) -> List[SolarFlareEvent]:
    start, end = date_range(days, today)
    raw = await fetch_nasa("nasa.donki_flr", "/DONKI/FLR", {"startDate": start, "endDate": end})
    # DONKI answers an empty window with an empty body
    if raw is None:
        raw = []
    flares = decode_payload("nasa.donki_flr", List[SolarFlareEvent], raw)
    return sorted(flares, key=lambda f: f.begin_time)
