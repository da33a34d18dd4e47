# dashboards/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from dashboards.config.settings import get_settings
from dashboards.utils.cache import cache_size

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_unix": int(now_ts),
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


def _check_config() -> Dict[str, Any]:
    s = get_settings()
    warnings = []
    if s.using_demo_key:
        warnings.append("nasa_demo_key")
    return {
        "ok": True,
        "coingecko_api_base": s.COINGECKO_API_BASE,
        "nasa_api_base": s.NASA_API_BASE,
        "warnings": warnings,
    }


def _check_cache() -> Dict[str, Any]:
    s = get_settings()
    return {
        "ok": True,
        "enabled": s.CACHE_ENABLED,
        "entries": cache_size(),
        "ttl_s": {"coingecko": s.COINGECKO_CACHE_TTL, "nasa": s.NASA_CACHE_TTL},
    }


def build_ready_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        **_now_meta(),
        "checks": {
            "config": _check_config(),
            "cache": _check_cache(),
        },
    }


@router.get("/live")
async def live():
    return {"status": "ok"}


@router.get("/ready")
async def ready():
    # Upstreams are not probed here; a dashboard request is the real check.
    return build_ready_payload()
