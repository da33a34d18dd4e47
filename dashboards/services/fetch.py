"""Shared GET + decode path for every upstream resource."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Mapping

import httpx
from pydantic import TypeAdapter, ValidationError

from dashboards.config.settings import get_settings
from dashboards.utils.cache import get_cache, set_cache

logger = logging.getLogger("dashboards.fetch")

# an empty upstream body is cached as None
_MISS = object()


class FetchFailure(RuntimeError):
    """An upstream resource could not be fetched or decoded.

    status_code is the upstream HTTP status, or None when no usable
    response came back (transport error, timeout).
    """

    def __init__(self, resource: str, status_code: int | None = None, detail: str | None = None):
        message = f"Failed to fetch {resource}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.resource = resource
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {"resource": self.resource, "status_code": self.status_code}


def _build_client(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


def _cache_key(url: str, params: Mapping[str, Any] | None) -> str:
    items = sorted((k, str(v)) for k, v in (params or {}).items())
    return str(httpx.URL(url, params=items))


async def fetch_json(
    resource: str,
    url: str,
    params: Mapping[str, Any] | None = None,
    *,
    ttl: int = 0,
) -> Any:
    """GET url and return the decoded JSON body, served from cache when fresh."""
    settings = get_settings()
    use_cache = settings.CACHE_ENABLED and ttl > 0
    key = _cache_key(url, params)

    if use_cache:
        cached = get_cache(key, ttl, _MISS)
        if cached is not _MISS:
            logger.debug("cache hit | %s", resource)
            return cached

    t0 = time.time()
    try:
        async with _build_client(settings.HTTP_TIMEOUT_SECONDS) as client:
            response = await client.get(url, params=dict(params or {}))
    except httpx.HTTPError as exc:
        logger.warning("fetch error | %s | err=%s", resource, exc)
        raise FetchFailure(resource, None, str(exc) or type(exc).__name__) from exc

    dt_ms = int((time.time() - t0) * 1000)
    if not response.is_success:
        logger.warning("fetch failed | %s | status=%s | %dms", resource, response.status_code, dt_ms)
        raise FetchFailure(resource, response.status_code, response.reason_phrase or None)

    if not response.content.strip():
        data = None
    else:
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchFailure(resource, response.status_code, "invalid JSON body") from exc

    logger.info("fetched | %s | status=%s | %dms", resource, response.status_code, dt_ms)

    if use_cache:
        set_cache(key, data, ttl)
    return data


def decode_payload(resource: str, type_: Any, data: Any) -> Any:
    """Validate raw JSON against a pydantic type; shape mismatches count as fetch failures."""
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as exc:
        raise FetchFailure(resource, None, f"unexpected payload shape ({exc.error_count()} errors)") from exc


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """
    Run awaitables concurrently and return their results in order.
    The first failure cancels whatever is still running and is re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
