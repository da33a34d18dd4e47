import time
from typing import Any


# Simple in-memory cache: key -> (stored_at, ttl, value)
_cache: dict[str, tuple[float, int, Any]] = {}


def get_cache(key: str, ttl: int, default: Any = None) -> Any:
    """
    Return cached value if it exists and is not older than ttl seconds,
    otherwise default. Pass a sentinel default to tell a cached None from a miss.
    """
    if key not in _cache:
        return default

    timestamp, _, value = _cache[key]

    # Check if cache has expired
    if time.time() - timestamp > ttl:
        del _cache[key]
        return default

    return value


def set_cache(key: str, value: Any, ttl: int) -> None:
    """
    Store value with current timestamp, dropping every entry past its own ttl.
    """
    now = time.time()
    expired = [k for k, (ts, entry_ttl, _) in _cache.items() if now - ts > entry_ttl]
    for k in expired:
        del _cache[k]
    _cache[key] = (now, ttl, value)


def clear_cache() -> None:
    _cache.clear()


def cache_size() -> int:
    return len(_cache)
