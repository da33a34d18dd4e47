# dashboards/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_str(value: str | None, default: str) -> str:
    if value is None or value.strip() == "":
        return default
    return value.strip()


# Public NASA key, heavily rate limited upstream.
NASA_DEMO_KEY = "DEMO_KEY"


@dataclass(frozen=True)
class Settings:
    COINGECKO_API_BASE: str
    NASA_API_BASE: str
    NASA_API_KEY: str
    COINGECKO_CACHE_TTL: int
    NASA_CACHE_TTL: int
    CACHE_ENABLED: bool
    HTTP_TIMEOUT_SECONDS: float
    TOP_COINS_LIMIT: int
    CHART_COIN: str
    CHART_DAYS: int
    SPACE_WINDOW_DAYS: int
    LOG_LEVEL: str

    @property
    def using_demo_key(self) -> bool:
        return self.NASA_API_KEY == NASA_DEMO_KEY

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_API_BASE=parse_str(os.getenv("COINGECKO_API_BASE"), "https://api.coingecko.com/api/v3"),
            NASA_API_BASE=parse_str(os.getenv("NASA_API_BASE"), "https://api.nasa.gov"),
            NASA_API_KEY=parse_str(os.getenv("NASA_API_KEY"), NASA_DEMO_KEY),
            COINGECKO_CACHE_TTL=parse_int(os.getenv("COINGECKO_CACHE_TTL"), 60),
            NASA_CACHE_TTL=parse_int(os.getenv("NASA_CACHE_TTL"), 600),
            CACHE_ENABLED=parse_bool(os.getenv("CACHE_ENABLED"), True),
            HTTP_TIMEOUT_SECONDS=parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), 10.0),
            TOP_COINS_LIMIT=parse_int(os.getenv("TOP_COINS_LIMIT"), 10),
            CHART_COIN=parse_str(os.getenv("CHART_COIN"), "bitcoin"),
            CHART_DAYS=parse_int(os.getenv("CHART_DAYS"), 30),
            SPACE_WINDOW_DAYS=parse_int(os.getenv("SPACE_WINDOW_DAYS"), 7),
            LOG_LEVEL=parse_str(os.getenv("LOG_LEVEL"), "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
