# dashboards/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from dashboards.api.crypto import router as crypto_router
from dashboards.api.errors import install_error_handlers
from dashboards.api.health import router as health_router
from dashboards.api.space import router as space_router
from dashboards.config.settings import get_settings

logger = logging.getLogger("dashboards")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )


app = FastAPI(title="Market & Space Dashboards API")

# Routers
app.include_router(health_router)
app.include_router(crypto_router)
app.include_router(space_router)

install_error_handlers(app)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Dashboards up", "crypto": "/crypto/dashboard", "space": "/space/dashboard"}


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if settings.using_demo_key:
        logger.warning("NASA_API_KEY not set, using DEMO_KEY (strict upstream rate limits)")
    logger.info(
        "dashboards started | coingecko_ttl_s=%s | nasa_ttl_s=%s | cache=%s",
        settings.COINGECKO_CACHE_TTL,
        settings.NASA_CACHE_TTL,
        settings.CACHE_ENABLED,
    )
