from fastapi import APIRouter, Query

from dashboards.schemas.dashboard import SpaceDashboard
from dashboards.schemas.nasa import ApodItem, NeoFeed, SolarFlareEvent
from dashboards.services.dashboards import build_space_dashboard
from dashboards.services.nasa import fetch_apod_range, fetch_neo_feed, fetch_solar_flares


router = APIRouter(prefix="/space", tags=["space"])


@router.get("/dashboard", response_model=SpaceDashboard)
async def get_space_dashboard():
    return await build_space_dashboard()


@router.get("/neo", response_model=NeoFeed)
async def get_neo_feed(days: int = Query(7, ge=1, le=7)):
    # NeoWs caps the feed window at 7 days
    return await fetch_neo_feed(days)


@router.get("/flares", response_model=list[SolarFlareEvent], response_model_by_alias=False)
async def get_flares(days: int = Query(7, ge=1, le=30)):
    return await fetch_solar_flares(days)


@router.get("/apod", response_model=list[ApodItem])
async def get_apod(days: int = Query(7, ge=1, le=30)):
    return await fetch_apod_range(days)
