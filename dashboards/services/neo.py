from __future__ import annotations

import math
from typing import Optional, Sequence

from dashboards.schemas.dashboard import ClosestNeo, NeoDayBar, NeoHazardSummary
from dashboards.schemas.nasa import NeoFeed, TaggedNeo
from dashboards.services.bars import bar_height
from dashboards.utils.time import label_from_day


def _to_float(value: str) -> Optional[float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def flatten_neos(feed: NeoFeed) -> list[TaggedNeo]:
    """One flat list of feed objects, each tagged with its feed day."""
    return [
        TaggedNeo(**neo.model_dump(), date=day)
        for day, objects in feed.near_earth_objects.items()
        for neo in objects
    ]


def build_neo_bars(feed: NeoFeed) -> list[NeoDayBar]:
    """NEO count per feed day, days in ascending order."""
    days = sorted(feed.near_earth_objects)
    if not days:
        return []

    counts = [len(feed.near_earth_objects[d]) for d in days]
    max_count = max(counts)

    return [
        NeoDayBar(date=day, label=label_from_day(day), count=count, height=bar_height(count, max_count))
        for day, count in zip(days, counts)
    ]


def compute_neo_hazards(neos: Sequence[TaggedNeo]) -> NeoHazardSummary:
    """
    Totals for the KPI cards and the hazard gauge:
      hazard_rate     = hazardous / total * 100
      avg_diameter_km = mean of (min + max) / 2 per object
    Both are 0 for an empty list.
    """
    total = len(neos)
    hazardous = sum(1 for n in neos if n.is_potentially_hazardous_asteroid)

    diameters = [
        (n.estimated_diameter.kilometers.estimated_diameter_min + n.estimated_diameter.kilometers.estimated_diameter_max) / 2
        for n in neos
    ]
    avg_diameter_km = sum(diameters) / len(diameters) if diameters else 0.0
    hazard_rate = (hazardous / total) * 100 if total else 0.0

    return NeoHazardSummary(
        total=total,
        hazardous=hazardous,
        hazard_rate=hazard_rate,
        avg_diameter_km=avg_diameter_km,
    )


def pick_closest_neos(neos: Sequence[TaggedNeo], limit: int = 8) -> list[ClosestNeo]:
    """
    Closest approaches, nearest first.

    Only the first close-approach record of each object is considered; objects
    without one, or whose miss distance is not a finite number, are skipped. The
    approach date replaces the feed day.
    """
    ranked: list[ClosestNeo] = []
    for n in neos:
        if not n.close_approach_data:
            continue
        first = n.close_approach_data[0]
        miss_km = _to_float(first.miss_distance.kilometers)
        if miss_km is None:
            continue
        velocity = _to_float(first.relative_velocity.kilometers_per_second)
        diameter = n.estimated_diameter.kilometers
        ranked.append(
            ClosestNeo(
                id=n.id,
                name=n.name,
                hazardous=n.is_potentially_hazardous_asteroid,
                date=first.close_approach_date,
                miss_km=miss_km,
                velocity_km_s=velocity if velocity is not None else 0.0,
                orbiting_body=first.orbiting_body,
                diameter_min_km=diameter.estimated_diameter_min,
                diameter_max_km=diameter.estimated_diameter_max,
            )
        )

    ranked.sort(key=lambda r: r.miss_km)
    return ranked[: max(0, limit)]
