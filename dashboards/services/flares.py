from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from dashboards.schemas.dashboard import FlareClassCount, FlareDayCount, LatestFlare
from dashboards.schemas.nasa import SolarFlareEvent
from dashboards.utils.time import parse_utc, short_datetime_label

UNKNOWN_SOURCE = "Unknown"


def group_flares_by_day(flares: Sequence[SolarFlareEvent]) -> list[FlareDayCount]:
    """
    Flare count per calendar day of beginTime, ascending by day.
    Days without flares are not emitted.
    """
    counts = Counter(f.begin_time[:10] for f in flares)
    return [FlareDayCount(date=day, count=counts[day]) for day in sorted(counts)]


def count_flares_by_class(flares: Sequence[SolarFlareEvent]) -> list[FlareClassCount]:
    """Flare count per GOES class letter (A, B, C, M, X); "?" when unclassified."""
    counts = Counter((f.class_type or "?")[:1].upper() for f in flares)
    return [FlareClassCount(flare_class=k, count=counts[k]) for k in sorted(counts)]


def pick_latest_flare(flares: Sequence[SolarFlareEvent]) -> Optional[LatestFlare]:
    """Last flare of a list sorted by beginTime, or None for a quiet window."""
    if not flares:
        return None

    latest = flares[-1]
    peak = parse_utc(latest.peak_time) if latest.peak_time else None
    return LatestFlare(
        flr_id=latest.flr_id,
        class_type=latest.class_type,
        begin_time=latest.begin_time,
        peak_time=latest.peak_time,
        peak_label=short_datetime_label(peak) if peak else None,
        source_location=latest.source_location or UNKNOWN_SOURCE,
    )
