from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_day(value: date) -> str:
    """YYYY-MM-DD, the format both upstream APIs expect."""
    return value.isoformat()


def date_range(days: int, today: date | None = None) -> tuple[str, str]:
    """
    Returns (start, end) covering the last `days` days, today included.
    """
    end = today or utcnow().date()
    start = end - timedelta(days=max(1, days) - 1)
    return format_day(start), format_day(end)


def short_date_label(value: datetime | date) -> str:
    """Month abbreviation + day without padding, e.g. "Jan 5"."""
    return f"{value.strftime('%b')} {value.day}"


def label_from_epoch_ms(ts_ms: float) -> str:
    dt = datetime.fromtimestamp(float(ts_ms) / 1000.0, tz=timezone.utc)
    return short_date_label(dt)


def label_from_day(day: str) -> str:
    """Label for a YYYY-MM-DD key; unparseable keys are returned as-is."""
    try:
        parsed = date.fromisoformat(day[:10])
    except ValueError:
        return day
    return short_date_label(parsed)


def parse_utc(value: str) -> datetime | None:
    """Best-effort ISO parse ("2024-05-03T10:00Z" included); naive values are UTC."""
    s = value.strip().replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def short_datetime_label(value: datetime) -> str:
    """e.g. "May 3, 09:05 AM" (UTC)."""
    return f"{short_date_label(value)}, {value.strftime('%I:%M %p')}"
