"""Display helpers. Only this layer may turn a missing value into a printable zero."""

from __future__ import annotations


def format_change_pct(value: float | None) -> str:
    if not value:
        return "0.00%"
    return f"{value:.2f}%"


def is_non_negative_change(value: float | None) -> bool:
    return (value or 0.0) >= 0


def format_usd(value: float | None) -> str:
    return f"${(value or 0.0):,.2f}"
