import math


def bar_height(value: float, max_value: float) -> int:
    """
    Height of a bar in percent of the tallest bar in its series:
      height = round(value / max_value * 100)

    Halves round up. Returns 0 when max_value is 0 (empty or all-zero series).
    """
    if not max_value:
        return 0
    pct = (value / max_value) * 100
    return max(0, min(100, math.floor(pct + 0.5)))
