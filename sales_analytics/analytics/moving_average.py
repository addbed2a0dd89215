"""
Trailing moving average over one series.
"""
from __future__ import annotations

from sales_analytics.analytics.common import series_values
from sales_analytics.config import DEFAULT_WINDOW
from sales_analytics.data.schemas import NormalizedSeries


def effective_window(window: int | None) -> int:
    """Window size actually applied: default when unset, never below 1."""
    if window is None:
        return DEFAULT_WINDOW
    return max(1, int(window))


def moving_average(series: NormalizedSeries, name: str, window: int | None = DEFAULT_WINDOW) -> dict:
    """Mean of the trailing ``window`` values at each row.

    The window is truncated at the start of the series rather than padded,
    so row i averages min(window, i + 1) values.
    """
    values = series_values(series, name)
    window = effective_window(window)

    points = []
    for i, date in enumerate(series.dates):
        start = max(0, i - window + 1)
        points.append({
            "index": i,
            "timestamp": date.isoformat(),
            "average": float(values[start:i + 1].mean()),
        })

    return {"series": name, "window": window, "moving_average": points}
