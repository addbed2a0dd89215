"""
Index-based linear-regression forecast for one series.

The zero-based row position is the independent variable, so forecasts assume
rows are evenly spaced in time.
"""
from __future__ import annotations

import numpy as np

from sales_analytics.analytics.common import round_to, safe_divide, series_values
from sales_analytics.config import (
    COEFFICIENT_DIGITS, DEFAULT_FORECAST_PERIODS, MAX_FORECAST_PERIODS, PREDICTION_DIGITS,
)
from sales_analytics.data.schemas import NormalizedSeries
from sales_analytics.errors import InvalidParameter


def fit_line(y: np.ndarray) -> tuple[float, float]:
    """OLS fit of y against 0..n-1; returns (slope, intercept).

    Slope is 0 when all x are identical (fewer than two rows); an empty
    series fits the zero line.
    """
    n = len(y)
    if n == 0:
        return 0.0, 0.0
    x = np.arange(n, dtype=float)
    x_mean = x.mean()
    y_mean = float(y.mean())
    num = float(np.sum((x - x_mean) * (y - y_mean)))
    den = float(np.sum((x - x_mean) ** 2))
    slope = safe_divide(num, den)
    intercept = y_mean - slope * x_mean
    return slope, float(intercept)


def forecast(series: NormalizedSeries, name: str, periods: int | None = DEFAULT_FORECAST_PERIODS) -> dict:
    """Predict ``periods`` values past the last row using the fitted line."""
    y = series_values(series, name)
    periods = DEFAULT_FORECAST_PERIODS if periods is None else max(0, int(periods))
    if periods > MAX_FORECAST_PERIODS:
        raise InvalidParameter(f"At most {MAX_FORECAST_PERIODS} forecast periods allowed (got {periods})")

    slope, intercept = fit_line(y)
    n = len(y)
    predictions = [
        {"index": idx, "predicted": round_to(intercept + slope * idx, PREDICTION_DIGITS)}
        for idx in range(n, n + periods)
    ]

    return {
        "series": name,
        "slope": round_to(slope, COEFFICIENT_DIGITS),
        "intercept": round_to(intercept, COEFFICIENT_DIGITS),
        "forecast": predictions,
    }
