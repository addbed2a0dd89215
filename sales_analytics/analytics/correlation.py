"""
Pearson correlation matrix across all series.
"""
from __future__ import annotations

import math

import numpy as np

from sales_analytics.analytics.common import round_to, safe_divide
from sales_analytics.config import CORRELATION_DIGITS
from sales_analytics.data.schemas import NormalizedSeries


def pearson(x: np.ndarray, y: np.ndarray) -> float:
    """Population Pearson coefficient of two equal-length arrays.

    Returns 0 when either series has zero variance (or there are no rows)
    instead of NaN.
    """
    if len(x) == 0:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    num = float(np.sum(dx * dy))
    den = math.sqrt(float(np.sum(dx * dx))) * math.sqrt(float(np.sum(dy * dy)))
    return safe_divide(num, den)


def correlation_matrix(series: NormalizedSeries, digits: int = CORRELATION_DIGITS) -> dict:
    """Coefficient for every ordered pair of series, self pairs included."""
    cols = series.series_columns
    arrays = {c: series.series(c).to_numpy(dtype=float) for c in cols}

    matrix: dict[str, dict[str, float]] = {}
    for a in cols:
        matrix[a] = {}
        for b in cols:
            matrix[a][b] = round_to(pearson(arrays[a], arrays[b]), digits)

    return {"series": cols, "correlation": matrix}
