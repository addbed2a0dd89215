"""
Safe math and lookup helpers shared by the analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd

from sales_analytics.data.schemas import NormalizedSeries
from sales_analytics.errors import NotFound


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def series_values(series: NormalizedSeries, name: str) -> np.ndarray:
    """Values of one series as floats; unknown names raise NotFound."""
    if not series.has_series(name):
        raise NotFound(f"Series not found: {name}")
    return series.series(name).to_numpy(dtype=float)


def round_to(value: float, digits: int) -> float:
    """Round to ``digits`` decimals; NaN/Inf collapse to 0.0 for JSON safety."""
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return 0.0
    rounded = round(value, digits)
    # Avoid "-0.0" in responses
    return 0.0 if rounded == 0 else rounded


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (np.floating, float)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, pd.Timestamp):
        return obj.isoformat()
    return obj
