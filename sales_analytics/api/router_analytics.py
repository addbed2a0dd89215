"""
Analytics endpoints: top series, moving average, correlation, forecast.

Each request re-normalizes the cached raw rows for its file id.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from sales_analytics.analytics import correlation_matrix, forecast, moving_average, top_series
from sales_analytics.analytics.common import sanitize_for_json
from sales_analytics.api.dependencies import get_store, load_series, require_series_name
from sales_analytics.api.response_models import (
    CorrelationResponse, DatasetRequest, ForecastRequest, ForecastResponse,
    MovingAverageRequest, MovingAverageResponse, TopSeriesResponse,
)
from sales_analytics.data.store import DatasetStore

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.post("/top-seller", response_model=TopSeriesResponse)
def top_seller(req: DatasetRequest, store: DatasetStore = Depends(get_store)):
    """Series with the highest total across all rows."""
    series = load_series(store, req.file_id)
    return sanitize_for_json(top_series(series))


@router.post("/moving-average", response_model=MovingAverageResponse)
def moving_avg(req: MovingAverageRequest, store: DatasetStore = Depends(get_store)):
    """Trailing moving average of one series."""
    series = load_series(store, req.file_id)
    name = require_series_name(req.series)
    return sanitize_for_json(moving_average(series, name, req.window))


@router.post("/correlation", response_model=CorrelationResponse)
def correlation(req: DatasetRequest, store: DatasetStore = Depends(get_store)):
    """Pearson correlation matrix across all series."""
    series = load_series(store, req.file_id)
    return sanitize_for_json(correlation_matrix(series))


@router.post("/forecast", response_model=ForecastResponse)
def linear_forecast(req: ForecastRequest, store: DatasetStore = Depends(get_store)):
    """Linear-regression forecast of one series by row index."""
    series = load_series(store, req.file_id)
    name = require_series_name(req.series)
    return sanitize_for_json(forecast(series, name, req.periods))
