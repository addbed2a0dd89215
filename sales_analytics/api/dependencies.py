"""
FastAPI dependencies — store lookup, dataset → normalized series resolution.
"""
from __future__ import annotations

from fastapi import HTTPException, Request

from sales_analytics.data.normalize import normalize
from sales_analytics.data.schemas import Dataset, NormalizedSeries
from sales_analytics.data.store import DatasetStore
from sales_analytics.errors import MissingParameter, NotFound


def get_store(request: Request) -> DatasetStore:
    """The dataset store owned by this app instance."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(503, "Server not initialized yet")
    return store


def get_dataset(store: DatasetStore, file_id: str | None) -> Dataset:
    if not file_id:
        raise MissingParameter("fileId is required")
    dataset = store.get(file_id)
    if dataset is None:
        raise NotFound(f"Invalid or unknown fileId: {file_id}")
    return dataset


def load_series(store: DatasetStore, file_id: str | None) -> NormalizedSeries:
    """Normalize a cached dataset for one request (never cached itself)."""
    dataset = get_dataset(store, file_id)
    series = normalize(dataset.frame)
    if series is None:
        raise NotFound(f"Dataset {file_id} has no data rows")
    return series


def require_series_name(name: str | None) -> str:
    if not name:
        raise MissingParameter("product (series name) is required")
    return name
