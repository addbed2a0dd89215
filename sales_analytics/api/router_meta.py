"""
Meta endpoints: health, dataset listing, dataset detail, eviction.
"""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from sales_analytics.api.dependencies import get_store
from sales_analytics.api.response_models import (
    DatasetDetail, DatasetListResponse, DatasetSummary, HealthResponse,
)
from sales_analytics.data.store import DatasetStore
from sales_analytics.errors import NotFound

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DatasetStore = Depends(get_store)):
    return HealthResponse(status="ok", datasets=len(store), time=datetime.now().isoformat())


@router.get("/datasets", response_model=DatasetListResponse)
def list_datasets(store: DatasetStore = Depends(get_store)):
    datasets = [DatasetSummary(**d.summary()) for d in store.datasets()]
    return DatasetListResponse(datasets=datasets, count=len(datasets))


@router.get("/datasets/{file_id}", response_model=DatasetDetail)
def get_dataset(file_id: str, store: DatasetStore = Depends(get_store)):
    """Dataset summary plus the inferred date and series columns."""
    dataset = store.get(file_id)
    if dataset is None:
        raise NotFound(f"Dataset not found: {file_id}", status_code=404)
    columns = dataset.columns
    return DatasetDetail(
        **dataset.summary(),
        date_column=columns[0] if columns else None,
        series_columns=columns[1:],
    )


@router.delete("/datasets/{file_id}")
def delete_dataset(file_id: str, store: DatasetStore = Depends(get_store)):
    if not store.remove(file_id):
        raise NotFound(f"Dataset not found: {file_id}", status_code=404)
    return {"status": "deleted", "file_id": file_id}
