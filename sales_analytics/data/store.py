"""
DatasetStore — In-memory cache of uploaded raw rows, keyed by file id.

Owned by the app instance (``app.state.store``) and handed to handlers via a
dependency. Entries are evicted oldest-first past ``max_datasets`` and,
when ``ttl_minutes`` is set, once they expire.
"""
from __future__ import annotations

import datetime as dt
import threading
import uuid
from collections import OrderedDict

import pandas as pd

from sales_analytics.config import DATASET_TTL_MINUTES, MAX_DATASETS
from sales_analytics.data.schemas import Dataset


class DatasetStore:
    """Uploaded datasets with size- and age-based eviction."""

    def __init__(self, max_datasets: int = MAX_DATASETS, ttl_minutes: int = DATASET_TTL_MINUTES) -> None:
        self.max_datasets = max(1, max_datasets)
        self.ttl = dt.timedelta(minutes=ttl_minutes) if ttl_minutes > 0 else None
        self._datasets: OrderedDict[str, Dataset] = OrderedDict()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, frame: pd.DataFrame, filename: str, file_id: str | None = None) -> Dataset:
        """Cache raw rows under a new file id and return the dataset."""
        dataset = Dataset(file_id=file_id or uuid.uuid4().hex, filename=filename, frame=frame)
        with self._lock:
            self._evict_expired()
            self._datasets[dataset.file_id] = dataset
            while len(self._datasets) > self.max_datasets:
                old_id, old = self._datasets.popitem(last=False)
                print(f"  Evicted dataset {old_id} ({old.filename}) — store limit {self.max_datasets}")
        return dataset

    def remove(self, file_id: str) -> bool:
        with self._lock:
            return self._datasets.pop(file_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._datasets.clear()

    def _evict_expired(self) -> None:
        """Drop entries older than the TTL. Caller holds the lock."""
        if self.ttl is None:
            return
        cutoff = dt.datetime.now() - self.ttl
        expired = [k for k, d in self._datasets.items() if d.uploaded_at < cutoff]
        for k in expired:
            del self._datasets[k]
        if expired:
            print(f"  Expired {len(expired)} dataset(s) older than {self.ttl}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, file_id: str | None) -> Dataset | None:
        if not file_id:
            return None
        with self._lock:
            self._evict_expired()
            return self._datasets.get(file_id)

    def datasets(self) -> list[Dataset]:
        """All cached datasets, oldest upload first."""
        with self._lock:
            self._evict_expired()
            return list(self._datasets.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._datasets)

    def __contains__(self, file_id: str) -> bool:
        return self.get(file_id) is not None
