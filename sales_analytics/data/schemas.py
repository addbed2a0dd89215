"""
Dataset and normalized-series schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

import pandas as pd


@dataclass
class Dataset:
    """Raw rows of one uploaded file, cached under its file id.

    ``frame`` holds every cell as text (blanks as ""), columns in file order.
    """
    file_id: str
    filename: str
    frame: pd.DataFrame
    uploaded_at: dt.datetime = field(default_factory=dt.datetime.now)

    @property
    def columns(self) -> list[str]:
        return [str(c) for c in self.frame.columns]

    @property
    def row_count(self) -> int:
        return len(self.frame)

    def summary(self) -> dict:
        return {
            "file_id": self.file_id,
            "filename": self.filename,
            "rows": self.row_count,
            "columns": self.columns,
            "uploaded_at": self.uploaded_at.isoformat(),
        }


@dataclass(frozen=True)
class CoercedNumber:
    """Result of coercing a raw cell to a number.

    ``defaulted`` is True when the cell was blank or non-numeric and the
    value fell back to 0.
    """
    value: float
    defaulted: bool = False


@dataclass
class NormalizedSeries:
    """Date-indexed numeric series derived from raw rows.

    ``dates`` and ``values`` share a 0..n-1 index; ``values`` has exactly
    ``series_columns`` as its columns.
    """
    date_column: str
    series_columns: list[str]
    dates: pd.Series
    values: pd.DataFrame
    dropped_rows: int = 0
    defaulted_cells: int = 0

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def is_empty(self) -> bool:
        return len(self.dates) == 0

    def has_series(self, name: str) -> bool:
        return name in self.series_columns

    def series(self, name: str) -> pd.Series:
        return self.values[name]
