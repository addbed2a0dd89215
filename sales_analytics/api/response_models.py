"""
Pydantic request and response schemas for the API.

Request fields accept the camelCase names older clients send (fileId,
product, monthsForecast) as well as snake_case.
"""
from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from sales_analytics.config import MAX_FORECAST_PERIODS


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class DatasetRequest(BaseModel):
    file_id: Optional[str] = Field(None, validation_alias=AliasChoices("fileId", "file_id"))


class MovingAverageRequest(DatasetRequest):
    series: Optional[str] = Field(None, validation_alias=AliasChoices("product", "series"))
    window: Optional[int] = None


class ForecastRequest(DatasetRequest):
    series: Optional[str] = Field(None, validation_alias=AliasChoices("product", "series"))
    periods: Optional[int] = Field(
        None, le=MAX_FORECAST_PERIODS, validation_alias=AliasChoices("monthsForecast", "periods"),
    )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    datasets: int
    time: str


class UploadResponse(BaseModel):
    message: str
    file_id: str
    filename: str
    rows: int
    columns: list[str]


class DatasetSummary(BaseModel):
    file_id: str
    filename: str
    rows: int
    columns: list[str]
    uploaded_at: str


class DatasetDetail(DatasetSummary):
    date_column: Optional[str]
    series_columns: list[str]


class DatasetListResponse(BaseModel):
    datasets: list[DatasetSummary]
    count: int


class TopSeriesResponse(BaseModel):
    top_series: str
    total: float
    totals: dict[str, float]


class MovingAveragePoint(BaseModel):
    index: int
    timestamp: str
    average: float


class MovingAverageResponse(BaseModel):
    series: str
    window: int
    moving_average: list[MovingAveragePoint]


class CorrelationResponse(BaseModel):
    series: list[str]
    correlation: dict[str, dict[str, float]]


class ForecastPoint(BaseModel):
    index: int
    predicted: float


class ForecastResponse(BaseModel):
    series: str
    slope: float
    intercept: float
    forecast: list[ForecastPoint]
