"""
Series totals — sum per series and the top series overall.
"""
from __future__ import annotations

from sales_analytics.data.schemas import NormalizedSeries
from sales_analytics.errors import NotFound


def series_totals(series: NormalizedSeries) -> dict[str, float]:
    """Sum of each series across all rows, in column order."""
    sums = series.values.sum(axis=0)
    return {name: float(sums[name]) for name in series.series_columns}


def top_series(series: NormalizedSeries) -> dict:
    """Series with the largest total; ties go to the earliest column."""
    totals = series_totals(series)
    if not totals:
        raise NotFound(f"No series columns besides '{series.date_column}'")

    # sorted() is stable, so equal totals keep column order
    name, total = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[0]
    return {"top_series": name, "total": total, "totals": totals}
