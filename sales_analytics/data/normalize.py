"""
Raw rows → date-indexed numeric series: date parsing, number coercion, column inference.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd
from dateutil import parser as date_parser

from sales_analytics.data.schemas import CoercedNumber, NormalizedSeries

RawRows = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


# ---------------------------------------------------------------------------
# Cell conversions
# ---------------------------------------------------------------------------

def parse_date(raw: Any) -> Optional[dt.datetime]:
    """Parse a date cell with a general-purpose parser.

    Returns None when the value is blank or unparsable. Fields missing from
    the text (e.g. "Jan") default to Jan 1 of the current year, midnight.
    Timezone-aware values are converted to naive UTC.
    """
    if isinstance(raw, dt.datetime):
        parsed = raw
    elif isinstance(raw, dt.date):
        return dt.datetime(raw.year, raw.month, raw.day)
    else:
        if raw is None or not isinstance(raw, str):
            return None
        text = raw.strip()
        if not text:
            return None
        default = dt.datetime(dt.datetime.now().year, 1, 1)
        try:
            parsed = date_parser.parse(text, default=default)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_number(raw: Any) -> CoercedNumber:
    """Coerce a cell to float; blanks, text and non-finite values become 0."""
    if isinstance(raw, bool):
        return CoercedNumber(float(raw))
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        if raw is None or not isinstance(raw, str):
            return CoercedNumber(0.0, defaulted=True)
        text = raw.strip()
        if not text or "_" in text:
            return CoercedNumber(0.0, defaulted=True)
        try:
            value = float(text)
        except ValueError:
            return CoercedNumber(0.0, defaulted=True)

    if math.isnan(value) or math.isinf(value):
        return CoercedNumber(0.0, defaulted=True)
    return CoercedNumber(value)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def _to_frame(rows: RawRows | None) -> pd.DataFrame | None:
    if rows is None:
        return None
    if isinstance(rows, pd.DataFrame):
        return rows
    rows = list(rows)
    if not rows:
        return None
    # Column order comes from the first row only
    return pd.DataFrame(rows, columns=list(rows[0].keys()))


def normalize(rows: RawRows | None) -> NormalizedSeries | None:
    """Infer date + series columns and coerce every row.

    The first column is the date column, the rest are series columns.
    Rows whose date does not parse are dropped; the others keep their order.
    Returns None when there are no rows at all.
    """
    df = _to_frame(rows)
    if df is None or df.empty or len(df.columns) == 0:
        return None

    columns = [str(c) for c in df.columns]
    date_col, series_cols = columns[0], columns[1:]

    dates = df.iloc[:, 0].map(parse_date)
    keep = dates.notna().to_numpy()
    kept = df.loc[keep]

    values = pd.DataFrame(index=range(len(kept)), columns=series_cols, dtype="float64")
    defaulted = 0
    for j, col in enumerate(series_cols):
        coerced = kept.iloc[:, j + 1].map(coerce_number)
        values[col] = [c.value for c in coerced]
        defaulted += sum(1 for c in coerced if c.defaulted)
    values = values.astype("float64")

    dropped = len(df) - len(kept)
    if dropped:
        print(f"  Dropped {dropped:,} of {len(df):,} rows with unparsable '{date_col}' values")
    if defaulted:
        print(f"  Coerced {defaulted:,} blank or non-numeric cells to 0")

    return NormalizedSeries(
        date_column=date_col,
        series_columns=series_cols,
        dates=pd.Series(list(dates[keep]), dtype="object").reset_index(drop=True),
        values=values,
        dropped_rows=dropped,
        defaulted_cells=defaulted,
    )
