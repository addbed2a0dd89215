"""Timeseries analytics over normalized series."""
from .totals import series_totals, top_series
from .moving_average import moving_average
from .correlation import correlation_matrix, pearson
from .forecast import fit_line, forecast
