"""Sales Analytics — CSV upload and timeseries analytics API."""

__version__ = "1.0.0"
