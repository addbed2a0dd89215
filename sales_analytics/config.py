"""
Sales Analytics — Configuration: paths, store limits, analytics defaults.
"""
import os
import tempfile
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with SALES_ANALYTICS_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get(
    "SALES_ANALYTICS_DATA_DIR", str(Path(tempfile.gettempdir()) / "sales_analytics")
))
UPLOADS_FOLDER = _data_dir / "uploads"

# ---------------------------------------------------------------------------
# Dataset store limits
# ---------------------------------------------------------------------------
# Oldest uploads are evicted once this many datasets are cached
MAX_DATASETS = int(os.environ.get("MAX_DATASETS", "100"))
# 0 = datasets never expire
DATASET_TTL_MINUTES = int(os.environ.get("DATASET_TTL_MINUTES", "0"))

# ---------------------------------------------------------------------------
# Upload parsing
# ---------------------------------------------------------------------------
TAB_SEPARATED_SUFFIXES = (".tsv", ".tab")

# ---------------------------------------------------------------------------
# Analytics defaults
# ---------------------------------------------------------------------------
DEFAULT_WINDOW = 3
DEFAULT_FORECAST_PERIODS = 3
MAX_FORECAST_PERIODS = 1000

CORRELATION_DIGITS = 4
COEFFICIENT_DIGITS = 4   # slope / intercept
PREDICTION_DIGITS = 2
