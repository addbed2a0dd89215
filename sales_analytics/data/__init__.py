"""Upload parsing, normalization, and the in-memory dataset store."""
from .loader import load_csv
from .store import DatasetStore
from .schemas import Dataset, NormalizedSeries
from .normalize import normalize, parse_date, coerce_number
