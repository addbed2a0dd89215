"""
Upload parsing — delimited text files into raw string rows.
"""
from __future__ import annotations

import csv
import gzip
from pathlib import Path

import pandas as pd

from sales_analytics.config import TAB_SEPARATED_SUFFIXES
from sales_analytics.errors import ParseFailure


def _delimiter_for(filepath: Path) -> str:
    return "\t" if filepath.suffix.lower() in TAB_SEPARATED_SUFFIXES else ","


def load_csv(filepath: Path, delimiter: str | None = None, name: str | None = None) -> pd.DataFrame:
    """Read a delimited file with the header row as column names.

    Every cell is read as text and blanks stay "" so coercion happens later,
    in one place. A file with no content at all yields an empty frame.
    ``name`` is the file name shown in errors (defaults to the path's name).
    """
    filepath = Path(filepath)
    sep = delimiter or _delimiter_for(Path(name) if name else filepath)
    try:
        df = pd.read_csv(
            filepath,
            sep=sep,
            dtype=str,
            keep_default_na=False,
            index_col=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, csv.Error, OSError) as exc:
        raise ParseFailure(f"Could not parse {name or filepath.name}: {exc}") from exc

    # Short rows leave NaN behind even with keep_default_na=False
    return df.fillna("")


def write_upload(content: bytes, dest: Path, gzipped: bool = False, name: str | None = None) -> Path:
    """Write uploaded bytes to temporary storage, decompressing .gz uploads."""
    if gzipped:
        try:
            content = gzip.decompress(content)
        except (OSError, EOFError) as exc:
            raise ParseFailure(f"Could not decompress {name or dest.name}: {exc}") from exc
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(content)
    return dest


def clear_uploads(folder: Path) -> int:
    """Remove leftover upload files; returns how many were deleted."""
    if not folder.exists():
        return 0
    removed = 0
    for f in folder.iterdir():
        if f.is_file():
            f.unlink(missing_ok=True)
            removed += 1
    return removed
