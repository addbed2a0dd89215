"""
Upload endpoint: receive a CSV, parse it, cache its raw rows under a new file id.
"""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from sales_analytics.api.dependencies import get_store
from sales_analytics.api.response_models import UploadResponse
from sales_analytics.data.loader import load_csv, write_upload
from sales_analytics.data.store import DatasetStore
from sales_analytics.errors import MissingParameter

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload-sales", response_model=UploadResponse)
async def upload_sales(
    request: Request,
    file: Optional[UploadFile] = File(None),
    store: DatasetStore = Depends(get_store),
):
    """Upload one delimited file; returns its file id and row count."""
    if file is None or not file.filename:
        raise MissingParameter("file required")

    # Strip .gz suffix if present (browser gzip-compressed upload)
    filename = file.filename
    is_gzipped = filename.lower().endswith(".gz")
    if is_gzipped:
        filename = filename[:-3]

    file_id = uuid.uuid4().hex
    uploads_dir: Path = request.app.state.uploads_dir
    dest = uploads_dir / f"{file_id}{Path(filename).suffix}"

    # Disk writes and pandas parsing run off the event loop
    content = await file.read()
    await run_in_threadpool(write_upload, content, dest, gzipped=is_gzipped, name=file.filename)
    try:
        frame = await run_in_threadpool(load_csv, dest, name=filename)
    finally:
        dest.unlink(missing_ok=True)

    dataset = store.add(frame, filename, file_id=file_id)
    print(f"  Uploaded {filename}: {dataset.row_count:,} rows, {len(dataset.columns)} columns → {file_id}")

    return UploadResponse(
        message="file uploaded",
        file_id=dataset.file_id,
        filename=dataset.filename,
        rows=dataset.row_count,
        columns=dataset.columns,
    )
