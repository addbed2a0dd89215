"""
Sales Analytics — FastAPI app factory, error handlers, upload-folder lifecycle.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sales_analytics import __version__
from sales_analytics.api.router_analytics import router as analytics_router
from sales_analytics.api.router_meta import router as meta_router
from sales_analytics.api.router_upload import router as upload_router
from sales_analytics.config import UPLOADS_FOLDER
from sales_analytics.data.loader import clear_uploads
from sales_analytics.data.store import DatasetStore
from sales_analytics.errors import AnalyticsError, InvalidParameter, MissingParameter


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the uploads folder; empty it again at shutdown."""
    uploads_dir: Path = app.state.uploads_dir
    uploads_dir.mkdir(parents=True, exist_ok=True)
    print(f"  UPLOADS_FOLDER = {uploads_dir}")
    print(f"\nSales Analytics ready — limit {app.state.store.max_datasets} datasets. "
          f"Upload CSVs via POST /api/upload-sales.\n")
    yield
    removed = clear_uploads(uploads_dir)
    if removed:
        print(f"  Removed {removed} leftover upload file(s)")


async def analytics_error_handler(request: Request, exc: AnalyticsError):
    if exc.status_code >= 500:
        print(f"  {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400s in the same error shape."""
    errors = exc.errors()
    missing = [e for e in errors if e.get("type") == "missing"]
    first = (missing or errors or [{}])[0]
    # Integer loc parts are list positions or JSON decode offsets, not field names
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body" and not isinstance(p, int)) or "body"
    if missing:
        err = MissingParameter(f"{field} is required")
    else:
        err = InvalidParameter(f"Invalid value for {field}: {first.get('msg', 'invalid')}")
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


def create_app(store: DatasetStore | None = None, uploads_dir: Path | None = None) -> FastAPI:
    app = FastAPI(
        title="Sales Analytics API",
        description="CSV sales uploads — top series, moving average, correlation, forecast",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else DatasetStore()
    app.state.uploads_dir = Path(uploads_dir) if uploads_dir is not None else UPLOADS_FOLDER

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AnalyticsError, analytics_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(analytics_router)

    return app


app = create_app()
