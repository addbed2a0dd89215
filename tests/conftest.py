"""Shared fixtures: fresh app per test with uploads under tmp_path."""
import pytest
from fastapi.testclient import TestClient

from sales_analytics.data.store import DatasetStore
from sales_analytics.main import create_app

SALES_CSV = b"Month,A,B\nJan,10,5\nFeb,20,15\nMar,30,10\n"


@pytest.fixture
def store():
    return DatasetStore(max_datasets=10)


@pytest.fixture
def client(store, tmp_path):
    app = create_app(store=store, uploads_dir=tmp_path / "uploads")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload(client):
    """Upload bytes as a file and return the JSON response."""
    def _upload(content: bytes = SALES_CSV, filename: str = "sales.csv"):
        r = client.post("/api/upload-sales", files={"file": (filename, content, "text/csv")})
        assert r.status_code == 200, r.text
        return r.json()
    return _upload
