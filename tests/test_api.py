"""API tests (fresh in-memory store per test)."""
import gzip
import threading

from conftest import SALES_CSV

from sales_analytics.api import router_upload


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    j = r.json()
    assert j["status"] == "ok"
    assert j["datasets"] == 0


def test_upload(client, upload):
    j = upload()
    assert j["message"] == "file uploaded"
    assert j["rows"] == 3
    assert j["columns"] == ["Month", "A", "B"]
    assert j["filename"] == "sales.csv"
    assert client.get("/api/health").json()["datasets"] == 1


def test_upload_removes_temp_file(client, upload, tmp_path):
    upload()
    assert list((tmp_path / "uploads").iterdir()) == []


def test_upload_gzip(upload):
    j = upload(gzip.compress(SALES_CSV), "sales.csv.gz")
    assert j["filename"] == "sales.csv"
    assert j["rows"] == 3


def test_upload_missing_file(client):
    r = client.post("/api/upload-sales")
    assert r.status_code == 400
    assert r.json()["code"] == "missing_parameter"


def test_upload_parse_failure(client):
    r = client.post("/api/upload-sales", files={"file": ("bad.csv", b'Month,A\n"2024-01-01,1\n', "text/csv")})
    assert r.status_code == 500
    assert r.json()["code"] == "parse_failure"
    # service keeps working afterwards
    assert client.get("/api/health").status_code == 200


def test_top_seller(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/top-seller", json={"fileId": file_id})
    assert r.status_code == 200
    j = r.json()
    assert j["top_series"] == "A"
    assert j["total"] == 60.0


def test_moving_average(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/moving-average", json={"fileId": file_id, "product": "A", "window": 2})
    assert r.status_code == 200
    j = r.json()
    assert j["series"] == "A"
    assert j["window"] == 2
    assert [p["average"] for p in j["moving_average"]] == [10.0, 15.0, 25.0]
    assert [p["index"] for p in j["moving_average"]] == [0, 1, 2]


def test_moving_average_snake_case_and_default_window(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/moving-average", json={"file_id": file_id, "series": "B"})
    assert r.status_code == 200
    assert r.json()["window"] == 3


def test_moving_average_invalid_window(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/moving-average", json={"fileId": file_id, "product": "A", "window": "abc"})
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_parameter"


def test_correlation(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/correlation", json={"fileId": file_id})
    assert r.status_code == 200
    j = r.json()
    assert j["series"] == ["A", "B"]
    assert j["correlation"]["A"]["B"] == 0.5
    assert j["correlation"]["B"]["A"] == 0.5
    assert j["correlation"]["A"]["A"] == 1.0


def test_forecast(client, upload):
    file_id = upload(b"Date,Sales\n2024-01-01,10\n2024-02-01,20\n2024-03-01,30\n2024-04-01,40\n")["file_id"]
    r = client.post("/api/analytics/forecast", json={"fileId": file_id, "product": "Sales", "monthsForecast": 2})
    assert r.status_code == 200
    j = r.json()
    assert j["slope"] == 10.0
    assert j["intercept"] == 10.0
    assert j["forecast"] == [{"index": 4, "predicted": 50.0}, {"index": 5, "predicted": 60.0}]


def test_forecast_default_periods(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/forecast", json={"fileId": file_id, "product": "A"})
    assert r.status_code == 200
    assert len(r.json()["forecast"]) == 3


def test_unknown_series_is_not_found(client, upload):
    file_id = upload()["file_id"]
    for path in ("/api/analytics/moving-average", "/api/analytics/forecast"):
        r = client.post(path, json={"fileId": file_id, "product": "Nope"})
        assert r.status_code == 400
        assert r.json()["code"] == "not_found"


def test_missing_series_name(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/forecast", json={"fileId": file_id})
    assert r.status_code == 400
    assert r.json()["code"] == "missing_parameter"


def test_missing_file_id(client):
    r = client.post("/api/analytics/top-seller", json={})
    assert r.status_code == 400
    assert r.json()["code"] == "missing_parameter"


def test_missing_body(client):
    r = client.post("/api/analytics/correlation")
    assert r.status_code == 400
    assert r.json()["code"] == "missing_parameter"


def test_unknown_file_id(client):
    for path in ("/api/analytics/top-seller", "/api/analytics/correlation"):
        r = client.post(path, json={"fileId": "does-not-exist"})
        assert r.status_code == 400
        assert r.json()["code"] == "not_found"


def test_header_only_upload_is_not_analyzable(client, upload):
    j = upload(b"Month,A,B\n")
    assert j["rows"] == 0
    file_id = j["file_id"]
    requests = [
        ("/api/analytics/top-seller", {"fileId": file_id}),
        ("/api/analytics/moving-average", {"fileId": file_id, "product": "A"}),
        ("/api/analytics/correlation", {"fileId": file_id}),
        ("/api/analytics/forecast", {"fileId": file_id, "product": "A"}),
    ]
    for path, body in requests:
        r = client.post(path, json=body)
        assert r.status_code == 400
        assert r.json()["code"] == "not_found"


def test_all_dates_invalid_gives_empty_results(client, upload):
    file_id = upload(b"Month,A\ngarbage,1\n,2\n")["file_id"]
    r = client.post("/api/analytics/moving-average", json={"fileId": file_id, "product": "A"})
    assert r.status_code == 200
    assert r.json()["moving_average"] == []


def test_dataset_listing_and_detail(client, upload):
    file_id = upload()["file_id"]
    j = client.get("/api/datasets").json()
    assert j["count"] == 1
    assert j["datasets"][0]["file_id"] == file_id

    detail = client.get(f"/api/datasets/{file_id}").json()
    assert detail["date_column"] == "Month"
    assert detail["series_columns"] == ["A", "B"]


def test_delete_dataset(client, upload):
    file_id = upload()["file_id"]
    r = client.delete(f"/api/datasets/{file_id}")
    assert r.status_code == 200
    assert r.json() == {"status": "deleted", "file_id": file_id}
    assert client.get(f"/api/datasets/{file_id}").status_code == 404
    assert client.delete(f"/api/datasets/{file_id}").status_code == 404
    r = client.post("/api/analytics/top-seller", json={"fileId": file_id})
    assert r.json()["code"] == "not_found"


def test_parse_failure_names_uploaded_file(client):
    r = client.post("/api/upload-sales", files={"file": ("march.csv", b'Month,A\n"2024-01-01,1\n', "text/csv")})
    assert r.status_code == 500
    assert "march.csv" in r.json()["error"]


def test_malformed_json_body(client):
    r = client.post(
        "/api/analytics/top-seller",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    j = r.json()
    assert j["code"] == "invalid_parameter"
    assert j["error"].startswith("Invalid value for body:")


def test_forecast_periods_upper_bound(client, upload):
    file_id = upload()["file_id"]
    r = client.post("/api/analytics/forecast", json={"fileId": file_id, "product": "A", "monthsForecast": 1000000000})
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_parameter"


def test_health_answers_while_upload_parses(client, monkeypatch):
    started = threading.Event()
    finished = threading.Event()
    release = threading.Event()
    real_load_csv = router_upload.load_csv

    def slow_load_csv(*args, **kwargs):
        started.set()
        release.wait(timeout=5)
        try:
            return real_load_csv(*args, **kwargs)
        finally:
            finished.set()

    monkeypatch.setattr(router_upload, "load_csv", slow_load_csv)

    results = {}

    def _upload():
        results["upload"] = client.post(
            "/api/upload-sales", files={"file": ("sales.csv", SALES_CSV, "text/csv")}
        )

    worker = threading.Thread(target=_upload)
    worker.start()
    try:
        assert started.wait(timeout=5)
        r = client.get("/api/health")
        assert r.status_code == 200
        assert not finished.is_set()
    finally:
        release.set()
        worker.join(timeout=10)

    assert results["upload"].status_code == 200
    assert results["upload"].json()["rows"] == 3
