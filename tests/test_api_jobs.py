import pytest
from fastapi.testclient import TestClient

import api_server
from laundry_enrich import api_jobs, jobs
from laundry_enrich.job_runner import BatchController
from laundry_enrich.locks import OutputPathLocks


@pytest.fixture
def controller():
    return BatchController(store=jobs.JobStore(), locks=OutputPathLocks())


@pytest.fixture
def client(controller):
    api_server.app.dependency_overrides[api_jobs.get_controller] = lambda: controller
    yield TestClient(api_server.app)
    api_server.app.dependency_overrides.clear()


def _listings(write_csv):
    return write_csv([
        {"name": "ABC Laundry", "address": "123 Main St", "city": "Austin", "state": "TX", "zip": "78701"},
        {"name": "ABC Laundry Again", "address": "123 Main St", "city": "Austin", "state": "TX", "zip": "78701"},
    ])


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_enrich_requires_file_path(client):
    response = client.post("/enrich", json={})
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Missing required field: filePath"


def test_enrich_missing_file(client, tmp_path):
    response = client.post("/enrich", json={"filePath": str(tmp_path / "nope.csv")})
    assert response.status_code == 404
    assert response.json()["detail"]["success"] is False


def test_enrich_sync(client, write_csv):
    path = _listings(write_csv)

    response = client.post("/enrich", json={"filePath": str(path)})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["stats"]["duplicatesRemoved"] == 1
    assert body["stats"]["enrichedRecords"] == 1
    assert body["enrichedPath"].endswith("enriched_listings.csv")


def test_batch_missing_file_creates_no_job(client, controller, tmp_path):
    response = client.post("/enrich/batch", json={"filePath": str(tmp_path / "nope.csv")})
    assert response.status_code == 404
    assert len(controller.store) == 0


def test_batch_submit_and_poll(client, controller, write_csv):
    path = _listings(write_csv)

    response = client.post("/enrich/batch", json={"filePath": str(path)})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Batch enrichment started"
    job_id = body["jobId"]

    controller.wait(job_id, timeout=30)
    status = client.get(f"/enrich/batch/{job_id}").json()

    assert status["status"] == "completed"
    assert status["progress"] == 100
    assert status["stats"]["totalRecords"] == 2
    assert status["error"] is None
    assert status["startTime"] and status["endTime"]


def test_batch_status_unknown_job(client):
    response = client.get("/enrich/batch/not-a-job")
    assert response.status_code == 404
    assert response.json()["detail"]["message"] == "Job not found: not-a-job"


def test_enrich_rejects_output_equal_to_input(client, write_csv):
    path = _listings(write_csv)
    before = path.read_text(encoding="utf-8")

    response = client.post("/enrich", json={"filePath": str(path), "outputPath": str(path)})

    assert response.status_code == 400
    assert response.json()["detail"]["success"] is False
    assert path.read_text(encoding="utf-8") == before


def test_batch_rejects_output_equal_to_input(client, controller, write_csv):
    path = _listings(write_csv)

    response = client.post("/enrich/batch", json={"filePath": str(path), "outputPath": str(path)})

    assert response.status_code == 400
    assert len(controller.store) == 0


def test_enrich_failure_status_does_not_depend_on_message(client, write_csv, monkeypatch):
    path = _listings(write_csv)
    monkeypatch.setattr(
        api_jobs, "enrich_laundry_file",
        lambda *args, **kwargs: {"success": False, "message": "File not found: lookup table"},
    )

    response = client.post("/enrich", json={"filePath": str(path)})

    assert response.status_code == 500
    assert response.json()["detail"]["message"] == "File not found: lookup table"
