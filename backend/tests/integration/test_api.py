"""
Integration Test: HTTP API

Drives the FastAPI app with an injected planner built over in-memory
capabilities.

Test cases:
- Plan generation returns 200 on success and 400 on rejection
- Refinement endpoint
- Health check returns 200 when healthy and 503 otherwise
- Cache statistics and clearing
- Example inputs
"""

import pytest
from fastapi.testclient import TestClient

from eventplanner.api import create_app
from tests.fakes import BANGALORE_REQUEST, FakeExtraction


@pytest.fixture
def client(settings, make_planner):
    planner = make_planner()
    app = create_app(settings, planner=planner)
    with TestClient(app) as test_client:
        yield test_client


def test_generate_event_plan(client):
    response = client.post("/api/generate-event-plan", json={"text": BANGALORE_REQUEST})

    assert response.status_code == 200
    body = response.json()
    assert body["success"]
    assert body["event_data"]["location"] == "Bangalore"
    assert body["analytics"]["execution_path"] == ["parse", "validate", "plan", "venue_search"]
    assert set(body["quality_indicators"]) == {
        "data_completeness",
        "plan_richness",
        "venue_relevance",
        "execution_efficiency",
    }


def test_generate_rejects_short_input(client):
    response = client.post("/api/generate-event-plan", json={"text": "hi!!!"})

    assert response.status_code == 400
    body = response.json()
    assert not body["success"]
    assert body["errors"] == ["Invalid input: must be at least 10 characters long"]


def test_generate_rejects_missing_text(client):
    response = client.post("/api/generate-event-plan", json={})

    assert response.status_code == 400
    assert response.json()["errors"] == ["Invalid input: must be a non-empty string"]


def test_generate_with_refinement(client):
    response = client.post(
        "/api/generate-event-plan",
        json={"text": BANGALORE_REQUEST, "refinement_text": "make it outdoor"},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["is_refinement"]
    assert "outdoor" in body["event_data"]["tags"]


def test_refine_plan(client):
    response = client.post(
        "/api/refine-plan",
        json={"original_text": BANGALORE_REQUEST, "refinement_text": "Add outdoor activities"},
    )

    assert response.status_code == 200
    assert response.json()["refinement_text"] == "Add outdoor activities"


def test_refine_plan_requires_refinement(client):
    response = client.post("/api/refine-plan", json={"original_text": BANGALORE_REQUEST})

    assert response.status_code == 400
    assert response.json()["errors"] == ["Invalid refinement: refinement text is required"]


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_unhealthy(settings, make_planner):
    planner = make_planner(extraction=FakeExtraction(error=RuntimeError("no key")))

    with TestClient(create_app(settings, planner=planner)) as client:
        response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_cache_stats_and_clear(client):
    client.post("/api/generate-event-plan", json={"text": BANGALORE_REQUEST})
    cached = client.post("/api/generate-event-plan", json={"text": BANGALORE_REQUEST})
    assert cached.json()["cached"]

    stats = client.get("/api/cache/stats").json()
    assert stats["success"]
    assert stats["cache"]["size"] == 1
    assert stats["cache"]["hits"] == 1

    cleared = client.post("/api/cache/clear").json()
    assert cleared["removed"] == 1
    assert client.get("/api/cache/stats").json()["cache"]["size"] == 0


def test_examples(client):
    body = client.get("/api/examples").json()

    assert len(body["basic_examples"]) == 4
    assert body["refinement_examples"][1]["original"].startswith("Team offsite")


def test_root(client):
    assert client.get("/").json()["health"] == "/api/health"
