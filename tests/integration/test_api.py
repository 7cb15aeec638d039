"""
Integration Tests for the FastAPI Backend

Tests for API endpoints: registry, layout, sessions, traversal, summary.
Uses async httpx for ASGI app testing.
"""
import pytest
import httpx

from algoflow import main
from algoflow.main import app
from algoflow.core.reports import SummaryPDFGenerator


@pytest.fixture
async def async_client():
    """Create async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def pdf_output(monkeypatch, temp_output_dir):
    monkeypatch.setattr(main, "_pdf_generator", SummaryPDFGenerator(output_dir=temp_output_dir))
    return temp_output_dir


async def _new_session(client) -> dict:
    response = await client.post("/api/v1/sessions", json={"algorithm_id": "hypertension-mgmt"})
    assert response.status_code == 201
    return response.json()


async def _walk(client, session_id, edge_ids) -> dict:
    data = None
    for edge_id in edge_ids:
        response = await client.post(
            f"/api/v1/sessions/{session_id}/advance", json={"edge_id": edge_id}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["applied"] is True
    return data


STAGE2_ROUTE = ["e-start-cat", "e-cat-stage2", "e-s2-dm"]


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_health_endpoint(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "active_sessions" in data


@pytest.mark.asyncio
class TestAlgorithmEndpoints:
    """Tests for the algorithm registry."""

    async def test_list_algorithms(self, async_client):
        response = await async_client.get("/api/v1/algorithms")
        assert response.status_code == 200

        algorithms = response.json()["algorithms"]
        assert [a["id"] for a in algorithms] == ["hypertension-mgmt"]
        assert algorithms[0]["guideline"] == "ACC/AHA 2017"

    async def test_get_definition(self, async_client):
        response = await async_client.get("/api/v1/algorithms/hypertension-mgmt")
        assert response.status_code == 200

        data = response.json()
        assert data["start_node_id"] == "start"
        assert len(data["faq"]) == 5

    async def test_unknown_algorithm(self, async_client):
        response = await async_client.get("/api/v1/algorithms/nope")
        assert response.status_code == 404

    async def test_layout(self, async_client):
        response = await async_client.get("/api/v1/algorithms/hypertension-mgmt/layout")
        assert response.status_code == 200

        data = response.json()
        assert len(data["nodes"]) == 17
        assert data["nodes"][0]["width"] == 180.0
        again = await async_client.get("/api/v1/algorithms/hypertension-mgmt/layout")
        assert again.json() == data


@pytest.mark.asyncio
class TestSessionEndpoints:
    """Tests for session lifecycle and traversal."""

    async def test_create_session(self, async_client):
        data = await _new_session(async_client)
        assert data["algorithm_id"] == "hypertension-mgmt"
        assert data["snapshot"]["current_node_id"] == "start"
        assert data["wizard"]["step_number"] == 1
        assert data["highlight"]["active_node_id"] == "start"
        assert data["applied"] is None

    async def test_create_unknown_algorithm(self, async_client):
        response = await async_client.post("/api/v1/sessions", json={"algorithm_id": "nope"})
        assert response.status_code == 404

    async def test_create_requires_algorithm_id(self, async_client):
        response = await async_client.post("/api/v1/sessions", json={})
        assert response.status_code == 422

    async def test_advance_keeps_views_in_sync(self, async_client):
        session = await _new_session(async_client)
        data = await _walk(async_client, session["session_id"], ["e-start-cat"])
        assert data["snapshot"]["current_node_id"] == "bp_category"
        assert data["wizard"]["current_node"]["id"] == "bp_category"
        assert data["highlight"]["active_node_id"] == "bp_category"
        assert len(data["wizard"]["choices"]) == 4

    async def test_invalid_edge_not_applied(self, async_client):
        session = await _new_session(async_client)
        response = await async_client.post(
            f"/api/v1/sessions/{session['session_id']}/advance", json={"edge_id": "e-fu-goal"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["applied"] is False
        assert data["snapshot"]["current_node_id"] == "start"

    async def test_back_jump_select_reset(self, async_client):
        session = await _new_session(async_client)
        sid = session["session_id"]
        await _walk(async_client, sid, STAGE2_ROUTE[:2])

        back = (await async_client.post(f"/api/v1/sessions/{sid}/back")).json()
        assert back["applied"] is True
        assert back["snapshot"]["current_node_id"] == "bp_category"

        jump = (await async_client.post(f"/api/v1/sessions/{sid}/jump", json={"node_id": "start"})).json()
        assert jump["applied"] is True
        assert jump["snapshot"]["path"] == []

        select = (await async_client.post(f"/api/v1/sessions/{sid}/select", json={"node_id": "hf"})).json()
        assert select["applied"] is False

        reset = (await async_client.post(f"/api/v1/sessions/{sid}/reset")).json()
        assert reset["applied"] is True
        assert reset["snapshot"]["last_operation"] == "reset"

    async def test_get_and_delete_session(self, async_client):
        session = await _new_session(async_client)
        sid = session["session_id"]

        response = await async_client.get(f"/api/v1/sessions/{sid}")
        assert response.status_code == 200

        response = await async_client.delete(f"/api/v1/sessions/{sid}")
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        response = await async_client.get(f"/api/v1/sessions/{sid}")
        assert response.status_code == 404

    async def test_unknown_session(self, async_client):
        response = await async_client.post("/api/v1/sessions/missing/back")
        assert response.status_code == 404


@pytest.mark.asyncio
class TestSummaryEndpoints:
    """Tests for summary and PDF export."""

    async def test_summary_before_outcome(self, async_client):
        session = await _new_session(async_client)
        response = await async_client.get(f"/api/v1/sessions/{session['session_id']}/summary")
        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "SUMMARY_ERROR"
        assert set(data) == {"error", "message", "details"}

    async def test_error_responses_documented(self, async_client):
        schema = (await async_client.get("/openapi.json")).json()
        summary = schema["paths"]["/api/v1/sessions/{session_id}/summary"]["get"]
        pdf = schema["paths"]["/api/v1/sessions/{session_id}/summary/pdf"]["get"]
        error_ref = "#/components/schemas/ErrorResponse"
        assert summary["responses"]["409"]["content"]["application/json"]["schema"]["$ref"] == error_ref
        assert pdf["responses"]["500"]["content"]["application/json"]["schema"]["$ref"] == error_ref

    async def test_summary_at_outcome(self, async_client):
        session = await _new_session(async_client)
        sid = session["session_id"]
        state = await _walk(async_client, sid, STAGE2_ROUTE)
        assert state["wizard"]["is_terminal"] is True
        assert state["wizard"]["summary"]["step_count"] == 3

        response = await async_client.get(f"/api/v1/sessions/{sid}/summary")
        assert response.status_code == 200
        data = response.json()
        assert [s["choice"] for s in data["steps"]] == [
            "Classify", "Stage 2 (>=140/90)", "Diabetes or CKD"
        ]
        assert data["outcome"]["label"] == "Start ACEi or ARB"

    async def test_summary_pdf(self, async_client, pdf_output):
        session = await _new_session(async_client)
        sid = session["session_id"]
        await _walk(async_client, sid, STAGE2_ROUTE)

        response = await async_client.get(f"/api/v1/sessions/{sid}/summary/pdf")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert "hypertension-mgmt-algorithm-" in response.headers["content-disposition"]

    async def test_summary_pdf_before_outcome(self, async_client, pdf_output):
        session = await _new_session(async_client)
        response = await async_client.get(f"/api/v1/sessions/{session['session_id']}/summary/pdf")
        assert response.status_code == 409

    async def test_retry_after_outcome(self, async_client):
        session = await _new_session(async_client)
        sid = session["session_id"]
        await _walk(async_client, sid, STAGE2_ROUTE)

        response = await async_client.post(f"/api/v1/sessions/{sid}/retry")
        data = response.json()
        assert data["applied"] is True
        assert data["snapshot"]["current_node_id"] == "start"
