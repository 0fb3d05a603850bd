# =============================================================================
# tests/test_api.py - API Endpoint Tests
# =============================================================================
# Tests for the HTTP surface through FastAPI's TestClient. The planner is
# replaced with app.dependency_overrides, so no OpenAI call is made.
# =============================================================================

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from agents.action_planner import PlanningError
from agents.models.action_plan import ActionPlan
from app.config import settings
from app.dependencies import get_engine, get_planner
from app.exceptions import LLMNotConfiguredError
from app.main import app
from cleaning_actions import ActionEngine


@pytest.fixture
def client():
    app.dependency_overrides[get_engine] = lambda: ActionEngine(seed=0)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def planner():
    mock = MagicMock()
    app.dependency_overrides[get_planner] = lambda: mock
    return mock


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/v1/health"


# =============================================================================
# Actions
# =============================================================================

class TestActionsEndpoints:
    """Tests for /actions/catalogue and /actions/apply."""

    def test_catalogue(self, client):
        body = client.get("/api/v1/actions/catalogue").json()
        types = {entry["type"] for entry in body["actions"]}
        assert body["count"] == len(types)
        assert "FILL_MISSING" in types

    def test_apply(self, client):
        response = client.post("/api/v1/actions/apply", json={
            "data": [{"name": " bob ", "age": None}, {"name": "BOB", "age": 41}],
            "schema": {"age": {"dataType": "Integer"}},
            "actions": [
                {"type": "STANDARDIZE_TEXT_FORMAT", "column": "name", "title": "Names", "response": "Names were cleaned"},
                {"type": "FILL_MISSING", "column": "age", "defaultValue": 0, "title": "Ages", "response": "Ages were filled"},
                {"type": "MAKE_IT_PRETTY"},
            ],
        })

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [{"name": "Bob", "age": 0}, {"name": "Bob", "age": 41}]
        assert [a["status"] for a in body["actions"]] == ["APPLIED", "APPLIED", "SKIPPED"]
        assert body["narratives"] == [
            {"title": "Names", "response": "Names were cleaned"},
            {"title": "Ages", "response": "Ages were filled"},
        ]
        assert body["summary"].startswith("2 changes were applied")
        assert body["schema"]["age"]["dataType"] == "Integer"
        assert body["row_count"] == 2

    def test_apply_without_summary(self, client):
        response = client.post("/api/v1/actions/apply", json={"data": [], "actions": [], "summarize": False})
        assert response.status_code == 200
        assert response.json()["summary"] is None

    def test_malformed_action_list(self, client):
        response = client.post("/api/v1/actions/apply", json={"data": [{"a": 1}], "actions": [{"column": "a"}]})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ACTION_LIST"

    def test_actions_not_a_list(self, client):
        response = client.post("/api/v1/actions/apply", json={"data": [{"a": 1}], "actions": {"type": "TRIM_TEXT"}})
        assert response.status_code == 400

    def test_bad_body(self, client):
        response = client.post("/api/v1/actions/apply", json={"actions": []})
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_row_limit(self, client, monkeypatch):
        monkeypatch.setattr(settings, "MAX_ROWS_PER_REQUEST", 1)
        response = client.post("/api/v1/actions/apply", json={"data": [{"a": 1}, {"a": 2}], "actions": []})
        assert response.status_code == 413
        assert response.json()["code"] == "DATASET_TOO_LARGE"


# =============================================================================
# Chat
# =============================================================================

class TestChatEndpoint:
    """Tests for POST /chat."""

    def test_chat_applies_plan(self, client, planner):
        planner.plan.return_value = ActionPlan(
            actions=[{"type": "SORT_ROWS_DESCENDING", "column": "age", "title": "Sorted", "response": "Sorted by age"}],
            summary="Rows are now sorted by age, oldest first.",
        )

        response = client.post("/api/v1/chat", json={
            "command": "sort by age descending",
            "data": [{"age": 3}, {"age": 7}],
            "schema": {"age": {"dataType": "Integer"}},
        })

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [{"age": 7}, {"age": 3}]
        assert body["plan_summary"] == "Rows are now sorted by age, oldest first."
        assert body["assistant_response"].startswith("1 change was applied")
        assert body["command"] == "sort by age descending"

    def test_chat_without_actions(self, client, planner):
        planner.plan.return_value = ActionPlan(actions=[], summary="Hi there!")
        response = client.post("/api/v1/chat", json={"command": "hello", "data": [{"a": 1}]})
        assert response.status_code == 200
        assert response.json()["data"] == [{"a": 1}]
        assert response.json()["assistant_response"] == "Hi there!"

    def test_planning_failure(self, client, planner):
        planner.plan.side_effect = PlanningError("bad reply", code="JSON_PARSE_ERROR")
        response = client.post("/api/v1/chat", json={"command": "do it", "data": []})
        assert response.status_code == 502
        body = response.json()
        assert body["code"] == "PLANNING_FAILED"
        assert body["details"]["cause"] == "JSON_PARSE_ERROR"

    def test_llm_not_configured(self, client):
        def not_configured():
            raise LLMNotConfiguredError()

        app.dependency_overrides[get_planner] = not_configured
        response = client.post("/api/v1/chat", json={"command": "do it", "data": []})
        assert response.status_code == 503
        assert response.json()["code"] == "LLM_NOT_CONFIGURED"

    def test_empty_command_rejected(self, client, planner):
        response = client.post("/api/v1/chat", json={"command": "", "data": []})
        assert response.status_code == 422
