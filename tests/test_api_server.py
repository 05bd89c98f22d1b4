"""Test coverage for the practice HTTP API."""

import pytest
from fastapi.testclient import TestClient

from dgca_practice.server.api_server import create_api_app


@pytest.fixture
def client(manager):
    return TestClient(create_api_app(manager))


@pytest.fixture
def started(client):
    response = client.post("/session", json={"question_count": 3, "time_limit_minutes": 5})
    assert response.status_code == 201
    return response.json()


class TestCatalogEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_categories(self, client):
        data = client.get("/categories").json()

        assert data["total_questions"] == 12
        slugs = {entry["slug"]: entry["question_count"] for entry in data["categories"]}
        assert slugs["instruments"] == 3
        assert slugs["technical"] == 2


class TestSessionEndpoints:
    def test_start_returns_state_without_answer_key(self, started):
        assert started["phase"] == "in_progress"
        assert started["total_questions"] == 3
        assert started["remaining_seconds"] == 300
        assert started["clock_display"] == "05:00"
        assert started["answered"] == [False, False, False]
        assert started["exit_requested"] is False
        assert started["question"]["correct_option_index"] is None
        assert started["question"]["prompt_html"].startswith("<p>")

    def test_no_session_yet(self, client):
        assert client.get("/session").status_code == 404
        assert client.post("/session/answer", json={"selected_option_index": 0}).status_code == 404
        assert client.post("/session/finish").status_code == 404

    def test_invalid_start_payloads(self, client):
        assert client.post("/session", json={"question_count": 0}).status_code == 422
        assert client.post("/session", json={"question_count": 99}).status_code == 422
        assert client.post("/session", json={"category": "astronomy"}).status_code == 422

    def test_second_start_conflicts_unless_replaced(self, client, started):
        assert client.post("/session", json={"question_count": 3}).status_code == 409
        response = client.post("/session", json={"question_count": 2, "replace": True})
        assert response.status_code == 201
        assert response.json()["total_questions"] == 2

    def test_answer_and_navigate(self, client, started):
        response = client.post("/session/answer", json={"selected_option_index": 1})
        assert response.status_code == 200
        assert response.json() == {
            "question_id": started["question"]["id"],
            "selected_option_index": 1,
        }

        state = client.post("/session/navigate", json={"action": "next"}).json()
        assert state["current_index"] == 1
        assert state["answered"] == [True, False, False]

        state = client.post("/session/navigate", json={"action": "index", "index": 0}).json()
        assert state["question"]["selected_option_index"] == 1

    def test_invalid_option(self, client, started):
        response = client.post("/session/answer", json={"selected_option_index": 9})
        assert response.status_code == 422

    def test_navigate_index_requires_index(self, client, started):
        response = client.post("/session/navigate", json={"action": "index"})
        assert response.status_code == 422

    def test_finish_returns_summary(self, client, started):
        response = client.post("/session/finish")
        assert response.status_code == 200
        summary = response.json()

        assert summary["total_questions"] == 3
        assert summary["unanswered_count"] == 3
        assert summary["score_percentage"] == 0
        assert summary["grade"] == "D"
        assert summary["was_exited_early"] is False
        assert len(summary["review"]) == 3
        assert all(entry["selected_option_index"] == -1 for entry in summary["review"])

        assert client.get("/session/summary").json()["score_correct"] == 0
        assert client.post("/session/finish").status_code == 409
        assert client.get("/session").json()["question"]["correct_option_index"] is not None

    def test_summary_before_finish_conflicts(self, client, started):
        assert client.get("/session/summary").status_code == 409


class TestExitEndpoints:
    def test_two_step_exit(self, client, started):
        assert client.post("/session/exit/confirm").status_code == 409

        state = client.post("/session/exit/request").json()
        assert state["exit_requested"] is True
        assert state["phase"] == "in_progress"

        summary = client.post("/session/exit/confirm").json()
        assert summary["was_exited_early"] is True

    def test_cancel_exit(self, client, started):
        client.post("/session/exit/request")
        state = client.post("/session/exit/cancel").json()

        assert state["exit_requested"] is False
        assert state["phase"] == "in_progress"


class TestHistoryEndpoints:
    def test_results_and_progress(self, client, started):
        client.post("/session/finish")
        client.post("/session", json={"category": "meteorology", "question_count": 2})
        client.post("/session/exit/request")
        client.post("/session/exit/confirm")

        results = client.get("/results").json()["results"]
        assert [r["exited"] for r in results] == [True, False]
        assert results[0]["category"] == "meteorology"
        assert client.get("/results", params={"limit": 1}).json()["results"][0]["id"] == results[0]["id"]

        progress = client.get("/progress").json()
        assert progress["total_tests_taken"] == 2
        assert progress["total_questions_attempted"] == 5
        assert {entry["category"] for entry in progress["categories"]} == {"meteorology", "all"}


class TestReplacedSession:
    def test_finish_summary_belongs_to_finished_session(self, client, manager, started, monkeypatch):
        finish = manager.finish

        def finish_then_start_another():
            summary = finish()
            manager.start_practice(question_count=2)
            return summary

        monkeypatch.setattr(manager, "finish", finish_then_start_another)

        response = client.post("/session/finish")

        assert response.status_code == 200
        summary = response.json()
        assert summary["total_questions"] == 3
        assert len(summary["review"]) == 3
        assert started["question"]["id"] == summary["review"][0]["question_id"]

        state = client.get("/session").json()
        assert state["total_questions"] == 2
        assert len(state["answered"]) == 2
