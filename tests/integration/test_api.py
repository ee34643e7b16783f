"""
Integration tests for the HTTP API.

Runs the FastAPI app through TestClient with a workspace holding the
sample questions and an order-keeping shuffle.
"""

import pytest
from fastapi.testclient import TestClient

from quizbank.api.main import app


@pytest.fixture
def client(workspace):
    with TestClient(app) as client:
        app.state.workspace = workspace
        yield client


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "quizbank"

    def test_health_counts(self, client):
        data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["questions"] == 4
        assert data["pools"] == 0


class TestBankEndpoints:
    def test_save_question(self, client):
        response = client.post(
            "/api/bank/questions",
            json={"question_text": "Which planet is closest to the Sun?", "question_type": "mcq"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == 'Question "Which planet is closest to the..." saved to bank.'

    def test_save_duplicate_conflicts(self, client):
        response = client.post(
            "/api/bank/questions",
            json={"id": "bank-q1", "question_text": "Again?"},
        )

        assert response.status_code == 409

    def test_list_with_filters(self, client):
        response = client.get("/api/bank/questions", params={"category": "biology", "question_type": "mcq"})

        assert [q["id"] for q in response.json()] == ["bank-q1"]

    def test_list_with_tags(self, client):
        response = client.get("/api/bank/questions", params={"tags": ["biology", "plants"]})

        assert [q["id"] for q in response.json()] == ["bank-q2"]

    def test_get_and_delete(self, client):
        assert client.get("/api/bank/questions/bank-q3").json()["type_label"] == "True/False"

        assert client.delete("/api/bank/questions/bank-q3").json()["status"] == "deleted"
        missing = client.get("/api/bank/questions/bank-q3")
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Question not found: bank-q3"
        assert client.delete("/api/bank/questions/bank-q3").status_code == 404

    def test_categories_and_types(self, client):
        assert client.get("/api/bank/categories").json() == [
            "Biology",
            "General Science",
            "Mathematics",
        ]
        assert [t["value"] for t in client.get("/api/bank/types").json()] == [
            "mcq",
            "short_answer",
            "true_false",
        ]


class TestGenerateEndpoints:
    def test_generate_cycles_through_matches(self, client):
        payload = {"category": "Biology", "count": 1}

        first = client.post("/api/quiz/generate", json=payload).json()
        second = client.post("/api/quiz/generate", json=payload).json()

        assert first["quiz"]["questions"][0]["id"] == "bank-q1"
        assert first["cycle_complete"] is False
        assert second["quiz"]["questions"][0]["id"] == "bank-q2"
        assert second["cycle_complete"] is True
        assert second["notice"].startswith("All 2 matching questions have been used.")

    def test_generate_no_matches(self, client):
        response = client.post("/api/quiz/generate", json={"category": "History", "count": 2})

        assert response.status_code == 404
        assert response.json()["detail"] == "No questions match the selected criteria"

    def test_generate_count_too_large(self, client):
        response = client.post("/api/quiz/generate", json={"count": 1000})

        assert response.status_code == 422

    def test_generated_quiz_is_retrievable(self, client):
        quiz = client.post("/api/quiz/generate", json={"count": 2}).json()["quiz"]

        response = client.get(f"/api/quiz/quizzes/{quiz['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "Mixed Quiz"
        assert client.get("/api/quiz/quizzes/nope").status_code == 404

    def test_pools_listed_and_reset(self, client):
        client.post("/api/quiz/generate", json={"category": "Biology", "count": 1})

        pools = client.get("/api/quiz/pools").json()
        assert len(pools) == 1
        assert pools[0]["size"] == 2
        assert pools[0]["remaining"] == 1

        assert client.delete("/api/quiz/pools").json() == {"status": "reset", "pools_removed": 1}
        assert client.get("/api/quiz/pools").json() == []


class TestAssemblyEndpoints:
    def test_assembly_flow(self, client):
        added = client.post("/api/quiz/assembly", json={"question_id": "bank-q1"}).json()
        duplicate = client.post("/api/quiz/assembly", json={"question_id": "bank-q1"}).json()
        unsupported = client.post("/api/quiz/assembly", json={"question_id": "bank-q2"}).json()

        assert added["outcome"] == "added"
        assert duplicate["title"] == "Already Added"
        assert unsupported["outcome"] == "unsupported_type"
        assert client.get("/api/quiz/assembly").json()["count"] == 1

        quiz = client.post("/api/quiz/assembly/quiz", json={"title": "Cells"}).json()
        assert [q["id"] for q in quiz["questions"]] == ["bank-q1"]

    def test_unknown_question(self, client):
        response = client.post("/api/quiz/assembly", json={"question_id": "nope"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Question not found: nope"

    def test_remove_and_clear(self, client):
        client.post("/api/quiz/assembly", json={"question_id": "bank-q1"})
        client.post("/api/quiz/assembly", json={"question_id": "bank-q4"})

        assert client.delete("/api/quiz/assembly/bank-q1").json() == {"status": "removed", "count": 1}
        assert client.delete("/api/quiz/assembly/bank-q1").status_code == 404
        assert client.delete("/api/quiz/assembly").json() == {"status": "cleared", "count": 0}

    def test_empty_assembly_quiz_rejected(self, client):
        response = client.post("/api/quiz/assembly/quiz", json={"title": "Nothing"})

        assert response.status_code == 400


class TestSessionEndpoints:
    def test_submit_and_review(self, client):
        quiz = client.post("/api/quiz/generate", json={"category": "Biology", "count": 2}).json()["quiz"]

        response = client.post(
            "/api/quiz/sessions",
            json={"quiz_id": quiz["id"], "answers": {"bank-q1": "mitochondria"}},
        )

        assert response.status_code == 201
        session = response.json()
        assert session["score"] == 50
        assert session["correct_count"] == 1
        assert session["quiz_type"] == "mcq"

        assert client.get(f"/api/quiz/sessions/{session['id']}").json()["quiz_id"] == quiz["id"]
        assert [s["id"] for s in client.get("/api/quiz/sessions").json()] == [session["id"]]

    def test_submit_unknown_quiz(self, client):
        response = client.post("/api/quiz/sessions", json={"quiz_id": "nope", "answers": {}})

        assert response.status_code == 404

    def test_unknown_session(self, client):
        assert client.get("/api/quiz/sessions/nope").status_code == 404
