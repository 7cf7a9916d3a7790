# Route-level tests using FastAPI TestClient (no server, no network)
import json
import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeLLM
from session_backend.config import Settings
from session_backend.dependencies import get_livekit_service, get_llm_client
from session_backend.exceptions import LLMServiceError
from session_backend.main import app
from session_backend.services.livekit_service import LiveKitService

LIVEKIT_SETTINGS = Settings(
    livekit_url="wss://classroom.livekit.cloud",
    livekit_api_key="APIkey123",
    livekit_api_secret="a-very-long-livekit-secret-for-testing-purposes",
)


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def livekit():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    return LiveKitService(LIVEKIT_SETTINGS, transport=transport)


@pytest.fixture
def client(llm, livekit):
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_livekit_service] = lambda: livekit
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def generate(client, llm, quiz_json, **body):
    llm.responses.append(quiz_json)
    payload = {"topic": "Photosynthesis", "roomName": "bio-101", "studentQuestions": []}
    payload.update(body)
    return client.post("/generate-quiz", json=payload)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["quizzes"] == 0

    def test_startup_warns_about_missing_config(self, monkeypatch, caplog):
        import session_backend.main as main_module

        monkeypatch.setattr(main_module, "settings", Settings())
        with caplog.at_level(logging.WARNING, logger="session_backend.main"):
            with TestClient(app):
                pass

        warnings = [r.getMessage() for r in caplog.records if r.name == "session_backend.main"]
        assert "⚠️ GROQ_API_KEY not set, AI endpoints will fail" in warnings
        assert "⚠️ LiveKit ENV variables missing, /token and /end-room will fail" in warnings


class TestQuizFlow:
    def test_generate_hides_answer_keys(self, client, llm, quiz_json):
        response = generate(client, llm, quiz_json)

        assert response.status_code == 200
        data = response.json()
        assert data["quizId"].startswith("quiz_")
        assert len(data["questions"]) == 5
        assert data["questions"][0] == {
            "id": 0,
            "question": "Which gas do plants absorb during photosynthesis?",
            "options": ["Carbon dioxide", "Oxygen", "Nitrogen", "Helium"],
        }
        assert "correctAnswer" not in json.dumps(data)

    def test_new_quiz_results(self, client, llm, quiz_json):
        quiz_id = generate(client, llm, quiz_json).json()["quizId"]

        response = client.get(f"/quiz-results/{quiz_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["quizId"] == quiz_id
        assert data["topic"] == "Photosynthesis"
        assert data["roomName"] == "bio-101"
        assert data["submissions"] == []
        assert data["stats"] == {
            "totalSubmissions": 0,
            "averageScore": 0,
            "highestScore": 0,
            "lowestScore": 0,
        }
        assert [q["correctAnswer"] for q in data["questions"]] == [0, 1, 1, 3, 2]

    def test_submit_and_results(self, client, llm, quiz_json):
        quiz_id = generate(client, llm, quiz_json).json()["quizId"]

        alice = client.post("/submit-quiz", json={
            "quizId": quiz_id, "studentName": "Alice", "answers": [0, 1, 1, 3, 0],
        })
        bob = client.post("/submit-quiz", json={
            "quizId": quiz_id, "studentName": "Bob", "answers": [0, 1, 2, 3, 0],
        })

        assert alice.status_code == 200
        assert alice.json()["score"] == 80
        assert bob.json() | {"results": None} == {
            "score": 60, "correctCount": 3, "totalQuestions": 5, "results": None,
        }
        assert bob.json()["results"][2] == {
            "questionId": 2,
            "question": "Which pigment captures light energy?",
            "studentAnswer": 2,
            "correctAnswer": 1,
            "isCorrect": False,
        }

        stats = client.get(f"/quiz-results/{quiz_id}").json()["stats"]
        assert stats == {"totalSubmissions": 2, "averageScore": 70, "highestScore": 80, "lowestScore": 60}

    def test_submit_with_missing_answers(self, client, llm, quiz_json):
        quiz_id = generate(client, llm, quiz_json).json()["quizId"]

        response = client.post("/submit-quiz", json={
            "quizId": quiz_id, "studentName": "Alice", "answers": [0, None],
        })

        assert response.status_code == 200
        assert response.json()["correctCount"] == 1
        assert response.json()["score"] == 20

    def test_submit_with_non_integer_answers(self, client, llm, quiz_json):
        quiz_id = generate(client, llm, quiz_json).json()["quizId"]

        response = client.post("/submit-quiz", json={
            "quizId": quiz_id, "studentName": "Alice", "answers": ["B", 0.5, True, "1", 2],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["correctCount"] == 1
        assert data["score"] == 20
        assert [r["isCorrect"] for r in data["results"]] == [False, False, False, False, True]
        assert [r["studentAnswer"] for r in data["results"]] == ["B", 0.5, True, "1", 2]

        stored = client.get(f"/quiz-results/{quiz_id}").json()["submissions"][0]
        assert stored["answers"] == ["B", 0.5, True, "1", 2]
        assert stored["score"] == 20

    def test_submit_bool_and_string_not_coerced(self, client, llm, quiz_json):
        quiz_id = generate(client, llm, quiz_json).json()["quizId"]

        response = client.post("/submit-quiz", json={
            "quizId": quiz_id, "studentName": "Bob", "answers": [True, True, "1", 3, 2],
        })

        assert response.status_code == 200
        assert response.json()["correctCount"] == 2

    def test_submit_unknown_quiz(self, client):
        response = client.post("/submit-quiz", json={
            "quizId": "quiz_missing", "studentName": "Alice", "answers": [0],
        })

        assert response.status_code == 404
        assert response.json()["detail"] == "Quiz not found"

    def test_submit_missing_fields(self, client):
        response = client.post("/submit-quiz", json={"quizId": "quiz_missing"})

        assert response.status_code == 400

    def test_results_unknown_quiz(self, client):
        assert client.get("/quiz-results/quiz_missing").status_code == 404

    def test_generate_missing_topic(self, client, llm):
        response = client.post("/generate-quiz", json={"roomName": "bio-101"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Topic and roomName are required"
        assert llm.calls == []

    def test_generate_invalid_format(self, client, llm):
        response = generate(client, llm, json.dumps({"quiz": []}))

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to parse quiz questions or AI returned invalid format"
        assert client.get("/health").json()["quizzes"] == 0

    def test_generate_upstream_failure(self, client, llm):
        llm.error = LLMServiceError("boom")

        response = client.post("/generate-quiz", json={"topic": "Photosynthesis", "roomName": "bio-101"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Quiz generation failed"
        assert client.get("/health").json()["quizzes"] == 0


class TestAssistantRoutes:
    def test_ask_ai(self, client, llm):
        llm.responses.append("A variable stores a value.")

        response = client.post("/ask-ai", json={"question": "What is a variable?"})

        assert response.status_code == 200
        assert response.json() == {"answer": "A variable stores a value."}

    def test_ask_ai_requires_question(self, client):
        assert client.post("/ask-ai", json={}).status_code == 400

    def test_ask_ai_failure(self, client, llm):
        llm.error = LLMServiceError("boom")

        response = client.post("/ask-ai", json={"question": "What is a variable?"})

        assert response.status_code == 500
        assert response.json()["detail"] == "AI response failed"

    def test_extract_question(self, client, llm):
        llm.responses.append('"What is a variable?"')

        response = client.post("/extract-question", json={"transcript": "Okay, I have a doubt. What is a variable?"})

        assert response.json() == {"extractedQuestion": "What is a variable?"}

    def test_generate_summary(self, client, llm):
        llm.responses.append("We covered photosynthesis.")

        response = client.post("/generate-summary", json={"topic": "Photosynthesis"})

        assert response.json() == {"summary": "We covered photosynthesis."}

    def test_generate_summary_requires_topic(self, client):
        assert client.post("/generate-summary", json={"studentQuestions": ["Why?"]}).status_code == 400


class TestRoomRoutes:
    def test_token(self, client):
        response = client.post("/token", json={"name": "Alice", "room": "bio-101", "role": "student"})

        assert response.status_code == 200
        assert response.json()["url"] == "wss://classroom.livekit.cloud"
        assert response.json()["token"].count(".") == 2

    def test_token_missing_fields(self, client):
        response = client.post("/token", json={"name": "Alice"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing name, room, or role"

    def test_token_without_livekit_config(self, client):
        app.dependency_overrides[get_livekit_service] = lambda: LiveKitService(Settings())

        response = client.post("/token", json={"name": "Alice", "room": "bio-101", "role": "student"})

        assert response.status_code == 500
        assert response.json()["detail"] == "LiveKit ENV variables missing"

    def test_end_room(self, client):
        response = client.post("/end-room", json={"roomName": "bio-101"})

        assert response.json() == {"success": True, "message": "Room bio-101 ended."}

    def test_end_room_requires_name(self, client):
        assert client.post("/end-room", json={}).status_code == 400

    def test_end_room_failure(self, client):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="internal"))
        app.dependency_overrides[get_livekit_service] = lambda: LiveKitService(LIVEKIT_SETTINGS, transport=transport)

        response = client.post("/end-room", json={"roomName": "bio-101"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to end room"
