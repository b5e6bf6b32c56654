"""HTTP-level tests for the FastAPI application."""

import random
from pathlib import Path

from fastapi.testclient import TestClient

from intent_bot.api.app import create_app


def test_question_endpoint_unit_conversion(client: TestClient) -> None:
    response = client.get("/api/question", params={"q": "convert 10 km to miles"})

    assert response.status_code == 200
    body = response.json()
    assert body == {
        "responseText": "10 kilometers(km) is equal to 6.21371 miles(mi).",
        "query": "convert 10 km to miles",
        "rating": 1.0,
        "action": "unit_converter",
        "isFallback": False,
        "similarQuestion": "convert {amount} {unitFrom} to {unitTo}",
    }


def test_question_endpoint_decodes_and_normalizes(client: TestClient) -> None:
    response = client.get("/api/question?q=%20%20How%20are+you%3F%20")

    body = response.json()
    assert body["query"] == "How are you?"
    assert body["responseText"] == "Great, thanks."
    assert body["isFallback"] is False


def test_question_endpoint_encyclopedia(client: TestClient) -> None:
    body = client.get("/api/question", params={"q": "what is photosynthesis"}).json()

    assert body["action"] == "wikipedia"
    assert body["responseText"].startswith("Photosynthesis is how plants")


def test_question_endpoint_fallback(client: TestClient) -> None:
    body = client.get("/api/question", params={"q": "xkqj"}).json()

    assert body["isFallback"] is True
    assert body["action"] == "fallback"
    assert body["responseText"] == "Sorry, I didn't get that."


def test_question_endpoint_name_greeting(client: TestClient) -> None:
    body = client.get("/api/question", params={"q": "my name is Alex"}).json()

    assert body["responseText"] == "I'm glad to know, Alex."
    assert body["rating"] == 1


def test_missing_q_defaults_to_greeting(client: TestClient) -> None:
    body = client.get("/api/question").json()
    assert body["query"] == "Hello"
    assert body["responseText"] == "Hello from TestBot!"


def test_malformed_encoding_is_a_500_with_message(client: TestClient) -> None:
    response = client.get("/api/question?q=%ff")

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == 500
    assert body["error"].startswith("URI malformed")


def test_internal_failure_is_a_generic_500(client: TestClient, app, monkeypatch) -> None:
    async def boom(raw):
        raise RuntimeError("matcher exploded")

    monkeypatch.setattr(app.state.responder, "answer", boom)

    response = client.get("/api/question", params={"q": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error!", "code": 500}


def test_welcome_endpoint(client: TestClient) -> None:
    response = client.get("/api/welcome")
    assert response.status_code == 200
    assert response.json() == {"responseText": "Welcome to TestBot!"}


def test_all_questions_endpoint(client: TestClient) -> None:
    response = client.get("/api/allQuestions")

    assert response.status_code == 200
    questions = response.json()
    assert isinstance(questions, list)
    assert "How can i report a bug?" in questions
    for question in questions:
        assert question.strip()
        assert len(question) >= 15
        assert question.endswith((".", "?"))


def test_all_questions_failure_is_a_generic_500(client: TestClient, app, monkeypatch) -> None:
    def boom():
        raise RuntimeError("listing exploded")

    monkeypatch.setattr(app.state.responder, "all_questions", boom)

    response = client.get("/api/allQuestions")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error!", "code": 500}


def test_health_endpoint(client: TestClient) -> None:
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["components"]["responder"] == "ready"


def test_unknown_route_without_static_dir(client: TestClient) -> None:
    response = client.get("/does/not/exist")
    assert response.status_code == 404
    assert response.text == "Page Not Found!"


def test_static_files_and_404_page(settings, bank, lookup, units, tmp_path: Path) -> None:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>chat</h1>", encoding="utf-8")
    (public / "404.html").write_text("<h1>lost</h1>", encoding="utf-8")
    settings.STATIC_DIR = str(public)
    client = TestClient(
        create_app(settings=settings, bank=bank, lookup=lookup, units=units, rng=random.Random(0))
    )

    index = client.get("/")
    assert index.status_code == 200
    assert "<h1>chat</h1>" in index.text

    missing = client.get("/nope.html")
    assert missing.status_code == 404
    assert "<h1>lost</h1>" in missing.text

    # API routes still win over the static mount
    assert client.get("/api/welcome").json() == {"responseText": "Welcome to TestBot!"}


def test_cors_is_open(client: TestClient) -> None:
    response = client.get("/api/welcome", headers={"Origin": "https://example.org"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_responses_are_indented_json(client: TestClient) -> None:
    response = client.get("/api/welcome")

    assert response.headers["content-type"].startswith("application/json")
    assert response.text == '{\n  "responseText": "Welcome to TestBot!"\n}'
