import pytest
from fastapi.testclient import TestClient

from quizgen.api import create_app
from quizgen.errors import UpstreamError
from quizgen.services.quiz_generation_service import QuizGenerationService

REQUEST = {"range": "Unit 1-2", "skill": "Reading", "type": "Short Answer"}


@pytest.fixture
def make_api(settings, id_factory, make_fake_client):
    def _make(response=None, error=None, app_settings=None):
        client = make_fake_client(response=response, error=error)
        service = QuizGenerationService(app_settings or settings, client=client, id_factory=id_factory)
        return TestClient(create_app(service=service)), client

    return _make


def test_generate_returns_questions_and_raw(make_api):
    api, client = make_api(response={"data": {"outputs": {"result": "```\nQ1|->A1<_>Q2|->A2\n```"}}})

    resp = api.post("/api/generate", json=REQUEST)

    assert resp.status_code == 200
    body = resp.json()
    assert body["raw"] == "```\nQ1|->A1<_>Q2|->A2\n```"
    assert body["questions"] == [
        {"id": "q-1", "description": "Q1", "options": None, "answer": "A1", "skill": "Reading", "type": "Short Answer"},
        {"id": "q-2", "description": "Q2", "options": None, "answer": "A2", "skill": "Reading", "type": "Short Answer"},
    ]
    assert client.prompts == ["Unit 1-2, ['Reading'], ['Short Answer']"]


def test_missing_configuration_is_500(make_api, unconfigured_settings):
    api, client = make_api(app_settings=unconfigured_settings)

    resp = api.post("/api/generate", json=REQUEST)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Dify configuration is missing"}
    assert client.prompts == []


def test_missing_configuration_checked_before_body(make_api, unconfigured_settings):
    api, _ = make_api(app_settings=unconfigured_settings)

    resp = api.post("/api/generate", content="not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Dify configuration is missing"}


@pytest.mark.parametrize("missing", ["range", "skill", "type"])
def test_missing_field_is_400(make_api, missing):
    api, client = make_api()
    payload = {k: v for k, v in REQUEST.items() if k != missing}

    resp = api.post("/api/generate", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}
    assert client.prompts == []


def test_invalid_json_body_is_400(make_api):
    api, _ = make_api()

    resp = api.post("/api/generate", content="not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_non_object_body_is_400(make_api):
    api, _ = make_api()

    resp = api.post("/api/generate", json=["Unit 1", "Reading", "Essay"])

    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body must be a JSON object"}


def test_upstream_status_and_message_are_propagated(make_api):
    api, _ = make_api(error=UpstreamError(429, "rate limit exceeded"))

    resp = api.post("/api/generate", json=REQUEST)

    assert resp.status_code == 429
    assert resp.json() == {"error": "Dify API error: rate limit exceeded"}


def test_unexpected_error_is_500_with_message(make_api):
    api, _ = make_api(error=RuntimeError("connection reset"))

    resp = api.post("/api/generate", json=REQUEST)

    assert resp.status_code == 500
    assert resp.json() == {"error": "connection reset"}


def test_health(make_api, unconfigured_settings):
    api, _ = make_api()
    assert api.get("/health").json() == {"status": "ok", "dify_configured": True}

    api, _ = make_api(app_settings=unconfigured_settings)
    assert api.get("/health").json() == {"status": "ok", "dify_configured": False}
