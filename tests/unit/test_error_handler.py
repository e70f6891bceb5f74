"""Tests for the global error handling and API key middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from replydesk.config import get_settings
from replydesk.exceptions import GenerationError, RecordNotFoundError, ValidationError
from replydesk.middleware.error_handler import APIKeyValidationMiddleware, ErrorHandlingMiddleware


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)

    @app.get("/api/missing")
    def missing():
        raise RecordNotFoundError("1234")

    @app.get("/api/invalid")
    def invalid():
        raise ValidationError("Record ID is required")

    @app.get("/api/value")
    def value():
        raise ValueError("bad number")

    @app.get("/api/down")
    def down():
        raise ConnectionError("database unreachable")

    @app.get("/api/generation")
    def generation():
        raise GenerationError("model returned nothing")

    @app.get("/api/boom")
    def boom():
        raise RuntimeError("secret internals")

    return TestClient(app)


def test_not_found(client):
    response = client.get("/api/missing")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Record not found: 1234",
        "status_code": 404,
        "type": "not_found",
        "code": "RECORD_404",
    }


@pytest.mark.parametrize("path,message", [("/api/invalid", "Record ID is required"), ("/api/value", "bad number")])
def test_validation_errors(client, path, message):
    response = client.get(path)

    assert response.status_code == 400
    assert response.json()["error"] == message
    assert response.json()["type"] == "validation_error"


def test_connection_error(client):
    response = client.get("/api/down")

    assert response.status_code == 503
    assert response.json()["detail"] == "database unreachable"


def test_application_error(client):
    response = client.get("/api/generation")

    assert response.status_code == 500
    assert response.json()["code"] == "LLM_001"


def test_unexpected_error_is_hidden(client):
    response = client.get("/api/boom")

    assert response.status_code == 500
    assert response.json()["error"] == "An unexpected error occurred"


class TestAPIKeyValidation:
    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(APIKeyValidationMiddleware)

        @app.post("/api/summary")
        def summary():
            return {"ok": True}

        @app.post("/api/status")
        def status():
            return {"ok": True}

        return TestClient(app)

    def test_blocks_ai_routes_without_keys(self, client, monkeypatch):
        settings = get_settings()
        monkeypatch.setattr(settings, "gemini_api_key", "")
        monkeypatch.setattr(settings, "openai_api_key", "")

        assert client.post("/api/summary").status_code == 503
        assert client.post("/api/status").status_code == 200

    def test_allows_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "gemini_api_key", "key")

        assert client.post("/api/summary").status_code == 200
