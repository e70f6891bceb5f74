"""Shared fixtures for API contract tests.

The current officer is injected through a dependency override, and the
language model and embedding client are replaced by mocks so no network
calls are made.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from replydesk.main import app
from replydesk.models import EMBEDDING_DIMENSIONS
from replydesk.routers.auth import get_current_user
from replydesk.routers.editor import get_chunk_finder
from replydesk.routers.faq import get_embedder
from replydesk.services.ai_service_factory import AIServiceFactory


@pytest.fixture
def chunk_finder():
    return MagicMock(return_value=[])


@pytest.fixture
def embedder():
    client = MagicMock()
    client.embed_texts.side_effect = lambda texts: [[0.1] * EMBEDDING_DIMENSIONS for _ in texts]
    client.embed_text.return_value = [0.1] * EMBEDDING_DIMENSIONS
    return client


@pytest.fixture
def llm(monkeypatch):
    """Replace text generation; set ``llm.return_value`` or ``side_effect`` per test."""
    mock = AsyncMock(return_value="")
    monkeypatch.setattr(AIServiceFactory, "generate_response", mock)
    return mock


@pytest.fixture
def client(db_session, officer, chunk_finder, embedder):
    app.dependency_overrides[get_current_user] = lambda: officer
    app.dependency_overrides[get_chunk_finder] = lambda: chunk_finder
    app.dependency_overrides[get_embedder] = lambda: embedder
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db_session):
    app.dependency_overrides.clear()
    return TestClient(app)
