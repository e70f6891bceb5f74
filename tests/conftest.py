"""
Pytest configuration and fixtures for ReplyDesk tests.

Tests run against an in-memory SQLite database. Anything needing pgvector is
exercised against TEST_DATABASE_URL and skipped when it is not reachable.
"""

import os

# Must be set before replydesk.config is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ["OPENAI_API_KEY"] = ""
os.environ["DEV_MODE"] = "false"
os.environ["LOG_FORMAT"] = "simple"
os.environ["JWT_SECRET"] = "test-secret"

import pytest

from replydesk.database import SessionLocal, engine
from replydesk.models import Base, User
from replydesk.services.ai_service_factory import AIServiceFactory


@pytest.fixture
def db_session():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def officer(db_session):
    user = User(email="officer@example.gov.sg")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def other_officer(db_session):
    user = User(email="colleague@example.gov.sg")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(autouse=True)
def reset_ai_services():
    AIServiceFactory.reset()
    yield
    AIServiceFactory.reset()
