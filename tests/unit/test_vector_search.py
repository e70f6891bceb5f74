"""pgvector search tests. Needs TEST_DATABASE_URL pointing at PostgreSQL with pgvector."""

from __future__ import annotations

import os

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from replydesk.lib.vector_search import SearchResult, VectorSearch
from replydesk.models import EMBEDDING_DIMENSIONS, Base, FAQChunk


def _unit(index: int) -> list:
    vector = [0.0] * EMBEDDING_DIMENSIONS
    vector[index] = 1.0
    return vector


def test_format_vector():
    assert VectorSearch._format_vector([1, 0.5]) == "[1.00000000,0.50000000]"


def test_empty_embedding_rejected():
    with pytest.raises(ValueError):
        VectorSearch._format_vector([])


def test_non_positive_top_k_skips_query():
    assert VectorSearch(engine=None).query(embedding=[1.0], top_k=0) == []


def test_search_result_to_dict():
    assert SearchResult("h", "c", 0.5).to_dict() == {"heading": "h", "content": "c", "similarity": 0.5}


@pytest.fixture(scope="module")
def pg_engine() -> Engine:
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not set")
    try:
        engine = create_engine(url)
        with engine.begin() as connection:
            connection.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    except OperationalError as exc:  # pragma: no cover - infrastructure failure
        pytest.skip(f"Test database not available: {exc}")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded(pg_engine: Engine):
    with pg_engine.begin() as conn:
        conn.execute(text("TRUNCATE TABLE faq_chunks"))
    session = sessionmaker(bind=pg_engine)()
    session.add_all(
        [
            FAQChunk(faq_id="A", heading="Exact", content="a", embedding=_unit(0)),
            FAQChunk(faq_id="B", heading="Close", content="b", embedding=[0.9, 0.1] + [0.0] * (EMBEDDING_DIMENSIONS - 2)),
            FAQChunk(faq_id="C", heading="Orthogonal", content="c", embedding=_unit(1)),
            FAQChunk(faq_id="D", heading="No vector", content="d"),
        ]
    )
    session.commit()
    session.close()
    return pg_engine


@pytest.mark.postgres
def test_query_orders_by_similarity_and_applies_threshold(seeded):
    results = VectorSearch(seeded).query(embedding=_unit(0), threshold=0.7, top_k=5)

    assert [r.heading for r in results] == ["Exact", "Close"]
    assert results[0].similarity == pytest.approx(1.0)


@pytest.mark.postgres
def test_query_respects_top_k(seeded):
    results = VectorSearch(seeded).query(embedding=_unit(0), threshold=-1.0, top_k=1)

    assert [r.heading for r in results] == ["Exact"]
