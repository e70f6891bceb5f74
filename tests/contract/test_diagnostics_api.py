"""Contract tests for knowledge base diagnostics."""

import pytest

from replydesk.main import app
from replydesk.models import EMBEDDING_DIMENSIONS, FAQChunk
from replydesk.routers.faq import get_embedder


@pytest.fixture
def chunks(db_session):
    db_session.add_all(
        [
            FAQChunk(
                faq_id="FAQ-1",
                category="Transport",
                section="Cycling",
                heading="Park connectors",
                content="Connectors link parks across estates.",
                embedding=[0.1] * EMBEDDING_DIMENSIONS,
            ),
            FAQChunk(
                faq_id="FAQ-2",
                category="Housing",
                section="BTO",
                heading="Launch dates",
                content="Launches happen four times a year.",
            ),
        ]
    )
    db_session.commit()


class TestCheckFaqChunks:
    def test_empty_table(self, client):
        response = client.get("/api/diagnostics/check-faq-chunks")

        assert response.json() == {"status": "empty", "message": "No FAQ chunks found in the database"}

    def test_reports_counts(self, client, chunks):
        body = client.get("/api/diagnostics/check-faq-chunks").json()

        assert body["status"] == "success"
        assert body["totalRecords"] == 2
        assert body["categories"] == ["Housing", "Transport"]
        assert body["embeddingStats"] == {"withEmbeddings": 1, "withoutEmbeddings": 1}
        assert [s["hasEmbedding"] for s in body["sampleData"]] == [True, False]


def test_check_vector_without_postgres(client):
    body = client.get("/api/diagnostics/check-vector").json()

    assert body["pgVersion"] is None
    assert body["vectorExtension"]["installed"] is False
    assert "PostgreSQL" in body["recommendation"]


class TestEmbeddingSelfTest:
    def test_requires_faq_id(self, client):
        assert client.get("/api/diagnostics/test-embeddings").status_code == 400

    def test_unknown_chunk_is_404(self, client, chunks):
        assert client.get("/api/diagnostics/test-embeddings?faqId=NOPE").status_code == 404

    def test_without_embedder_is_503(self, client, chunks):
        app.dependency_overrides[get_embedder] = lambda: None

        assert client.get("/api/diagnostics/test-embeddings?faqId=FAQ-1").status_code == 503

    def test_compares_stored_and_generated(self, client, chunks, embedder):
        body = client.get("/api/diagnostics/test-embeddings?faqId=FAQ-1").json()

        embedder.embed_text.assert_called_once_with("Park connectors: Connectors link parks across estates.")
        assert body["storedDimensions"] == EMBEDDING_DIMENSIONS
        assert body["generatedDimensions"] == EMBEDDING_DIMENSIONS
        assert body["cosineSimilarity"] == pytest.approx(1.0)
        assert body["selfMatchRank"] is None

    def test_chunk_without_embedding(self, client, chunks):
        body = client.get("/api/diagnostics/test-embeddings?faqId=FAQ-2").json()

        assert body["storedDimensions"] == 0
        assert body["cosineSimilarity"] is None
