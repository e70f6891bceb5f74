"""Contract tests for FAQ upload and search."""

from replydesk.exceptions import EmbeddingError
from replydesk.models import EMBEDDING_DIMENSIONS, FAQChunk
from replydesk.routers.faq import get_embedder
from replydesk.main import app
from replydesk.services import faq_service

FAQ_CSV = (
    "id,category,section,heading,content\n"
    "FAQ-1,Master Plan,Zoning,What is a white site?,A white site allows flexible uses.\n"
    'FAQ-2,Transport,Cycling,Park connectors,"Connectors link parks\nacross estates."\n'
    ",,,,\n"
)


def _upload(client, content=FAQ_CSV):
    return client.post("/api/csv-chunks", files={"file": ("faq.csv", content.encode(), "text/csv")})


class TestUpload:
    def test_imports_rows_with_embeddings(self, client, db_session, embedder):
        response = _upload(client)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["totalRows"] == 2
        embedder.embed_texts.assert_called_once_with(
            [
                "What is a white site?: A white site allows flexible uses.",
                "Park connectors: Connectors link parks across estates.",
            ]
        )
        chunks = db_session.query(FAQChunk).order_by(FAQChunk.faq_id).all()
        assert [c.faq_id for c in chunks] == ["FAQ-1", "FAQ-2"]
        assert all(len(c.embedding) == EMBEDDING_DIMENSIONS for c in chunks)

    def test_failed_items_are_stored_without_embedding(self, client, db_session, embedder):
        embedder.embed_texts.side_effect = EmbeddingError("rate limited")
        embedder.embed_text.side_effect = [[0.2] * EMBEDDING_DIMENSIONS, EmbeddingError("bad input")]

        response = _upload(client)

        assert response.status_code == 200
        chunks = {c.faq_id: c for c in db_session.query(FAQChunk).all()}
        assert chunks["FAQ-1"].embedding is not None
        assert chunks["FAQ-2"].embedding is None

    def test_without_embedder_rows_are_still_stored(self, client, db_session):
        app.dependency_overrides[get_embedder] = lambda: None

        response = _upload(client)

        assert response.status_code == 200
        assert db_session.query(FAQChunk).count() == 2

    def test_missing_columns_fail(self, client, db_session):
        response = _upload(client, "id,heading\n1,Only heading\n")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process CSV file"
        assert "content" in response.json()["details"]
        assert db_session.query(FAQChunk).count() == 0

    def test_missing_file_is_400(self, client):
        assert client.post("/api/csv-chunks").status_code == 400


class TestSearch:
    def test_text_search_ranks_heading_matches_first(self, client, db_session):
        db_session.add_all(
            [
                FAQChunk(faq_id="B", category="Parks", section="", heading="Opening hours", content="Park connectors open 24h"),
                FAQChunk(faq_id="A", category="Parks", section="", heading="Park connectors", content="Routes"),
                FAQChunk(faq_id="C", category="Housing", section="", heading="BTO", content="Launch dates"),
            ]
        )
        db_session.commit()

        response = client.get("/api/faq/search", params={"q": "park connector", "mode": "text"})

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "text"
        assert [r["faqId"] for r in body["results"]] == ["A", "B"]

    def test_vector_search(self, client, monkeypatch):
        found = [{"heading": "Park connectors", "content": "Routes", "similarity": 0.91}]
        monkeypatch.setattr(faq_service, "find_relevant_chunks", lambda *args, **kwargs: found)

        body = client.get("/api/faq/search", params={"q": "park"}).json()

        assert body == {"mode": "vector", "results": found}

    def test_vector_failure_falls_back_to_text(self, client, db_session, monkeypatch):
        db_session.add(FAQChunk(faq_id="A", category="", section="", heading="Park connectors", content=""))
        db_session.commit()

        def broken(*args, **kwargs):
            raise RuntimeError("operator does not exist: vector <=> vector")

        monkeypatch.setattr(faq_service, "find_relevant_chunks", broken)

        body = client.get("/api/faq/search", params={"q": "park"}).json()

        assert body["mode"] == "text"
        assert body["results"][0]["faqId"] == "A"
