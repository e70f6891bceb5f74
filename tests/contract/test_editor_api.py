"""Contract tests for draft editing and AI draft generation."""

import pytest

from replydesk.models import Record
from tests.helpers import days_ago, make_record

LLM_REPLY = (
    "Reasoning: The FAQ entry on park connectors answers the question.\n\n"
    "Draft: Dear resident,\n\nThe connector extension is planned for 2027."
)

PARK_CHUNK = {
    "heading": "Park connector network",
    "content": "New connectors are built in phases across estates.",
    "similarity": 0.82,
}


def _doc(*paragraphs):
    return {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": text}]} for text in paragraphs
        ],
    }


@pytest.fixture
def inbox(db_session, officer):
    """A target email, a replied near-duplicate, an exact duplicate and an unrelated email."""
    target = make_record(
        db_session,
        officer.id,
        "When will the park connector be extended to my estate in Punggol?",
        creation_date=days_ago(0),
    )
    similar = make_record(
        db_session,
        officer.id,
        "When will the park connector near Punggol be completed?",
        reply="The Punggol connector will be completed in 2026.",
        outcome="Replied",
        creation_date=days_ago(1),
    )
    duplicate = make_record(
        db_session,
        officer.id,
        "When will the park connector be extended to my estate in Punggol?",
        reply="Duplicate reply",
        creation_date=days_ago(2),
    )
    unrelated = make_record(
        db_session, officer.id, "Construction noise at night", creation_date=days_ago(3)
    )
    return {"target": target, "similar": similar, "duplicate": duplicate, "unrelated": unrelated}


class TestGetEditorRecord:
    def test_returns_record(self, client, inbox):
        target = inbox["target"]

        response = client.get(f"/api/editor?recordId={target.id}")

        assert response.status_code == 200
        assert response.json()["id"] == str(target.id)

    def test_requires_record_id(self, client):
        assert client.get("/api/editor").status_code == 400


class TestSaveDraft:
    def test_saves_draft_with_content(self, client, db_session, inbox):
        target = inbox["target"]
        draft = _doc("Dear resident,", "Thanks for writing in.")

        response = client.post("/api/editor", json={"recordId": str(target.id), "draft": draft})

        assert response.status_code == 200
        body = response.json()
        assert body["hasDraft"] is True
        assert body["editorState"] == draft
        db_session.expire_all()
        assert db_session.get(Record, target.id).draft == draft

    def test_empty_draft_removes_it_and_reopens(self, client, db_session, officer):
        record = make_record(db_session, officer.id, draft=_doc("old"), outcome="Draft")

        response = client.post(
            "/api/editor",
            json={"recordId": str(record.id), "draft": {"type": "doc", "content": [{"type": "paragraph"}]}},
        )

        assert response.json()["hasDraft"] is False
        db_session.expire_all()
        stored = db_session.get(Record, record.id)
        assert stored.draft is None
        assert stored.outcome == "Open"


class TestGenerateDraft:
    def test_generates_and_stores_draft(self, client, db_session, inbox, llm, chunk_finder):
        target, similar = inbox["target"], inbox["similar"]
        chunk_finder.return_value = [PARK_CHUNK]
        llm.return_value = LLM_REPLY

        response = client.post("/api/editor", json={"recordId": str(target.id), "generateDraft": True})

        assert response.status_code == 200
        body = response.json()
        assert body["hasDraft"] is True
        assert body["reasoning"] == "The FAQ entry on park connectors answers the question."
        assert body["generatedDraft"] == "Dear resident,\n\nThe connector extension is planned for 2027."
        assert body["editorState"] == _doc("Dear resident,", "The connector extension is planned for 2027.")
        assert body["emailData"]["outcome"] == "Draft"

        chunk_finder.assert_called_once_with(target.message)
        prompt = llm.await_args.args[0]
        assert "The Punggol connector will be completed in 2026." in prompt
        assert "Park connector network" in prompt
        assert "Duplicate reply" not in prompt

        db_session.expire_all()
        stored = db_session.get(Record, target.id)
        assert stored.outcome == "Draft"
        assert stored.relevant_chunks == [PARK_CHUNK]
        assert stored.related_emails[0] == str(similar.id)
        assert str(inbox["duplicate"].id) not in stored.related_emails
        assert str(inbox["unrelated"].id) in stored.related_emails

    def test_reuses_stored_chunks(self, client, db_session, officer, llm, chunk_finder):
        record = make_record(db_session, officer.id, relevant_chunks=[PARK_CHUNK])
        llm.return_value = LLM_REPLY

        response = client.post("/api/editor", json={"recordId": str(record.id), "generateDraft": True})

        assert response.status_code == 200
        chunk_finder.assert_not_called()

    def test_search_failure_still_drafts(self, client, db_session, inbox, llm, chunk_finder):
        target = inbox["target"]
        chunk_finder.side_effect = RuntimeError("vector store down")
        llm.return_value = LLM_REPLY

        response = client.post("/api/editor", json={"recordId": str(target.id), "generateDraft": True})

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(Record, target.id).relevant_chunks == []

    def test_llm_failure_is_500(self, client, db_session, inbox, llm):
        target = inbox["target"]
        llm.side_effect = RuntimeError("quota exceeded")

        response = client.post("/api/editor", json={"recordId": str(target.id), "generateDraft": True})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate/save draft"}
        db_session.expire_all()
        assert db_session.get(Record, target.id).outcome == "Open"

    def test_replied_record_stays_replied(self, client, db_session, officer, llm):
        record = make_record(db_session, officer.id, reply="Already answered", outcome="Replied")
        llm.return_value = LLM_REPLY

        response = client.post("/api/editor", json={"recordId": str(record.id), "generateDraft": True})

        assert response.json()["emailData"]["outcome"] == "Replied"


class TestDeleteDraft:
    def test_owner_can_delete(self, client, db_session, officer):
        record = make_record(db_session, officer.id, draft=_doc("text"), outcome="Draft")

        response = client.delete(f"/api/editor?recordId={record.id}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        db_session.expire_all()
        stored = db_session.get(Record, record.id)
        assert stored.draft is None
        assert stored.outcome == "Open"

    def test_other_officer_is_unauthorized(self, client, db_session, other_officer):
        record = make_record(db_session, other_officer.id, draft=_doc("text"), outcome="Draft")

        response = client.delete(f"/api/editor?recordId={record.id}")

        assert response.status_code == 401
        db_session.expire_all()
        assert db_session.get(Record, record.id).draft is not None
