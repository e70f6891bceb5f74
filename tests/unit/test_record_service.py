"""Tests for record queries and outcome transitions."""

import uuid

import pytest

from replydesk.exceptions import RecordNotFoundError, ValidationError
from replydesk.lib.editor_content import text_to_document
from replydesk.services import record_service
from tests.helpers import days_ago, make_record


class TestParseRecordId:
    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value):
        with pytest.raises(ValidationError, match="Record ID is required"):
            record_service.parse_record_id(value)

    def test_malformed(self):
        with pytest.raises(ValidationError, match="Invalid record ID"):
            record_service.parse_record_id("abc")

    def test_accepts_string_and_uuid(self):
        value = uuid.uuid4()
        assert record_service.parse_record_id(str(value)) == value
        assert record_service.parse_record_id(value) == value


def test_get_record_not_found(db_session):
    with pytest.raises(RecordNotFoundError):
        record_service.get_record(db_session, uuid.uuid4())


class TestEnsureRecords:
    def test_seeds_empty_inbox_once(self, db_session, officer):
        first = record_service.ensure_records(db_session, officer.id, 7)
        second = record_service.ensure_records(db_session, officer.id, 7)

        assert len(first) == 7
        assert [r.id for r in second] == [r.id for r in first]

    def test_existing_records_are_not_reseeded(self, db_session, officer):
        make_record(db_session, officer.id)

        assert len(record_service.ensure_records(db_session, officer.id, 7)) == 1


class TestOutcomes:
    def test_effective_outcome(self, db_session, officer):
        assert record_service.effective_outcome(make_record(db_session, officer.id, outcome="Vetted")) == "Vetted"
        assert (
            record_service.effective_outcome(make_record(db_session, officer.id, outcome="Draft", reply="Sent"))
            == "Replied"
        )

    def test_update_outcome_rejects_unknown(self, db_session, officer):
        record = make_record(db_session, officer.id)

        with pytest.raises(ValidationError, match="Open, Draft, Vetted, Replied"):
            record_service.update_outcome(db_session, record.id, "Archived")

    def test_update_outcome_forced_to_replied(self, db_session, officer):
        record = make_record(db_session, officer.id, reply="Sent")

        assert record_service.update_outcome(db_session, record.id, "Open").outcome == "Replied"

    def test_delete_draft_reopens(self, db_session, officer):
        record = make_record(db_session, officer.id, draft=text_to_document("x"), outcome="Draft")

        updated = record_service.delete_draft(db_session, record.id)

        assert updated.draft is None
        assert updated.outcome == "Open"

    def test_delete_draft_keeps_replied(self, db_session, officer):
        record = make_record(db_session, officer.id, draft=text_to_document("x"), reply="Sent", outcome="Replied")

        assert record_service.delete_draft(db_session, record.id).outcome == "Replied"

    def test_save_draft_and_reasoning_marks_draft(self, db_session, officer):
        record = make_record(db_session, officer.id)

        updated = record_service.save_draft_and_reasoning(
            db_session, record.id, text_to_document("Hello"), "Because"
        )

        assert updated.outcome == "Draft"
        assert updated.reasoning == "Because"

    def test_invalid_outcome_rejected_by_model(self, db_session, officer):
        record = make_record(db_session, officer.id)

        with pytest.raises(ValueError):
            record.outcome = "Closed"


def test_records_since(db_session, officer):
    make_record(db_session, officer.id, "recent", creation_date=days_ago(0))
    make_record(db_session, officer.id, "old", creation_date=days_ago(3))

    assert [r.message for r in record_service.records_since(db_session, days_ago(1))] == ["recent"]


def test_records_without_summary(db_session, officer, other_officer):
    make_record(db_session, officer.id, "none")
    make_record(db_session, officer.id, "blank", summary="")
    make_record(db_session, officer.id, "done", summary="Yes")
    make_record(db_session, other_officer.id, "theirs")

    assert {r.message for r in record_service.records_without_summary(db_session)} == {"none", "blank", "theirs"}
    assert {r.message for r in record_service.records_without_summary(db_session, officer.id)} == {"none", "blank"}


def test_related_email_details_keeps_order_and_skips_missing(db_session, officer):
    a = make_record(db_session, officer.id, "a")
    b = make_record(db_session, officer.id, "b")

    found = record_service.related_email_details(db_session, [str(b.id), "garbage", str(uuid.uuid4()), str(a.id)])

    assert [r.message for r in found] == ["b", "a"]
