"""Tests for extracting JSON from model replies."""

import json

import pytest

from replydesk.lib.llm_json import first_json_object, parse_json_reply, strip_code_fences


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'

    def test_bare_fence(self):
        assert strip_code_fences("```\n{}\n```") == "{}"

    def test_no_fence(self):
        assert strip_code_fences("  [1] ") == "[1]"


class TestParseJsonReply:
    def test_parses_fenced_array(self):
        assert parse_json_reply('```json\n[{"title": "A"}]\n```') == [{"title": "A"}]

    def test_invalid_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_json_reply("Here are your headlines: none")


class TestFirstJsonObject:
    def test_object_inside_prose(self):
        reply = 'Sure! {"summary": "Asks about MRT", "evergreen_topics": []} Hope that helps.'

        assert first_json_object(reply) == {"summary": "Asks about MRT", "evergreen_topics": []}

    def test_skips_unparseable_blocks(self):
        reply = '{not json} then {"summary": "ok"}'

        assert first_json_object(reply) == {"summary": "ok"}

    def test_nested_object_uses_greedy_span(self):
        reply = '{"summary": "x", "meta": {"source": "email"}}'

        assert first_json_object(reply) == {"summary": "x", "meta": {"source": "email"}}

    def test_nothing_found(self):
        assert first_json_object("no braces here") is None
        assert first_json_object("") is None
