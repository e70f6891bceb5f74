"""Tests for the inline writing assistant prompts."""

import pytest

from replydesk.exceptions import ValidationError
from replydesk.services import writing_assistant
from replydesk.services.ai_service_factory import AIServiceFactory


def test_strip_html():
    assert writing_assistant.strip_html("<p>Hello <em>there</em></p>") == "Hello there"


@pytest.mark.parametrize(
    "option,prefix,instruction",
    [
        ("continue", "Please only change", "continuing existing text"),
        ("improve", "The existing text is: ", "improving the existing text"),
        ("shorter", "The text is: ", "shortening the following text"),
        ("longer", "The existing text is: ", "lengthening existing text"),
        ("fix", "The existing text is: ", "fixing grammar and spelling"),
    ],
)
def test_build_prompt_per_option(option, prefix, instruction):
    system, message = writing_assistant.build_prompt(option, "<p>We will review</p>")

    assert message.startswith(prefix)
    assert message.endswith("We will review")
    assert instruction in system
    assert "Use simple language." in system


def test_zap_includes_command():
    _, message = writing_assistant.build_prompt("zap", "Draft text", "Add a greeting")

    assert message.startswith("For this text: ")
    assert message.endswith("You have to respect the command: Add a greeting")


@pytest.mark.parametrize("option,command", [("zap", None), ("zap", "   "), ("summarise", "x")])
def test_invalid_requests(option, command):
    with pytest.raises(ValidationError):
        writing_assistant.build_prompt(option, "text", command)


@pytest.mark.asyncio
async def test_stream_assist_forwards_chunks(monkeypatch):
    seen = {}

    async def fake_stream(prompt, system_prompt=None, **kwargs):
        seen["system_prompt"] = system_prompt
        yield "Short"
        yield "er."

    monkeypatch.setattr(AIServiceFactory, "generate_streaming_response", fake_stream)

    chunks = [chunk async for chunk in writing_assistant.stream_assist("shorter", "Longer text")]

    assert chunks == ["Short", "er."]
    assert "shortening" in seen["system_prompt"]
