import pytest

from clawapi.api.services.chat_completions import (
    build_completion_envelope,
    flatten_messages,
    provider_from_model,
)
from clawapi.models.chat import ChatCompletionRequest, ChatMessage


def _messages(*pairs) -> list[ChatMessage]:
    return [ChatMessage(role=role, content=content) for role, content in pairs]


@pytest.mark.unit
class TestFlattenMessages:
    def test_role_prefixes_and_separator(self):
        prompt = flatten_messages(
            _messages(("system", "X"), ("user", "Y"), ("assistant", "Z"))
        )
        assert prompt == "[Instructions]: X\n\nY\n\n[Previous reply]: Z"

    def test_unknown_roles_dropped(self):
        prompt = flatten_messages(_messages(("tool", "ignored"), ("user", "kept")))
        assert prompt == "kept"

    def test_missing_role_and_content(self):
        assert flatten_messages([ChatMessage(role=None, content=None)]) == ""
        assert flatten_messages([ChatMessage(content="implicit user")]) == "implicit user"

    def test_content_parts(self):
        message = ChatMessage(
            role="user",
            content=[
                {"type": "text", "text": "first"},
                {"type": "image_url", "image_url": {"url": "data:..."}},
                {"type": "text", "text": "second"},
            ],
        )
        assert flatten_messages([message]) == "first\nsecond"

    def test_empty_conversation(self):
        assert flatten_messages([]) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "model, provider",
    [
        ("claude", "claude"),
        ("clawapi/claude", "claude"),
        ("anything/else/claude", "claude"),
        ("claude/", ""),
    ],
)
def test_provider_from_model(model, provider):
    assert provider_from_model(model) == provider


@pytest.mark.unit
def test_completion_envelope_counts_characters():
    envelope = build_completion_envelope("clawapi/claude", "abcd", "xyz")

    assert envelope["id"].startswith("chatcmpl-")
    assert len(envelope["id"]) == len("chatcmpl-") + 24
    assert envelope["object"] == "chat.completion"
    assert envelope["model"] == "clawapi/claude"
    assert envelope["choices"] == [
        {"index": 0, "message": {"role": "assistant", "content": "xyz"}, "finish_reason": "stop"}
    ]
    assert envelope["usage"] == {"prompt_tokens": 4, "completion_tokens": 3, "total_tokens": 7}


@pytest.mark.unit
def test_request_model_accepts_extra_fields():
    request = ChatCompletionRequest.model_validate(
        {"model": "claude", "messages": [{"role": "user", "content": "hi"}], "stream": False}
    )
    assert request.model == "claude"
    assert request.messages[0].text() == "hi"
