# tests/test_tokens.py
"""Tests for token estimation helpers."""

from unittest.mock import MagicMock, patch

from agent_cognition.llm import count_tokens, estimate_request_tokens
from agent_cognition.models import Message, MessageRole, ToolResult


def _fake_encoding():
    encoding = MagicMock()
    encoding.encode.side_effect = lambda text, **kwargs: text.split()
    return encoding


class TestTokens:
    """Tests for count_tokens and estimate_request_tokens."""

    def test_empty_text_is_zero(self):
        assert count_tokens("") == 0

    def test_uses_encoding(self):
        with patch("agent_cognition.llm.tokens._encoding", return_value=_fake_encoding()):
            assert count_tokens("one two three") == 3

    def test_falls_back_to_char_heuristic(self):
        broken = MagicMock()
        broken.encode.side_effect = ValueError("bad input")
        with patch("agent_cognition.llm.tokens._encoding", return_value=broken):
            assert count_tokens("abcdefgh") == 2

    def test_request_estimate_adds_message_overhead(self):
        messages = [
            Message(role=MessageRole.USER, content="hello world"),
            Message(role=MessageRole.TOOL, content=[ToolResult(tool_call_id="c", result="ok")]),
        ]
        with patch("agent_cognition.llm.tokens._encoding", return_value=_fake_encoding()):
            total = estimate_request_tokens("system prompt here", messages)

        # system + user + overhead + serialized tool result + overhead
        assert total == 3 + 2 + 4 + 4 + 4
