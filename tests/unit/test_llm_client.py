"""Tests for LLMClient: the Anthropic SDK is mocked throughout."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from finarrow.clients.llm_client import FALLBACK_TEXT, LLMClient
from finarrow.domain.errors import InsightsRateLimitedError, InsightsUnavailableError

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _message(*texts: str) -> SimpleNamespace:
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts],
        usage=SimpleNamespace(input_tokens=120, output_tokens=40),
    )


@pytest.fixture()
def sdk():
    with patch("finarrow.clients.llm_client.anthropic.Anthropic") as cls:
        yield cls.return_value


class TestComplete:
    def test_returns_plain_text(self, sdk):
        sdk.messages.create.return_value = _message("## Summary\n", "**Growth** is strong.")
        client = LLMClient(api_key="sk-test", model="claude-test")
        assert client.complete("system", "user") == "Summary\nGrowth is strong."

    def test_passes_prompts_and_settings(self, sdk):
        sdk.messages.create.return_value = _message("ok")
        LLMClient(api_key="sk-test", model="claude-test", max_tokens=256, temperature=0.2).complete("sys", "usr")
        sdk.messages.create.assert_called_once_with(
            model="claude-test",
            max_tokens=256,
            temperature=0.2,
            system="sys",
            messages=[{"role": "user", "content": "usr"}],
        )

    def test_tracks_tokens(self, sdk):
        sdk.messages.create.return_value = _message("ok")
        client = LLMClient(api_key="sk-test")
        client.complete("s", "u")
        client.complete("s", "u")
        assert client.total_input_tokens == 240
        assert client.total_output_tokens == 80

    def test_empty_reply_falls_back(self, sdk):
        sdk.messages.create.return_value = _message("   ")
        assert LLMClient(api_key="sk-test").complete("s", "u") == FALLBACK_TEXT

    def test_ignores_non_text_blocks(self, sdk):
        message = _message("hello")
        message.content.insert(0, SimpleNamespace(type="tool_use", id="x"))
        sdk.messages.create.return_value = message
        assert LLMClient(api_key="sk-test").complete("s", "u") == "hello"


class TestErrors:
    def test_missing_key(self):
        client = LLMClient(api_key="")
        assert not client.configured
        with pytest.raises(InsightsUnavailableError):
            client.complete("s", "u")

    def test_rate_limited(self, sdk):
        response = httpx.Response(429, request=REQUEST)
        sdk.messages.create.side_effect = anthropic.RateLimitError("slow down", response=response, body=None)
        with pytest.raises(InsightsRateLimitedError) as exc_info:
            LLMClient(api_key="sk-test").complete("s", "u")
        assert exc_info.value.message == "Rate limit exceeded. Please try again later."
        assert isinstance(exc_info.value.cause, anthropic.RateLimitError)

    def test_other_api_error(self, sdk):
        sdk.messages.create.side_effect = anthropic.APIConnectionError(request=REQUEST)
        with pytest.raises(InsightsUnavailableError) as exc_info:
            LLMClient(api_key="sk-test").complete("s", "u")
        assert exc_info.value.message == "Failed to generate insights"


class TestToPlainText:
    def test_strips_emphasis_and_headings(self):
        assert LLMClient.to_plain_text("# Title\n__Bold__ and **more**") == "Title\nBold and more"

    def test_leaves_plain_text(self):
        assert LLMClient.to_plain_text("  MRR is up 10%.  ") == "MRR is up 10%."
