"""Wrapper around the Anthropic Claude API for KPI commentary."""

import re

import anthropic

from finarrow.domain.errors import InsightsRateLimitedError, InsightsUnavailableError
from finarrow.logging_config import get_logger

logger = get_logger(__name__)

_EMPHASIS_RE = re.compile(r"(\*\*|__)(.+?)\1", re.DOTALL)
_HEADING_RE = re.compile(r"^#+\s*", re.MULTILINE)

FALLBACK_TEXT = "Unable to generate insights at this time."


class LLMClient:
    """Handles all LLM interactions.

    Responsibilities:
    - Send a system + user prompt and return plain prose
    - Track token usage
    - Translate SDK failures into insight errors the UI can show
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 1024,
        temperature: float = 0.7,
        max_retries: int = 2,
    ):
        self.configured = bool(api_key)
        self.client = anthropic.Anthropic(api_key=api_key, max_retries=max_retries) if api_key else None
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.total_input_tokens: int = 0
        self.total_output_tokens: int = 0

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the model's plain-text reply.

        Raises:
            InsightsUnavailableError: no API key, or the API call failed.
            InsightsRateLimitedError: the API rate-limited the request.
        """
        if self.client is None:
            raise InsightsUnavailableError("Insight generation is not configured (missing API key).")

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.RateLimitError as exc:
            logger.warning("llm_rate_limited", model=self.model)
            raise InsightsRateLimitedError(cause=exc) from exc
        except anthropic.APIError as exc:
            logger.error("llm_request_failed", model=self.model, error=str(exc))
            raise InsightsUnavailableError("Failed to generate insights", cause=exc) from exc

        self.total_input_tokens += message.usage.input_tokens
        self.total_output_tokens += message.usage.output_tokens

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return self.to_plain_text(text) or FALLBACK_TEXT

    @staticmethod
    def to_plain_text(text: str) -> str:
        """Strip markdown emphasis and headings the model may add anyway.

        >>> LLMClient.to_plain_text("**Growth** is __strong__.")
        'Growth is strong.'
        """
        text = _EMPHASIS_RE.sub(r"\2", text)
        text = _HEADING_RE.sub("", text)
        return text.strip()
