# =============================================================================
# agents/summarizer.py - OpenAI Summary Generator
# =============================================================================
# SummaryGenerator implementation that asks OpenAI to merge the responses of
# all applied actions into one overall description.
#
# Any API or parsing failure falls back to the deterministic template
# generator, so a summary is always produced.
# =============================================================================

import json
import logging

from agents.prompts.summary_system import SUMMARY_SYSTEM_PROMPT, build_summary_user_message
from cleaning_actions.summary import SummaryGenerator, TemplateSummaryGenerator

logger = logging.getLogger(__name__)

SUMMARY_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "structured_data_summary",
        "schema": {
            "type": "object",
            "properties": {"summary": {"type": "string"}},
            "required": ["summary"],
            "additionalProperties": False,
        },
    },
}

# Lazy-loaded OpenAI client
_client = None


def get_openai_client():
    """Get or create OpenAI client (lazy initialization)."""
    global _client
    if _client is None:
        from openai import OpenAI
        from app.config import settings
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


class OpenAISummaryGenerator:
    """
    Summarizes applied actions with OpenAI.

    Example:
        engine = ActionEngine(summary_generator=OpenAISummaryGenerator())
    """

    def __init__(
        self,
        client=None,
        model: str | None = None,
        temperature: float | None = None,
        max_completion_tokens: int | None = None,
        fallback: SummaryGenerator | None = None,
    ):
        from app.config import settings

        self._client = client
        self.model = model or settings.OPENAI_MODEL
        self.temperature = temperature if temperature is not None else settings.SUMMARY_TEMPERATURE
        self.max_completion_tokens = max_completion_tokens or settings.MAX_COMPLETION_TOKENS
        self.fallback = fallback or TemplateSummaryGenerator()

    @property
    def client(self):
        return self._client or get_openai_client()

    def summarize(self, responses: list[str]) -> str:
        if not responses:
            return self.fallback.summarize(responses)

        messages = [
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {"role": "user", "content": build_summary_user_message(responses)},
        ]

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_completion_tokens=self.max_completion_tokens,
                response_format=SUMMARY_RESPONSE_FORMAT,
                messages=messages,
            )
            summary = json.loads(response.choices[0].message.content or "")["summary"]
            if not isinstance(summary, str) or not summary.strip():
                raise ValueError("empty summary")
            return summary.strip()
        except Exception as e:
            logger.error(f"OpenAI summary failed, using template summary: {e}")
            return self.fallback.summarize(responses)
