# =============================================================================
# cleaning_actions/summary.py - Summary Generators
# =============================================================================
# Turns the per-action narratives of a batch into one summary for the user.
#
# The engine only depends on the SummaryGenerator protocol. The deterministic
# TemplateSummaryGenerator below is the default; a language-model backed
# implementation lives in agents/summarizer.py.
# =============================================================================

from __future__ import annotations

from typing import Protocol


NO_CHANGES_SUMMARY = "No changes were made to the dataset."


class SummaryGenerator(Protocol):
    """Anything that can summarize a list of action responses."""

    def summarize(self, responses: list[str]) -> str:
        ...


def _as_sentence(text: str) -> str:
    text = " ".join(text.split())
    if not text:
        return ""
    text = text[0].upper() + text[1:]
    if text[-1] not in ".!?":
        text += "."
    return text


class TemplateSummaryGenerator:
    """
    Deterministic summary built from the responses themselves.

    Example:
        TemplateSummaryGenerator().summarize(["filled missing ages with 0"])
        # "1 change was applied to the dataset. Filled missing ages with 0."
    """

    def summarize(self, responses: list[str]) -> str:
        if not responses:
            return NO_CHANGES_SUMMARY

        count = len(responses)
        if count == 1:
            opening = "1 change was applied to the dataset."
        else:
            opening = f"{count} changes were applied to the dataset."

        sentences = [s for s in (_as_sentence(r or "") for r in responses) if s]
        return " ".join([opening, *sentences])
