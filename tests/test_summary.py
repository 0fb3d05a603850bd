# =============================================================================
# tests/test_summary.py - Summary Generator Tests
# =============================================================================
# Tests for the template summary generator and the OpenAI-backed one
# (mocked client).
# =============================================================================

from agents.summarizer import OpenAISummaryGenerator
from cleaning_actions.summary import NO_CHANGES_SUMMARY, TemplateSummaryGenerator
from tests.conftest import make_completion


class TestTemplateSummary:
    """Tests for TemplateSummaryGenerator."""

    def test_no_changes(self):
        assert TemplateSummaryGenerator().summarize([]) == NO_CHANGES_SUMMARY

    def test_single_change(self):
        summary = TemplateSummaryGenerator().summarize(["filled missing ages with 0"])
        assert summary == "1 change was applied to the dataset. Filled missing ages with 0."

    def test_multiple_changes_normalized(self):
        summary = TemplateSummaryGenerator().summarize(["  removed   the email column", "Sorted by age!", ""])
        assert summary == (
            "3 changes were applied to the dataset. "
            "Removed the email column. Sorted by age!"
        )


class TestOpenAISummary:
    """Tests for OpenAISummaryGenerator."""

    def test_uses_model_summary(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion({"summary": " Ages were filled. "})
        generator = OpenAISummaryGenerator(client=mock_openai)

        assert generator.summarize(["filled ages"]) == "Ages were filled."
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"]["json_schema"]["name"] == "structured_data_summary"
        assert "filled ages" in kwargs["messages"][1]["content"]

    def test_empty_input_skips_api(self, mock_openai):
        generator = OpenAISummaryGenerator(client=mock_openai)
        assert generator.summarize([]) == NO_CHANGES_SUMMARY
        mock_openai.chat.completions.create.assert_not_called()

    def test_api_error_falls_back(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = RuntimeError("boom")
        generator = OpenAISummaryGenerator(client=mock_openai)
        assert generator.summarize(["sorted rows"]) == "1 change was applied to the dataset. Sorted rows."

    def test_bad_payload_falls_back(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion("not json")
        generator = OpenAISummaryGenerator(client=mock_openai)
        assert generator.summarize(["sorted rows"]).startswith("1 change")
