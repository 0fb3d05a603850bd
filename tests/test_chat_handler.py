# =============================================================================
# tests/test_chat_handler.py - Chat Handler Tests
# =============================================================================
# Tests for one chat turn: planner -> engine -> reply, with a mocked planner.
# =============================================================================

from unittest.mock import MagicMock

import pytest

from agents.action_planner import PlanningError
from agents.chat_handler import handle_chat_request, preview_plan
from agents.models.action_plan import ActionPlan
from cleaning_actions import ActionEngine, ActionStatus


def planner_returning(actions, summary="") -> MagicMock:
    planner = MagicMock()
    planner.plan.return_value = ActionPlan(actions=actions, summary=summary)
    return planner


class TestHandleChatRequest:
    """Tests for handle_chat_request."""

    def test_applies_planned_actions(self, people, people_schema):
        planner = planner_returning(
            [{"type": "DELETE_ROWS_WITH_NULLS", "column": "age", "title": "t", "response": "Removed rows without an age"}],
            summary="Rows without an age were removed.",
        )

        turn = handle_chat_request("drop rows with no age", people, people_schema, planner=planner, engine=ActionEngine())

        assert [row["id"] for row in turn.result.dataset] == [1, 3, 4, 5]
        assert turn.result.actions[0].status == ActionStatus.APPLIED
        assert turn.message == "1 change was applied to the dataset. Removed rows without an age."
        planner.plan.assert_called_once_with("drop rows with no age", people_schema, None)

    def test_no_actions_returns_dataset_unchanged(self, people):
        planner = planner_returning([], summary="Hello! How can I help with your data?")

        turn = handle_chat_request("hi", people, planner=planner, engine=ActionEngine())

        assert turn.result.dataset == people
        assert turn.result.actions == []
        assert turn.message == "Hello! How can I help with your data?"

    def test_only_failed_actions_reply_with_plan_summary(self, people):
        planner = planner_returning([{"type": "FILL_MISSING", "column": "age"}], summary="Filled ages.")
        turn = handle_chat_request("fill ages", people, planner=planner, engine=ActionEngine())
        assert turn.result.failed
        assert turn.message == "Filled ages."

    def test_planning_error_propagates(self, people):
        planner = MagicMock()
        planner.plan.side_effect = PlanningError("boom", code="OPENAI_ERROR")
        with pytest.raises(PlanningError):
            handle_chat_request("anything", people, planner=planner)


class TestPreviewPlan:
    """Tests for preview_plan."""

    def test_reports_problems_without_applying(self):
        planner = planner_returning([
            {"type": "TRIM_TEXT", "column": "name"},
            {"type": "RENAME_COLUMN", "from": "a"},
        ])
        plan, problems = preview_plan("tidy up", planner=planner)
        assert plan.action_types == ["TRIM_TEXT", "RENAME_COLUMN"]
        assert problems == ["Action 1: RENAME_COLUMN requires 'to'"]
