# =============================================================================
# tests/test_action_planner.py - Action Planner Tests
# =============================================================================
# Tests for the ActionPlan schema, the planner prompt and the ActionPlanner
# agent with a mocked OpenAI client.
# =============================================================================

import json

import pytest
from pydantic import ValidationError

from agents.action_planner import ActionPlanner, PlanningError
from agents.models.action_plan import ActionPlan, build_response_format
from agents.prompts.planner_system import build_planner_prompt, build_planner_user_message
from cleaning_actions import ActionType, ColumnSchema
from tests.conftest import make_completion


# =============================================================================
# ActionPlan Schema Tests
# =============================================================================

class TestActionPlanSchema:
    """Tests for ActionPlan validation."""

    def test_valid_plan(self):
        plan = ActionPlan.model_validate({
            "actions": [{"type": "DELETE_COLUMN", "column": "email", "title": "t", "response": "r"}],
            "summary": "Removed email.",
        })
        assert plan.has_actions
        assert plan.action_types == ["DELETE_COLUMN"]

    def test_empty_plan_is_valid(self):
        plan = ActionPlan.model_validate({"actions": [], "summary": None})
        assert not plan.has_actions
        assert plan.summary == ""

    def test_actions_must_be_objects(self):
        with pytest.raises(ValidationError):
            ActionPlan.model_validate({"actions": ["DELETE_COLUMN"], "summary": ""})

    def test_response_format_enum_matches_action_types(self):
        response_format = build_response_format()
        schema = response_format["json_schema"]["schema"]
        enum = schema["properties"]["actions"]["items"]["properties"]["type"]["enum"]
        assert response_format["json_schema"]["name"] == "structured_data_actions"
        assert set(enum) == {t.value for t in ActionType}


# =============================================================================
# Prompt Tests
# =============================================================================

class TestPlannerPrompt:
    """Tests for the planner prompt builders."""

    def test_prompt_lists_every_action(self):
        prompt = build_planner_prompt()
        for action_type in ActionType:
            assert action_type.value in prompt

    def test_user_message_is_json(self):
        message = json.loads(build_planner_user_message("drop email", {"email": {"dataType": "String"}}, None))
        assert message == {"command": "drop email", "schema": {"email": {"dataType": "String"}}, "issues": []}


# =============================================================================
# ActionPlanner Tests (Mocked OpenAI)
# =============================================================================

class TestActionPlanner:
    """Tests for ActionPlanner with a mocked client."""

    def test_plan_parses_response(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion({
            "actions": [{"type": "FILL_MISSING", "column": "age", "defaultValue": 0, "title": "t", "response": "r"}],
            "summary": "Filled ages.",
        })
        planner = ActionPlanner(client=mock_openai, model="test-model")

        plan = planner.plan("fill missing ages with 0", {"age": {"dataType": "Integer"}}, [])

        assert plan.action_types == ["FILL_MISSING"]
        assert plan.summary == "Filled ages."
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0
        assert kwargs["messages"][0]["role"] == "system"
        assert json.loads(kwargs["messages"][1]["content"])["command"] == "fill missing ages with 0"

    def test_schema_models_are_serialized(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion({"actions": [], "summary": "Hi!"})
        planner = ActionPlanner(client=mock_openai)

        planner.plan("hello", {"age": ColumnSchema(dataType="Integer")})

        user = json.loads(mock_openai.chat.completions.create.call_args.kwargs["messages"][1]["content"])
        assert user["schema"]["age"]["dataType"] == "Integer"

    def test_untyped_actions_are_dropped(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion({
            "actions": [{"title": "no type"}, {"type": "TRIM_TEXT", "column": "name"}],
            "summary": "Trimmed.",
        })
        plan = ActionPlanner(client=mock_openai).plan("trim names")
        assert plan.action_types == ["TRIM_TEXT"]

    def test_api_error(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = RuntimeError("timeout")
        with pytest.raises(PlanningError) as exc_info:
            ActionPlanner(client=mock_openai).plan("anything")
        assert exc_info.value.code == "OPENAI_ERROR"

    def test_invalid_json(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion("this is not json")
        with pytest.raises(PlanningError) as exc_info:
            ActionPlanner(client=mock_openai).plan("anything")
        assert exc_info.value.code == "JSON_PARSE_ERROR"

    def test_invalid_structure(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion({"actions": "DELETE_COLUMN"})
        with pytest.raises(PlanningError) as exc_info:
            ActionPlanner(client=mock_openai).plan("anything")
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_planning_error_to_dict(self):
        error = PlanningError("Could not plan", suggestion="Rephrase")
        result = error.to_dict()
        assert result["code"] == "PLANNING_ERROR"
        assert result["suggestion"] == "Rephrase"
