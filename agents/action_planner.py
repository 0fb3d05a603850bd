# =============================================================================
# agents/action_planner.py - Action Planner Agent
# =============================================================================
# Turns one chat command into an ActionPlan: an ordered list of action
# descriptors for the cleaning engine plus one summary of the batch.
#
# The planner's job:
# 1. Send the command, schema and detected issues to OpenAI
# 2. Constrain the reply with a JSON schema listing every known action type
# 3. Validate the reply into an ActionPlan
#
# The planner never touches the data. The engine validates each action again
# when it runs them, so the plan is advisory up to that point.
#
# Usage:
#   from agents.action_planner import ActionPlanner
#   planner = ActionPlanner()
#   plan = planner.plan("fill missing ages with 0", schema, issues)
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any

from openai import OpenAI
from pydantic import ValidationError

from agents.models.action_plan import ActionPlan, build_response_format
from agents.prompts.planner_system import build_planner_prompt, build_planner_user_message
from app.config import settings
from cleaning_actions.types import ColumnSchema
from cleaning_actions.exceptions import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class PlanningError(ApplicationError):
    """
    Error while turning a command into an action plan.

    Raised for API failures and for replies that are not a valid plan.
    """

    def __init__(
        self,
        message: str,
        code: str = "PLANNING_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


# =============================================================================
# Action Planner
# =============================================================================

class ActionPlanner:
    """
    Plans cleaning actions from natural language.

    Example:
        planner = ActionPlanner()
        plan = planner.plan(
            command="remove rows where age is below 18",
            schema={"age": {"dataType": "Integer"}},
        )
        plan.action_types  # ["DELETE_ROWS_WHERE_VALUE_LESS_THAN"]

    Attributes:
        model: OpenAI model to use (default from settings)
        temperature: Generation temperature (default 0 for repeatable plans)
        max_completion_tokens: Completion token limit
    """

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_completion_tokens: int | None = None,
    ):
        """
        Initialize the planner.

        Args:
            client: OpenAI client (default: built from settings.OPENAI_API_KEY)
            model: OpenAI model ID (default: settings.OPENAI_MODEL)
            temperature: Generation temperature (default: settings.PLANNER_TEMPERATURE)
            max_completion_tokens: Token limit (default: settings.MAX_COMPLETION_TOKENS)

        Raises:
            PlanningError: No client given and no API key configured
        """
        if client is None:
            if not settings.OPENAI_API_KEY:
                raise PlanningError(
                    message="OpenAI is not configured",
                    code="LLM_NOT_CONFIGURED",
                    suggestion="Set OPENAI_API_KEY in the environment or .env file",
                )
            client = OpenAI(api_key=settings.OPENAI_API_KEY)

        self.client = client
        self.model = model or settings.OPENAI_MODEL
        self.temperature = temperature if temperature is not None else settings.PLANNER_TEMPERATURE
        self.max_completion_tokens = max_completion_tokens or settings.MAX_COMPLETION_TOKENS

        logger.info(f"ActionPlanner initialized with model={self.model}, temp={self.temperature}")

    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------

    def plan(
        self,
        command: str,
        schema: dict[str, Any] | None = None,
        issues: list[Any] | dict[str, Any] | None = None,
    ) -> ActionPlan:
        """
        Create an ActionPlan from a chat command.

        Args:
            command: The user's message
            schema: Column schema (ColumnSchema entries or camelCase dicts)
            issues: Issues reported by the detection service, passed through as-is

        Returns:
            ActionPlan ready for the engine

        Raises:
            PlanningError: If the API call fails or the reply is not a valid plan
        """
        logger.info(f"Planning actions for command: '{command[:50]}'")

        messages = self._build_messages(command, schema, issues)

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_completion_tokens=self.max_completion_tokens,
                response_format=build_response_format(),
                messages=messages,
            )
            response_text = response.choices[0].message.content or ""
            logger.debug(f"OpenAI response: {response_text[:200]}...")

        except Exception as e:
            raise PlanningError(
                message=f"OpenAI API call failed: {e}",
                code="OPENAI_ERROR",
                suggestion="Check your OPENAI_API_KEY and network connection",
                details={"model": self.model},
            ) from e

        plan = self._parse_response(response_text)
        plan = self._post_process_plan(plan, schema)

        logger.info(f"Plan created with {len(plan.actions)} action(s): {plan.action_types}")
        return plan

    # -------------------------------------------------------------------------
    # Message Building
    # -------------------------------------------------------------------------

    def _build_messages(
        self,
        command: str,
        schema: dict[str, Any] | None,
        issues: list[Any] | dict[str, Any] | None,
    ) -> list[dict[str, str]]:
        wire_schema = {
            name: entry.to_wire() if isinstance(entry, ColumnSchema) else entry
            for name, entry in (schema or {}).items()
        }
        return [
            {"role": "system", "content": build_planner_prompt()},
            {"role": "user", "content": build_planner_user_message(command, wire_schema, issues)},
        ]

    # -------------------------------------------------------------------------
    # Response Parsing
    # -------------------------------------------------------------------------

    def _parse_response(self, response_text: str) -> ActionPlan:
        """
        Parse the OpenAI reply into an ActionPlan.

        Raises:
            PlanningError: If the reply is not JSON or not a valid plan
        """
        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise PlanningError(
                message=f"Invalid JSON response from model: {e}",
                code="JSON_PARSE_ERROR",
                suggestion="The model didn't return valid JSON. Try rephrasing your request.",
                details={"raw_response": response_text[:500]},
            ) from e

        try:
            return ActionPlan.model_validate(data)
        except ValidationError as e:
            errors = [f"{err['loc']}: {err['msg']}" for err in e.errors()]
            raise PlanningError(
                message=f"Invalid plan structure: {'; '.join(errors)}",
                code="VALIDATION_ERROR",
                suggestion="The model's response was valid JSON but not a valid plan.",
                details={"raw_data": data},
            ) from e

    # -------------------------------------------------------------------------
    # Post-Processing
    # -------------------------------------------------------------------------

    def _post_process_plan(self, plan: ActionPlan, schema: dict[str, Any] | None) -> ActionPlan:
        """
        Drop entries the engine would reject as a malformed list.

        Entries that are not objects or have no type would make the whole
        batch invalid; everything else is left for the engine to judge.
        """
        kept = [a for a in plan.actions if isinstance(a, dict) and a.get("type")]
        if len(kept) != len(plan.actions):
            logger.warning(f"Dropped {len(plan.actions) - len(kept)} planned action(s) without a type")

        if schema:
            for action in kept:
                column = action.get("column")
                if column and column not in schema:
                    logger.warning(f"Planned {action['type']} targets unknown column '{column}'")

        return plan.model_copy(update={"actions": kept})
