# =============================================================================
# agents/chat_handler.py - Chat Request Handler
# =============================================================================
# This module provides the main entry point for processing one chat turn:
#
#   command -> ActionPlanner -> ActionPlan -> ActionEngine -> ApplyResult
#
# A plan without actions (a greeting, an unclear command) returns the
# dataset unchanged, with the planner's summary as the reply.
#
# Usage:
#   from agents.chat_handler import handle_chat_request
#   turn = handle_chat_request("fill missing ages with 0", rows, schema)
#   turn.result.dataset, turn.message
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from agents.action_planner import ActionPlanner
from agents.models.action_plan import ActionPlan
from cleaning_actions.engine import ActionEngine, ApplyResult
from cleaning_actions.operators.base import copy_rows
from cleaning_actions.types import Dataset, parse_schema

# Set up logging for this module
logger = logging.getLogger(__name__)


@dataclass
class ChatTurn:
    """Outcome of one chat turn: the plan and what applying it did."""
    plan: ActionPlan
    result: ApplyResult

    @property
    def message(self) -> str:
        """Reply shown to the user."""
        if self.result.applied and self.result.summary:
            return self.result.summary
        return self.plan.summary or self.result.summary or ""


# =============================================================================
# Chat Handler
# =============================================================================

def handle_chat_request(
    command: str,
    dataset: Dataset,
    schema: dict[str, Any] | None = None,
    issues: list[Any] | dict[str, Any] | None = None,
    planner: ActionPlanner | None = None,
    engine: ActionEngine | None = None,
) -> ChatTurn:
    """
    Plan and apply one chat command.

    Args:
        command: User's natural language request
        dataset: Current rows (never modified)
        schema: Column schema for the dataset
        issues: Issues from the detection service, forwarded to the planner
        planner: Planner to use (default: ActionPlanner from settings)
        engine: Engine to use (default: ActionEngine with template summaries)

    Returns:
        ChatTurn with the plan and the apply result

    Raises:
        PlanningError: If the planner fails

    Example:
        turn = handle_chat_request(
            "sort by age descending",
            [{"age": 3}, {"age": 7}],
            {"age": {"dataType": "Integer"}},
        )
        turn.result.dataset  # [{"age": 7}, {"age": 3}]
    """
    planner = planner or ActionPlanner()
    engine = engine or ActionEngine()

    plan = planner.plan(command, schema, issues)

    if not plan.has_actions:
        logger.info("Plan has no actions, returning dataset unchanged")
        result = ApplyResult(
            dataset=copy_rows(dataset),
            schema=parse_schema(schema),
            summary=plan.summary,
        )
        return ChatTurn(plan=plan, result=result)

    result = engine.apply_actions(dataset, plan.actions, schema)
    return ChatTurn(plan=plan, result=result)


# =============================================================================
# Convenience Functions
# =============================================================================

def preview_plan(
    command: str,
    schema: dict[str, Any] | None = None,
    issues: list[Any] | dict[str, Any] | None = None,
    planner: ActionPlanner | None = None,
) -> tuple[ActionPlan, list[str]]:
    """
    Plan a command without applying it.

    Returns:
        Tuple of (plan, problems the engine would report for it)

    Example:
        plan, problems = preview_plan("remove blank emails", schema)
        if not problems:
            print(plan.summary)
    """
    planner = planner or ActionPlanner()
    plan = planner.plan(command, schema, issues)
    _, problems = ActionEngine().validate_actions(plan.actions)
    return plan, problems
