# =============================================================================
# agents/ - Language Model Collaborators
# =============================================================================
# This package wraps the OpenAI calls around the cleaning engine:
# - action_planner.py: turns a chat command into an ActionPlan
# - summarizer.py: merges applied-action responses into one summary
# - chat_handler.py: planner -> engine -> summary for one chat turn
#
# Models:
# - models/action_plan.py: ActionPlan schema (Planner -> Engine)
#
# Prompts:
# - prompts/planner_system.py: System prompt for the planner
# - prompts/summary_system.py: System prompt for the summarizer
# =============================================================================

from agents.action_planner import ActionPlanner, PlanningError
from agents.models.action_plan import ActionPlan
from agents.summarizer import OpenAISummaryGenerator
from agents.chat_handler import (
    ChatTurn,
    handle_chat_request,
    preview_plan,
)

__all__ = [
    # Planner
    "ActionPlanner",
    "PlanningError",
    "ActionPlan",
    # Summary
    "OpenAISummaryGenerator",
    # Chat Handler
    "ChatTurn",
    "handle_chat_request",
    "preview_plan",
]
