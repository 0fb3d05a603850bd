# =============================================================================
# agents/models/ - Agent Communication Schemas
# =============================================================================
# This package contains the Pydantic models exchanged with the language model:
# - action_plan.py: ActionPlan schema (Planner -> Engine contract) and the
#   JSON-schema response format that constrains the planner's reply
# =============================================================================

from agents.models.action_plan import ActionPlan, build_response_format

__all__ = [
    "ActionPlan",
    "build_response_format",
]
