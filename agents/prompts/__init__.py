# =============================================================================
# agents/prompts/ - System Prompts for the Language Model
# =============================================================================
# This package contains the system prompts used by the agents:
# - planner_system.py: Action Planner prompt (command -> actions + summary)
# - summary_system.py: Batch summary prompt (responses -> one summary)
#
# Organized with XML tags for clear structure.
# =============================================================================

from agents.prompts.planner_system import (
    PLANNER_SYSTEM_PROMPT,
    build_planner_prompt,
    build_planner_user_message,
)
from agents.prompts.summary_system import (
    SUMMARY_SYSTEM_PROMPT,
    build_summary_user_message,
)

__all__ = [
    "PLANNER_SYSTEM_PROMPT",
    "build_planner_prompt",
    "build_planner_user_message",
    "SUMMARY_SYSTEM_PROMPT",
    "build_summary_user_message",
]
