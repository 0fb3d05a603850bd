# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and replaced with
# app.dependency_overrides in tests.
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends

from agents.action_planner import ActionPlanner, PlanningError
from agents.summarizer import OpenAISummaryGenerator
from app.config import settings
from app.exceptions import LLMNotConfiguredError
from cleaning_actions import ActionEngine, TemplateSummaryGenerator

logger = logging.getLogger(__name__)


def get_engine() -> ActionEngine:
    """
    Build the action engine for one request.

    Summaries go through OpenAI when it is configured and enabled,
    otherwise through the template generator.
    """
    if settings.LLM_SUMMARY_ENABLED and settings.llm_configured:
        summary_generator = OpenAISummaryGenerator()
    else:
        summary_generator = TemplateSummaryGenerator()
    return ActionEngine(summary_generator=summary_generator, seed=settings.RANDOM_SEED)


def get_planner() -> ActionPlanner:
    """
    Build the action planner.

    Raises:
        LLMNotConfiguredError: No OpenAI key is configured
    """
    if not settings.llm_configured:
        raise LLMNotConfiguredError()
    try:
        return ActionPlanner()
    except PlanningError as e:
        logger.error(f"Could not create planner: {e}")
        raise LLMNotConfiguredError() from e


# Type aliases for dependency injection
EngineDep = Annotated[ActionEngine, Depends(get_engine)]
PlannerDep = Annotated[ActionPlanner, Depends(get_planner)]
