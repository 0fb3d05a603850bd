# =============================================================================
# app/routers/chat.py - Conversational Cleaning Endpoint
# =============================================================================
# Handles one chat turn against a dataset.
#
# Flow:
# 1. User sends a command with the dataset, schema and detected issues
# 2. Planner turns the command into actions plus a batch summary
# 3. Engine applies the actions; the response carries the new dataset
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from agents.action_planner import PlanningError
from agents.chat_handler import handle_chat_request
from app.dependencies import EngineDep, PlannerDep
from app.exceptions import InvalidActionListException, PlanningFailedError
from app.routers.actions import ApplyActionsResponse, check_row_limit
from cleaning_actions import InvalidActionListError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ChatRequest(BaseModel):
    """Request to clean a dataset with a chat command."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "command": "fill missing ages with the average",
                    "data": [{"age": 30}, {"age": None}, {"age": 40}],
                    "schema": {"age": {"dataType": "Integer"}},
                    "issues": [],
                },
            ]
        },
    )

    command: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Natural language instruction for data cleaning",
        examples=[
            "delete the email column",
            "remove rows where age is below 18",
            "round price to 2 decimal places",
            "change the date format to DD/MM/YYYY",
        ]
    )
    data: list[dict[str, Any]] = Field(..., description="Current rows")
    column_schema: dict[str, Any] | None = Field(default=None, alias="schema")
    issues: list[Any] | dict[str, Any] | None = Field(
        default=None,
        description="Issues reported by the detection service, forwarded to the planner",
    )


class ChatResponse(ApplyActionsResponse):
    """Engine result plus the planner's own summary and reply."""
    command: str
    plan_summary: str
    assistant_response: str


# =============================================================================
# Chat Endpoint
# =============================================================================

@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True)
def chat(request: ChatRequest, planner: PlannerDep, engine: EngineDep):
    """
    Plan and apply one chat command.

    Greetings and unclear commands produce no actions: the dataset comes
    back unchanged and assistant_response carries the planner's reply.
    """
    check_row_limit(request.data)
    logger.info(f"Chat command on {len(request.data)} rows: '{request.command[:50]}'")

    try:
        turn = handle_chat_request(
            request.command,
            request.data,
            request.column_schema,
            request.issues,
            planner=planner,
            engine=engine,
        )
    except PlanningError as e:
        logger.warning(f"Planning failed: {e}")
        raise PlanningFailedError(e) from e
    except InvalidActionListError as e:
        raise InvalidActionListException(e) from e

    base = ApplyActionsResponse.from_result(turn.result)
    return ChatResponse(
        **base.model_dump(by_alias=False),
        command=request.command,
        plan_summary=turn.plan.summary,
        assistant_response=turn.message,
    )
