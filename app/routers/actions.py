# =============================================================================
# app/routers/actions.py - Action Engine Endpoints
# =============================================================================
# Direct access to the cleaning engine, without the language model:
#
# - GET  /actions/catalogue: every registered action type and its fields
# - POST /actions/apply: apply a list of action descriptors to a dataset
#
# Handlers are plain `def` so the synchronous engine runs in the threadpool.
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from app.dependencies import EngineDep
from app.exceptions import DatasetTooLargeError, InvalidActionListException
from cleaning_actions import AppliedAction, ApplyResult, InvalidActionListError, describe_actions

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ApplyActionsRequest(BaseModel):
    """Request to apply actions to a dataset."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "data": [{"name": " bob ", "age": None}, {"name": "BOB", "age": 41}],
                "schema": {"age": {"dataType": "Integer"}},
                "actions": [
                    {"type": "STANDARDIZE_TEXT_FORMAT", "column": "name",
                     "title": "Standardized names", "response": "Names were trimmed and capitalized."},
                    {"type": "FILL_MISSING", "column": "age", "defaultValue": 0,
                     "title": "Filled ages", "response": "Missing ages were set to 0."},
                ],
            }
        },
    )

    data: list[dict[str, Any]] = Field(..., description="Rows to transform")
    column_schema: dict[str, Any] | None = Field(
        default=None,
        alias="schema",
        description="Column schema keyed by column name (camelCase entries)",
    )
    # Left untyped so a malformed list reaches the engine and gets its error code
    actions: Any = Field(..., description="Action descriptors, applied in order")
    summarize: bool = Field(default=True, description="Generate a summary of the applied actions")


class ApplyActionsResponse(BaseModel):
    """Transformed dataset plus the per-action audit trail."""
    model_config = ConfigDict(populate_by_name=True)

    data: list[dict[str, Any]]
    column_schema: dict[str, Any] = Field(default_factory=dict, alias="schema")
    actions: list[AppliedAction]
    narratives: list[dict[str, str]]
    summary: str | None = None
    row_count: int
    duration_ms: float

    @classmethod
    def from_result(cls, result: ApplyResult) -> "ApplyActionsResponse":
        return cls(
            data=result.dataset,
            column_schema={name: entry.to_wire() for name, entry in result.schema.items()},
            actions=result.actions,
            narratives=result.narratives,
            summary=result.summary,
            row_count=len(result.dataset),
            duration_ms=round(result.duration_ms, 2),
        )


class CatalogueEntry(BaseModel):
    """One registered action type."""
    type: str
    category: str
    description: str
    required: list[str]
    optional: list[str]


class CatalogueResponse(BaseModel):
    count: int
    actions: list[CatalogueEntry]


def check_row_limit(data: list[dict[str, Any]]) -> None:
    if len(data) > settings.MAX_ROWS_PER_REQUEST:
        raise DatasetTooLargeError(len(data), settings.MAX_ROWS_PER_REQUEST)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/actions/catalogue", response_model=CatalogueResponse)
def get_catalogue():
    """
    List every action type the engine can apply.

    Field names are the camelCase names used in action descriptors.
    """
    entries = [CatalogueEntry(**entry) for entry in describe_actions()]
    return CatalogueResponse(count=len(entries), actions=entries)


@router.post("/actions/apply", response_model=ApplyActionsResponse, response_model_by_alias=True)
def apply_actions(request: ApplyActionsRequest, engine: EngineDep):
    """
    Apply a list of actions to a dataset.

    Unknown action types are recorded as SKIPPED and invalid actions as
    FAILED; neither stops the rest of the batch. Only a malformed action
    list (not a list, or an entry without a type) is rejected with 400.
    """
    check_row_limit(request.data)
    logger.info(f"Applying actions to {len(request.data)} rows")

    try:
        result = engine.apply_actions(
            request.data,
            request.actions,
            request.column_schema,
            summarize=request.summarize,
        )
    except InvalidActionListError as e:
        raise InvalidActionListException(e) from e

    return ApplyActionsResponse.from_result(result)
