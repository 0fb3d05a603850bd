# =============================================================================
# agents/models/action_plan.py - Action Plan Schema
# =============================================================================
# This module defines the ActionPlan schema: the contract between the
# Action Planner (language model) and the cleaning engine.
#
# Actions are kept as wire dicts rather than ActionDescriptor instances. The
# engine validates each one itself, so a single malformed action is recorded
# as FAILED or SKIPPED instead of rejecting the whole plan.
#
# Example flow:
#   User: "remove the email column and fill missing ages with 0"
#   Planner outputs:
#   {
#       "actions": [
#           {"type": "DELETE_COLUMN", "column": "email", "title": "...", "response": "..."},
#           {"type": "FILL_MISSING", "column": "age", "defaultValue": 0, "title": "...", "response": "..."}
#       ],
#       "summary": "The email column was removed and missing ages were set to 0."
#   }
# =============================================================================

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from cleaning_actions.types import DATE_FORMATS, SPECIAL_CHARACTERS, ActionType


class ActionPlan(BaseModel):
    """
    Structured output from the Action Planner.

    An empty action list is valid: greetings and unclear commands produce no
    actions, and the summary carries the reply to the user.
    """

    actions: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Action descriptors in the order they must be applied",
    )

    summary: str = Field(
        default="",
        description="One description of the overall effect, or a reply when there are no actions",
    )

    @field_validator("summary", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def has_actions(self) -> bool:
        return len(self.actions) > 0

    @property
    def action_types(self) -> list[str]:
        return [a["type"] for a in self.actions]


# =============================================================================
# OpenAI Response Format
# =============================================================================

_SCALAR = ["string", "number", "boolean", "null"]


def build_response_format() -> dict[str, Any]:
    """
    JSON schema passed as response_format to the chat completion.

    The action type enum comes from ActionType, so a type the engine does
    not know can never be requested.
    """
    action_properties = {
        "type": {"type": "string", "enum": [t.value for t in ActionType]},
        "title": {"type": "string"},
        "response": {"type": "string"},
        "column": {"type": ["string", "null"]},
        "columnName": {"type": "string"},
        "targetColumn": {"type": "array", "items": {"type": "string"}},
        "update": {"type": "string"},
        "from": {"type": "string"},
        "to": {"type": "string"},
        "defaultValue": {"type": _SCALAR},
        "oldValue": {"type": _SCALAR},
        "newValue": {"type": _SCALAR},
        "value": {"type": _SCALAR},
        "minValue": {"type": ["number", "null"]},
        "maxValue": {"type": ["number", "null"]},
        "by": {"type": ["number", "string"]},
        "count": {"type": ["integer", "null"]},
        "rowNumber": {"type": ["integer", "null"]},
        "newValues": {"type": "object", "additionalProperties": True},
        "issueType": {"type": ["string", "null"]},
        "findText": {"type": "string"},
        "replaceText": {"type": "string"},
        "useRegex": {"type": "boolean"},
        "extractWord": {"type": "string"},
        "newFormat": {"type": "string", "enum": list(DATE_FORMATS)},
        "newSeparator": {"type": "string"},
        "transform": {"type": "string", "enum": ["UPPERCASE", "LOWERCASE", "CAPITALIZE"]},
        "dataType": {"type": "string", "enum": ["STRING", "NUMBER", "DATE", "BOOLEAN"]},
        "idType": {"type": "string", "enum": ["UUID", "AUTOINCREMENT"]},
        "encoding": {"type": "string", "enum": ["UTF-8", "ASCII", "ISO-8859-1"]},
        "character": {"type": "string", "enum": list(SPECIAL_CHARACTERS)},
    }

    return {
        "type": "json_schema",
        "json_schema": {
            "name": "structured_data_actions",
            "schema": {
                "type": "object",
                "properties": {
                    "actions": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["type", "title", "response"],
                            "properties": action_properties,
                        },
                    },
                    "summary": {"type": "string"},
                },
                "required": ["actions", "summary"],
                "additionalProperties": False,
            },
        },
    }
