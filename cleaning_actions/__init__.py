# =============================================================================
# cleaning_actions - Action-Application Engine
# =============================================================================
# A library of named cleaning operators, selected by structured action
# descriptors (usually written by a language model) and applied in order to
# a list of row dicts.
#
# Key principles:
# - Operators are pure: they return fresh rows and never touch their input
# - Per-cell problems never raise; they leave the cell alone or set it to null
# - One bad action never aborts a batch; it is recorded as SKIPPED or FAILED
#
# Architecture:
#   Chat command -> Planner -> [actions] -> ActionEngine -> ApplyResult
#
# Usage:
#   from cleaning_actions import apply_actions
#
#   result = apply_actions(
#       [{"name": " bob "}, {"name": "BOB"}],
#       [{"type": "STANDARDIZE_TEXT_FORMAT", "column": "name"}],
#   )
#   result.dataset  # [{"name": "Bob"}, {"name": "Bob"}]
# =============================================================================

from cleaning_actions.registry import (
    register,
    get_operator,
    list_actions,
    describe_actions,
    export_action_catalogue,
    OPERATOR_REGISTRY,
    OperatorSpec,
)
from cleaning_actions.engine import ActionEngine, ApplyResult, apply_actions, validate_actions
from cleaning_actions.exceptions import (
    ApplicationError,
    ActionError,
    InvalidActionListError,
    InvalidParameterError,
    MissingParameterError,
)
from cleaning_actions.summary import SummaryGenerator, TemplateSummaryGenerator
from cleaning_actions.types import (
    ActionContext,
    ActionDescriptor,
    ActionStatus,
    ActionType,
    AppliedAction,
    ColumnSchema,
    DataType,
    IssueType,
    Schema,
    parse_schema,
)

# Import operators to register them
# This must come after registry imports
from cleaning_actions import operators  # noqa: F401, E402

__version__ = "1.0.0"

__all__ = [
    # Registry
    "register",
    "get_operator",
    "list_actions",
    "describe_actions",
    "export_action_catalogue",
    "OPERATOR_REGISTRY",
    "OperatorSpec",
    # Engine
    "ActionEngine",
    "ApplyResult",
    "apply_actions",
    "validate_actions",
    # Errors
    "ApplicationError",
    "ActionError",
    "InvalidActionListError",
    "InvalidParameterError",
    "MissingParameterError",
    # Summary
    "SummaryGenerator",
    "TemplateSummaryGenerator",
    # Types
    "ActionContext",
    "ActionDescriptor",
    "ActionStatus",
    "ActionType",
    "AppliedAction",
    "ColumnSchema",
    "DataType",
    "IssueType",
    "Schema",
    "parse_schema",
]
