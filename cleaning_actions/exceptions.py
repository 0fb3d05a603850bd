# =============================================================================
# cleaning_actions/exceptions.py - Action Errors
# =============================================================================
# Error hierarchy for the project, rooted at ApplicationError, plus the
# structural errors raised while dispatching actions.
#
# Per-cell problems (a value that cannot be coerced, a date that cannot be
# parsed) are never raised: operators recover locally. Only a malformed action
# (missing or unusable parameters) raises, and the engine records it as a
# failed step instead of aborting the batch.
# =============================================================================

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Error
# =============================================================================

class ApplicationError(Exception):
    """
    Root of every error this project raises on purpose.

    Carries a machine-readable code and, where one exists, a suggestion for
    the caller. The HTTP layer copies these fields into its error responses.

    Example:
        raise ApplicationError(
            "Column 'age' not found",
            code="COLUMN_NOT_FOUND",
            suggestion="Check the column names in the schema",
        )
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.code}] {self.message} ({self.suggestion})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


# =============================================================================
# Action Errors
# =============================================================================

class ActionError(ApplicationError):
    """
    Base error for a single action that cannot be applied.

    Caught by the engine and recorded on the action's audit entry.
    """

    def __init__(
        self,
        message: str,
        code: str = "ACTION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class MissingParameterError(ActionError):
    """Raised when an action lacks a parameter its operator requires."""

    def __init__(self, action_type: str, parameter: str):
        super().__init__(
            message=f"{action_type} requires '{parameter}'",
            code="MISSING_PARAMETER",
            suggestion=f"Provide '{parameter}' on the {action_type} action",
            details={"action_type": action_type, "parameter": parameter},
        )
        self.action_type = action_type
        self.parameter = parameter


class InvalidParameterError(ActionError):
    """Raised when a parameter is present but unusable (bad regex, unknown encoding)."""

    def __init__(self, action_type: str, parameter: str, reason: str):
        super().__init__(
            message=f"{action_type} has an invalid '{parameter}': {reason}",
            code="INVALID_PARAMETER",
            details={"action_type": action_type, "parameter": parameter, "reason": reason},
        )
        self.action_type = action_type
        self.parameter = parameter


class InvalidActionListError(ApplicationError):
    """
    Raised when apply_actions() is called with a structurally invalid batch.

    This is a caller precondition failure (the list is not a list, or an
    entry has no 'type'), so it propagates instead of being recorded.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code="INVALID_ACTION_LIST",
            suggestion="Send a JSON array of action objects, each with a 'type' field",
            details=details,
        )
