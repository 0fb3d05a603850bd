# =============================================================================
# app/exceptions.py - HTTP Errors
# =============================================================================
# Exceptions that map to an HTTP status, and the handlers main.py installs.
# Every error response carries a machine-readable code and, where possible,
# a suggestion telling the caller how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from cleaning_actions.exceptions import ApplicationError


class CleaningServiceException(Exception):
    """
    An error that ends the request with a specific HTTP status.

    Response body: {detail, code, suggestion?, details?}.
    """

    def __init__(
        self,
        message: str,
        code: str = "CLEANING_SERVICE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class DatasetTooLargeError(CleaningServiceException):
    """Raised when a request carries more rows than the service accepts."""

    def __init__(self, row_count: int, max_rows: int):
        super().__init__(
            message=f"Dataset too large: {row_count} rows (max: {max_rows})",
            code="DATASET_TOO_LARGE",
            status_code=413,
            suggestion=f"Send at most {max_rows} rows per request",
            details={"row_count": row_count, "max_rows": max_rows}
        )


class InvalidActionListException(CleaningServiceException):
    """Raised when the action list is not a list or an action has no type."""

    def __init__(self, error: ApplicationError):
        super().__init__(
            message=error.message,
            code=error.code,
            status_code=400,
            suggestion=error.suggestion,
            details=error.details,
        )


# =============================================================================
# Language Model Exceptions
# =============================================================================

class LLMNotConfiguredError(CleaningServiceException):
    """Raised when a chat request arrives but no OpenAI key is configured."""

    def __init__(self):
        super().__init__(
            message="The chat endpoint needs an OpenAI API key",
            code="LLM_NOT_CONFIGURED",
            status_code=503,
            suggestion="Set OPENAI_API_KEY, or send actions directly to POST /api/v1/actions/apply",
        )


class PlanningFailedError(CleaningServiceException):
    """Raised when the planner could not produce a usable plan."""

    def __init__(self, error: ApplicationError):
        super().__init__(
            message=f"Could not plan actions: {error.message}",
            code="PLANNING_FAILED",
            status_code=502,
            suggestion=error.suggestion or "Try rephrasing your request",
            details={"cause": error.code, **error.details},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def cleaning_service_exception_handler(
    request: Request,
    exc: CleaningServiceException
) -> JSONResponse:
    """Render a CleaningServiceException with its own status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Malformed request bodies get a 422 with the pydantic error text."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request body failed validation",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
