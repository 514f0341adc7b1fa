"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400/422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SCORING_INPUT_INVALID = "SCORING_INPUT_INVALID"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Storage errors (503)
    DURABLE_STORE_UNAVAILABLE = "DURABLE_STORE_UNAVAILABLE"
    PROFILE_PERSISTENCE_FAILED = "PROFILE_PERSISTENCE_FAILED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class DurableStoreError(AppException):
    """The durable store failed or timed out for one operation.

    Raised by store adapters only. The tiered repository catches it, logs it
    and degrades to the next tier; it never reaches API callers.
    """

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        reason = str(cause) or type(cause).__name__
        super().__init__(
            error_code=ErrorCode.DURABLE_STORE_UNAVAILABLE,
            message=f"Durable store {operation} failed: {reason}",
            status_code=503,
            details={"operation": operation},
        )
        self.operation = operation
        self.cause = cause


class PersistenceError(AppException):
    """Both the durable write and the fallback write failed."""

    def __init__(self, user_id: str, cause: BaseException | str) -> None:
        reason = str(cause) or type(cause).__name__
        super().__init__(
            error_code=ErrorCode.PROFILE_PERSISTENCE_FAILED,
            message=f"Unable to persist profile {user_id}: {reason}",
            status_code=503,
            details={"user_id": user_id, "cause": reason},
        )
        self.user_id = user_id
        self.cause = cause


class ScoringInputError(AppException):
    """A value required by a scoring factor is missing or not numeric."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            error_code=ErrorCode.SCORING_INPUT_INVALID,
            message=f"Invalid scoring input for {field}: {value!r}",
            status_code=422,
            details={"field": field},
        )
        self.field = field
