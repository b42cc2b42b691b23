"""Exception hierarchy for the assessment pipeline.

Normalization itself never raises on malformed OCR input. These exceptions
serve the opt-in strict validation layer and consumer-side programming
errors, and carry RFC 7807 Problem Details so that a host application can
return them from an HTTP API unchanged.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """Error categories for classification and monitoring."""

    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    VALIDATION = "validation"
    BUSINESS_LOGIC = "business_logic"


class BaseError(Exception):
    """Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        error_code: Application-specific error code
        category: Error category for classification
        http_status: HTTP status code a host API should return
        details: Additional context (dict)
        retryable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory,
        http_status: int,
        details: Optional[dict[str, Any]] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.http_status = http_status
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 Problem Details format."""
        return {
            "type": f"/errors/{self.error_code}",
            "title": self.message,
            "status": self.http_status,
            "code": self.error_code,
            "detail": self.details.get("detail"),
            "category": self.category.value,
            "retryable": self.retryable,
        }


class ClientError(BaseError):
    """Base for errors caused by the caller. Never retryable."""

    def __init__(self, message: str, error_code: str, **kwargs):
        super().__init__(
            message=message,
            error_code=error_code,
            category=ErrorCategory.CLIENT_ERROR,
            http_status=kwargs.pop("http_status", 400),
            retryable=False,
            **kwargs,
        )


class ValidationError(ClientError):
    """Input validation failed (422 Unprocessable Entity).

    Args:
        message: Validation error description
        field: Name of the field that failed validation
        details: Additional validation context
    """

    def __init__(self, message: str, field: str, **kwargs):
        additional_details = kwargs.pop("details", {})
        additional_details["field"] = field
        super().__init__(
            message=message,
            error_code=kwargs.pop("error_code", "VALIDATION_ERROR"),
            http_status=422,
            details=additional_details,
            **kwargs,
        )


class RecordValidationError(ValidationError):
    """A normalized record failed the strict post-normalization checks.

    Args:
        failed_checks: Names of the checks that did not pass
        checks: Full check map as returned by `validate_record`
    """

    def __init__(self, failed_checks: list[str], checks: dict[str, bool]):
        super().__init__(
            message="Assessment record failed validation",
            field=failed_checks[0] if failed_checks else "record",
            error_code="RECORD_VALIDATION_FAILED",
            details={
                "detail": f"Failed checks: {', '.join(failed_checks)}",
                "failed_checks": failed_checks,
                "checks": checks,
            },
        )
        self.failed_checks = failed_checks
        self.checks = checks
