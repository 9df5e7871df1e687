"""Error Classifier — maps any failure to a status + message pair for the boundary.

Invariants:
    - Pure mapping: no IO, no retries, no logging
    - YourPlacesError keeps its own status/code/message
    - Anything else is InternalFailure (500) with a generic message

Design Decisions:
    - Single function used by every handler in api/error_handlers.py: one place
      decides what the client sees (ADR: uniform error shape)
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from yourplaces.core.errors import ErrorCategory, ErrorSeverity, YourPlacesError

INTERNAL_FAILURE_MESSAGE = "An unknown error occurred!"
VALIDATION_FAILURE_MESSAGE = "Invalid inputs passed, please check your data."


@dataclass(frozen=True)
class ClassifiedError:
    """Externally visible shape of a failure."""
    status: int
    code: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    timestamp: datetime

    @property
    def is_internal(self) -> bool:
        return self.status >= 500

    def to_response(self) -> dict:
        return {
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.timestamp.isoformat(),
            },
        }


def classify_error(exc: BaseException) -> ClassifiedError:
    """Classify an exception raised anywhere below the boundary layer."""
    if isinstance(exc, YourPlacesError):
        message = exc.message
        if exc.http_status >= 500:
            # infra messages name the failing operation; keep them in logs
            message = INTERNAL_FAILURE_MESSAGE
        return ClassifiedError(
            status=exc.http_status,
            code=exc.code,
            message=message,
            category=exc.category,
            severity=exc.severity,
            timestamp=exc.context.timestamp,
        )
    return ClassifiedError(
        status=500,
        code="INTERNAL_ERROR",
        message=INTERNAL_FAILURE_MESSAGE,
        category=ErrorCategory.INTERNAL,
        severity=ErrorSeverity.CRITICAL,
        timestamp=datetime.now(timezone.utc),
    )


def classify_validation_failure() -> ClassifiedError:
    """Classification for request bodies rejected before the core is entered."""
    return ClassifiedError(
        status=422,
        code="VALIDATION_ERROR",
        message=VALIDATION_FAILURE_MESSAGE,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.ERROR,
        timestamp=datetime.now(timezone.utc),
    )
