"""Error Hierarchy — typed, categorized exceptions for all YourPlaces failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Owner-visible errors (4xx) are deterministic outcomes of the input, never retried
    - Infrastructure errors (5xx) surface as InternalFailure; only TransactionConflictError is transient
    - Messages are safe to show the owner; rendering happens in core/classify_error.py

Design Decisions:
    - Single hierarchy with YourPlacesError base: one FastAPI handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields stay on the exception, out of the response body
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    UNPROCESSABLE = "unprocessable"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for logs only; never rendered into responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    place_id: str | None = None


class YourPlacesError(Exception):
    """Base exception for all YourPlaces errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status


# ─── Owner-visible Errors (400-level) ───────────────────────────

class ResourceNotFoundError(YourPlacesError):
    """Referenced user or place does not exist."""
    def __init__(
        self, resource_type: str, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"Could not find {resource_type.lower()} for the provided id.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type


class ForbiddenError(YourPlacesError):
    """Caller is not the owner of the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class AuthenticationError(YourPlacesError):
    """Missing, malformed or expired bearer token."""
    def __init__(
        self, message: str = "Authentication failed.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(YourPlacesError):
    """Unknown email or wrong password at login."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials, could not log you in.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class UnprocessableAddressError(YourPlacesError):
    """Geocoding failed or produced no result."""
    def __init__(
        self,
        message: str = "Could not find location for the specified address.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNPROCESSABLE_ADDRESS", ErrorCategory.UNPROCESSABLE,
            ErrorSeverity.WARNING, context, 422,
        )


class ConflictError(YourPlacesError):
    """Duplicate unique key."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 422,
        )


class DuplicateEmailError(ConflictError):
    """Signup with an email that is already registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User exists already, please login instead.",
            "DUPLICATE_EMAIL", context,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(YourPlacesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class TransactionConflictError(DatabaseError):
    """Concurrent modification or serialization failure; safe to retry."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "commit", context)
        self.code = "TRANSACTION_CONFLICT"
