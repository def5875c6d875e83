"""Error Hierarchy — typed, categorized exceptions for all TaskShare failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskShareError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - InvalidCredentialsError carries one generic message: never reveals which
      factor (email or password) failed
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_id: str | None = None
    task_list_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskShareError(Exception):
    """Base exception for all TaskShare errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "task_list_id": self.context.task_list_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(TaskShareError):
    """Protected operation invoked without a resolvable acting user."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(TaskShareError):
    """Sign-in with unknown email or wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials!", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class TokenInvalidError(TaskShareError):
    """Bearer token is malformed, tampered, or expired (strict mode only)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication token is invalid or expired",
            "TOKEN_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TaskShareError):
    """Acting user is not a collaborator on the task list."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TaskShareError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class EmailAlreadyRegisteredError(TaskShareError):
    """Sign-up with an email that already belongs to a user."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email '{email}' is already registered",
            "EMAIL_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.email = email


class UnknownOperationError(TaskShareError):
    """Operation name is not registered in the dispatch table."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Operation '{operation}' does not exist.",
            "UNKNOWN_OPERATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation = operation


def validation_details(errors: list[dict]) -> list[dict]:
    """Flatten pydantic error dicts into the {field, message, type} detail shape."""
    return [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in errors
    ]


class OperationArgumentsError(TaskShareError):
    """Operation arguments failed schema validation."""
    def __init__(
        self, operation: str, details: list[dict], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid arguments for '{operation}'",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation = operation
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class MalformedRequestError(OperationArgumentsError):
    """Request body is not an {operation, arguments} envelope."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        super().__init__("request", details, context)
        self.message = "Request body must be {\"operation\": ..., \"arguments\": {...}}"


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(TaskShareError):
    """The task store could not be reached. Not retried; the driver detail is logged only."""
    def __init__(self, stage: str, context: ErrorContext | None = None):
        super().__init__(
            "The task store is unavailable, try again later",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.stage = stage
