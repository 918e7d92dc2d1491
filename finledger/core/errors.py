"""Error Hierarchy: every failure the API can report, with its code and HTTP status.

Invariants:
    - Each concrete error fixes code, category, severity and http_status as class attributes;
      instances only vary in message and context
    - to_response() is the one REST error envelope: {"error": {code, message, ...}}
    - Messages never contain password material, hashes or SQL

Design Decisions:
    - Class attributes over constructor arguments: the table of codes reads top to bottom
      and handlers can match on type or on code
    - EmailTakenError is the single CONFLICT: signup and profile update raise the same thing
    - ErrorContext.user_id is for logs only; to_response() exposes resource_id at most
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Who hit the error and on what; attached to logs, partly to responses."""
    user_id: int | None = None
    resource_id: int | None = None
    debug_info: dict[str, Any] | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FinLedgerError(Exception):
    """Base for all errors surfaced to API clients."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.occurred_at.isoformat(),
        }
        if self.context.resource_id is not None:
            body["context"] = {"resource_id": self.context.resource_id}
        return {"error": body}


def _with_resource(context: ErrorContext | None, resource_id: int) -> ErrorContext:
    context = context or ErrorContext()
    context.resource_id = resource_id
    return context


# 4xx ---------------------------------------------------------------------------

class ResourceNotFoundError(FinLedgerError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            _with_resource(context, resource_id),
        )
        self.resource_type = resource_type


class UnauthorizedAccessError(FinLedgerError):
    """The resource exists but belongs to another user."""
    code = "UNAUTHORIZED_ACCESS"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unauthorized access to {resource_type} '{resource_id}'",
            _with_resource(context, resource_id),
        )
        self.resource_type = resource_type


class AdminRequiredError(FinLedgerError):
    code = "ADMIN_REQUIRED"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Administrator privileges required", context)


class IncorrectPasswordError(FinLedgerError):
    """Current-password confirmation failed (password change, account removal)."""
    code = "PASSWORD_INCORRECT"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("The password is incorrect", context)


class InvalidCredentialsError(FinLedgerError):
    """Login failed; deliberately silent on which half was wrong."""
    code = "INVALID_CREDENTIALS"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Incorrect email or password", context)


class AuthenticationRequiredError(FinLedgerError):
    code = "AUTHENTICATION_REQUIRED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Authentication required", context)


class InvalidTokenError(FinLedgerError):
    """Token malformed, expired, badly signed, or naming a user that no longer exists."""
    code = "INVALID_TOKEN"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invalid or expired access token", context)


class EmailTakenError(FinLedgerError):
    code = "EMAIL_TAKEN"
    category = ErrorCategory.CONFLICT
    http_status = 409

    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(f"Email '{email}' is already registered", context)
        self.email = email


class InvalidSortFieldError(FinLedgerError):
    code = "INVALID_SORT_FIELD"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(
        self, sort_field: str, allowed: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot sort by '{sort_field}'. Allowed: {', '.join(allowed)}", context,
        )
        self.sort_field = sort_field
        self.allowed = allowed


# 5xx ---------------------------------------------------------------------------

class DatabaseError(FinLedgerError):
    """Storage failed; the message is generic, the cause stays in the logs."""
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.operation = operation
