"""Error Hierarchy — typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the same envelope shape as successful responses (success flag + message)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FantasyError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    details: list[str] = field(default_factory=list)
    debug_info: dict[str, Any] | None = None


class FantasyError(Exception):
    """Base exception for all API errors."""

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
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": list(self.context.details),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(FantasyError):
    """One or more input rules failed."""
    def __init__(self, messages: list[str] | str, context: ErrorContext | None = None):
        if isinstance(messages, str):
            messages = [messages]
        ctx = context or ErrorContext()
        ctx.details = list(messages)
        super().__init__(
            " ".join(messages), "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.messages = list(messages)


class BusinessRuleError(FantasyError):
    """Operation is not allowed in the current state."""
    def __init__(self, message: str, code: str = "BUSINESS_RULE", context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(FantasyError):
    """Missing, invalid or expired credentials."""
    def __init__(
        self, message: str = "Authentication required",
        code: str = "AUTHENTICATION_REQUIRED", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(FantasyError):
    """Authenticated user lacks the required role."""
    def __init__(
        self, message: str = "You do not have permission to perform this action",
        code: str = "FORBIDDEN", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(FantasyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: Any, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = resource_type
        ctx.entity_id = str(resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class ConflictError(FantasyError):
    """Uniqueness or state conflict with existing data."""
    def __init__(self, message: str, code: str = "CONFLICT", context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AccountLockedError(FantasyError):
    """Login refused while the account lock is active."""
    def __init__(self, locked_until: datetime | None, context: ErrorContext | None = None):
        message = (
            f"Account is locked until {locked_until.isoformat()}"
            if locked_until else "Account is locked"
        )
        super().__init__(
            message,
            "ACCOUNT_LOCKED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 423,
        )
        self.locked_until = locked_until


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FantasyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
