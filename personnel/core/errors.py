"""Error Hierarchy — typed, categorized exceptions for all personnel-records failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PersonnelError base: FastAPI global handler catches all
    - Each failed precondition has its own class so callers can tell an unknown
      employee from an unknown department from a duplicate row
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTEGRITY = "integrity"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    emp_no: int | None = None
    dept_no: str | None = None
    relation: str | None = None
    debug_info: dict[str, Any] | None = None


class PersonnelError(Exception):
    """Base exception for all personnel-records errors."""

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
                    "emp_no": self.context.emp_no,
                    "dept_no": self.context.dept_no,
                    "relation": self.context.relation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(PersonnelError):
    """Referenced identity or composite key does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(PersonnelError):
    """Identity, unique attribute, or composite key already taken."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class NoCurrentRecordError(PersonnelError):
    """No row satisfies the current-filter at the requested date."""
    def __init__(
        self, relation: str, subject: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"No current {relation} found for {subject}",
            "NO_CURRENT_RECORD", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class AmbiguousCurrentStateError(PersonnelError):
    """More than one current row where exactly one was expected."""
    def __init__(
        self, relation: str, subject: str, count: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Expected one current {relation} for {subject}, found {count}",
            "AMBIGUOUS_CURRENT_STATE", ErrorCategory.INTEGRITY,
            ErrorSeverity.ERROR, context, 409,
        )
        self.count = count


class ValidationFailedError(PersonnelError):
    """Request input rejected by a business-level validation rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PersonnelError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
