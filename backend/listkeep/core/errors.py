"""Error Hierarchy — typed, categorized exceptions for every listkeep failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - StoreError is the only error raised for a failing statement; nothing is retried
    - Not-found on read paths is NOT an exception (empty marker objects instead)
    - to_response() produces a JSON-safe envelope for callers and log sinks

Design Decisions:
    - Single hierarchy with ListKeepError base: callers catch one type at the seam
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    BUSINESS_RULE = "business_rule"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    list_id: int | None = None
    version_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ListKeepError(Exception):
    """Base exception for all listkeep errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "list_id": self.context.list_id,
                    "version_id": self.context.version_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidStateError(ListKeepError):
    """Operation not allowed for the list in its current state."""
    def __init__(
        self, message: str, list_id: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.list_id = list_id
        super().__init__(
            message, "INVALID_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx,
        )
        self.list_id = list_id


# ─── Infrastructure Errors ──────────────────────────────────────

class StoreError(ListKeepError):
    """Relational store statement failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.operation = operation
