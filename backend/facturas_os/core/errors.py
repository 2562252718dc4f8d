"""Error Hierarchy — typed, categorized exceptions for all Consulta failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - No driver/SQL details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ConsultaError base: FastAPI global handler catches all (ADR: uniform error shape)
    - User-facing messages in Spanish, matching the CSV labels consumers already read
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    month: str | None = None


class ConsultaError(Exception):
    """Base exception for all Consulta errors."""

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
                "context": {"mes": self.context.month},
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

INVALID_MONTH_MESSAGE = "Parámetro 'mes' inválido (formato YYYY-MM)"


class InvalidMonthError(ConsultaError):
    """The 'mes' query parameter is missing, malformed or not a real month."""
    def __init__(self, value: str | None, context: ErrorContext | None = None):
        super().__init__(
            INVALID_MONTH_MESSAGE, "INVALID_MONTH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.value = value


class NoDataError(ConsultaError):
    """The requested month has no invoices to export."""
    def __init__(self, month: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.month = month
        super().__init__(
            "No hay datos para ese mes",
            "NO_DATA", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ConsultaError):
    """Database operation failed (raised by the session manager and queries)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class QueryFailedError(ConsultaError):
    """Endpoint-level failure with a generic, client-safe message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "QUERY_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
