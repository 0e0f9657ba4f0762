"""Error Hierarchy — typed, categorized exceptions for all persona registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client input errors are 400-level; storage failures are 500-level
    - DuplicateIdentityCode is 500, not 409 (kept for compatibility with existing clients)
    - message is the raw error text and is the whole response body

Design Decisions:
    - Single hierarchy with PersonaRegistryError base: FastAPI global handler catches all
      (ADR: uniform error handling)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - User-facing messages in Spanish: same texts the service has always returned
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    curp: str | None = None
    matricula: int | None = None
    operation: str | None = None


class PersonaRegistryError(Exception):
    """Base exception for all persona registry errors."""

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

    def log_fields(self) -> dict:
        """Structured fields for the error log line (the curp is never included)."""
        fields = {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "operation": self.context.operation,
            "matricula": self.context.matricula,
        }
        return {k: v for k, v in fields.items() if v is not None}


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidIdentityCode(PersonaRegistryError):
    """Identity code too short or with a non-numeric year."""
    def __init__(self, curp: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.curp = curp
        super().__init__(
            f"CURP inválida '{curp}': {reason}",
            "INVALID_IDENTITY_CODE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.reason = reason


class InvalidQuery(PersonaRegistryError):
    """Lookup attempted without matricula or curp."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Debes proporcionar matricula o curp",
            "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class NotFound(PersonaRegistryError):
    """No persona matches the lookup filter."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No se encontró la persona",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Business Rule Errors ───────────────────────────────────────

class DuplicateIdentityCode(PersonaRegistryError):
    """A persona with this identity code is already stored."""
    def __init__(self, curp: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.curp = curp
        super().__init__(
            f"La CURP {curp} ya existe en la base de datos",
            "DUPLICATE_IDENTITY_CODE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 500,
        )


class EnrollmentNumberExhausted(PersonaRegistryError):
    """Every generated enrollment number collided with a stored one."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"No se pudo asignar una matrícula única tras {attempts} intentos",
            "ENROLLMENT_NUMBER_EXHAUSTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.attempts = attempts


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailable(PersonaRegistryError):
    """Database operation failed or timed out."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
