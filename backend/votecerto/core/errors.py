"""Error Hierarchy — typed, categorized exceptions for all VoteCerto failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the REST envelope {"error": message}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with VoteCertoError base: one global handler maps all (ADR: uniform error shape)
    - Messages are user-facing and in pt-BR (the UI language); codes stay in English for logs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability (never sent to the client)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    sessao_id: int | None = None
    debug_info: dict[str, Any] | None = None


class VoteCertoError(Exception):
    """Base exception for all VoteCerto errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(VoteCertoError):
    """Malformed or missing input."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            context, 400,
        )


class SessionNotLiveError(VoteCertoError):
    """Voting session is inactive or outside its time window."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A sessão de votação não está ativa",
            "SESSION_NOT_LIVE", ErrorCategory.BUSINESS_RULE,
            context, 400,
        )


class AuthenticationError(VoteCertoError):
    """Missing, invalid or expired credentials."""
    def __init__(
        self, message: str = "Não autorizado", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_ERROR", ErrorCategory.AUTHENTICATION,
            context, 401,
        )


class AuthorizationError(VoteCertoError):
    """Role or ownership does not allow the action."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            context, 403,
        )


class ResourceNotFoundError(VoteCertoError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            context, 404,
        )


class ConflictError(VoteCertoError):
    """Uniqueness violation (duplicate vote, code, name, email...)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(VoteCertoError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Erro interno do servidor",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            context, 500,
        )
        self.detail = f"Database {operation} failed: {message}"
        self.operation = operation
