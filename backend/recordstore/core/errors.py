"""Error Hierarchy — typed, categorized exceptions for all record store failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RecordStoreError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Snapshot errors never reach clients — the store recovers from them locally
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_kind: str | None = None
    record_id: int | None = None
    username: str | None = None
    debug_info: dict[str, Any] | None = None


class RecordStoreError(Exception):
    """Base exception for all record store errors."""

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
                    "record_kind": self.context.record_kind,
                    "record_id": self.context.record_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(RecordStoreError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_kind = resource_type
        ctx.record_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class UserConflictError(RecordStoreError):
    """Registration collides with an existing username or user id."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"A user with this {field} is already registered",
            "USER_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.field = field


class UnknownUserError(RecordStoreError):
    """Login for a username that is not registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            "UNKNOWN_USER", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidPasswordError(RecordStoreError):
    """Login with a registered username and the wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username and/or password",
            "INVALID_PASSWORD", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class CredentialFaultError(RecordStoreError):
    """Stored credential could not be verified (malformed hash)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Stored credentials could not be verified",
            "CREDENTIAL_FAULT", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class InvalidCredentialsError(RecordStoreError):
    """Masked login rejection — hides which check failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PasswordHashingError(RecordStoreError):
    """Password could not be hashed. Fatal for the request only."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"reason": message}
        super().__init__(
            "Password could not be processed",
            "PASSWORD_HASHING_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, ctx, 500,
        )


class SnapshotWriteError(RecordStoreError):
    """Snapshot file could not be written."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot write to {path} failed: {message}",
            "SNAPSHOT_WRITE_FAILED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.WARNING, context, 500,
        )
        self.path = path


class SnapshotReadError(RecordStoreError):
    """Snapshot file is missing or malformed."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot read from {path} failed: {message}",
            "SNAPSHOT_READ_FAILED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.WARNING, context, 500,
        )
        self.path = path


class StoreCorruptedError(RecordStoreError):
    """Store state is unknown after a failed critical section."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Record store unavailable",
            "STORE_CORRUPTED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
