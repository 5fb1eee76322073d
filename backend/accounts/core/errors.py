"""Error Hierarchy: typed, categorized exceptions for every accounts failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error knows its own http_status; the transport layer never guesses
    - to_response() always produces {"error": message}
    - Nothing in this hierarchy is retried automatically

Design Decisions:
    - Single hierarchy with AccountsError base: one handler shape at the boundary
      (ADR: uniform error envelope)
    - PersistenceError answers 400 like validation failures today; a uniqueness
      conflict subclass can override http_status (409) without touching handlers
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DECODE = "decode"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    AUTHENTICATION = "authentication"
    CONFIGURATION = "configuration"
    BOOTSTRAP = "bootstrap"
    LISTENER = "listener"


class AccountsError(Exception):
    """Base exception for all accounts errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public error body."""
        return {"error": self.message}


# ─── Request Errors (400-level) ─────────────────────────────────

class DecodeError(AccountsError):
    """Request body is malformed, oversized, or has an unexpected shape."""
    def __init__(self, message: str):
        super().__init__(
            message, "DECODE_ERROR", ErrorCategory.DECODE,
            ErrorSeverity.WARNING, 400,
        )


class ValidationError(AccountsError):
    """A field-level rule was violated."""
    def __init__(self, message: str, field: str | None = None, code: str = "VALIDATION_ERROR"):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class DomainValidationError(ValidationError):
    """An entity failed its own validation rule."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, field, "DOMAIN_VALIDATION_ERROR")


class HashingError(ValidationError):
    """The password hasher could not produce a hash."""
    def __init__(self, message: str):
        super().__init__(message, "password", "HASHING_ERROR")


class PersistenceError(AccountsError):
    """The repository adapter rejected a write."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            message, "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.ERROR, 400,
        )
        self.operation = operation


class InvalidTokenError(AccountsError):
    """A bearer token failed verification."""
    def __init__(self, message: str = "invalid token"):
        super().__init__(
            message, "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


# ─── Process Errors (fatal at startup or runtime) ───────────────

class ConfigurationError(AccountsError):
    """Settings could not be loaded from the environment."""
    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )
        self.fields = fields or []


class BootstrapError(AccountsError):
    """A stage of the dependency graph could not be built."""
    def __init__(self, stage: str, message: str):
        super().__init__(
            f"bootstrap stage '{stage}' failed: {message}",
            "BOOTSTRAP_ERROR", ErrorCategory.BOOTSTRAP,
            ErrorSeverity.CRITICAL, 500,
        )
        self.stage = stage


class ListenerError(AccountsError):
    """The HTTP listener failed to bind or died while serving."""
    def __init__(self, message: str, code: str = "LISTENER_ERROR"):
        super().__init__(
            message, code, ErrorCategory.LISTENER,
            ErrorSeverity.CRITICAL, 500,
        )


class ServerShutdownError(ListenerError):
    """The listener reported an error while shutting down."""
    def __init__(self, message: str):
        super().__init__(f"server shutdown: {message}", "SHUTDOWN_ERROR")
