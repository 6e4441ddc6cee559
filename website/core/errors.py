"""Error Hierarchy — typed, categorized exceptions for the website's failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; configuration errors are critical
    - to_response() produces the JSON envelope used by the tools API
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WebsiteError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context carried alongside an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class WebsiteError(Exception):
    """Base exception for all website errors."""

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
        """Convert to the standard JSON error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "request_id": self.context.request_id,
                    "path": self.context.path,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ToolInputError(WebsiteError):
    """A tools API argument is not one of the supported values."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_TOOL_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Host Errors (500-level) ────────────────────────────────────

class ConfigurationError(WebsiteError):
    """Host could not be built from the current configuration."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid configuration for '{setting}': {message}",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting
