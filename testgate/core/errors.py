"""Error Hierarchy — typed, categorized exceptions for all testgate failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors are CRITICAL: raised once while building the
      activation config, never per test
    - Contract errors (bad verdicts) are ERROR: the extension fold converts them
      into Inactive verdicts instead of letting them escape
    - to_report() produces a flat dict for reporters and log sinks

Design Decisions:
    - Single hierarchy with TestGateError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    CONTRACT = "contract"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    test_path: str | None = None
    extension_name: str | None = None
    debug_info: dict[str, Any] | None = None


class TestGateError(Exception):
    """Base exception for all testgate errors."""

    __test__ = False  # not a pytest test class

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

    def to_report(self) -> dict:
        """Convert to a flat error report."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "test_path": self.context.test_path,
                    "extension_name": self.context.extension_name,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Configuration Errors ───────────────────────────────────────

class TagExpressionError(TestGateError):
    """Tag policy expression is malformed."""
    def __init__(
        self, message: str, expression: str, position: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid tag expression {expression!r} at position {position}: {message}",
            "TAG_EXPRESSION_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context,
        )
        self.expression = expression
        self.position = position


class InvalidSeverityError(TestGateError):
    """Severity label does not name a known level."""
    def __init__(
        self, label: str, allowed: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unknown severity {label!r}. Expected one of: {', '.join(allowed)}",
            "SEVERITY_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context,
        )
        self.label = label


# ─── Contract Errors ────────────────────────────────────────────

class InvalidVerdictError(TestGateError):
    """A verdict violates its contract (blank reason, wrong type)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VERDICT_INVALID", ErrorCategory.CONTRACT,
            ErrorSeverity.ERROR, context,
        )
