"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TestPath is the hierarchical descriptor of a test, unique within a suite
    - Severity is totally ordered by level: TRIVIAL < MINOR < NORMAL < CRITICAL < BLOCKER
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON reports without custom encoders
"""

from enum import Enum
from typing import NewType

from testgate.core.errors import InvalidSeverityError


# ─── Identity Types ──────────────────────────────────────────────

TestPath = NewType("TestPath", str)

PATH_SEPARATOR = " -- "
BANG_PREFIX = "!"
FOCUS_PREFIX = "f:"


# ─── Enums ───────────────────────────────────────────────────────

class Severity(str, Enum):
    """Test importance, gated against a configured minimum."""
    TRIVIAL = "trivial"
    MINOR = "minor"
    NORMAL = "normal"
    CRITICAL = "critical"
    BLOCKER = "blocker"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]

    @classmethod
    def parse(cls, label: "str | Severity") -> "Severity":
        """Case-insensitive lookup by label. Raises InvalidSeverityError."""
        if isinstance(label, Severity):
            return label
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            raise InvalidSeverityError(
                str(label), [s.value for s in cls],
            ) from None


_SEVERITY_LEVELS = {
    Severity.TRIVIAL: 1,
    Severity.MINOR: 2,
    Severity.NORMAL: 3,
    Severity.CRITICAL: 4,
    Severity.BLOCKER: 5,
}


class FilterResult(str, Enum):
    """Answer of a description-level filter."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


class Rule(str, Enum):
    """Built-in activation rules in precedence order — used in log extras."""
    NAME_SENTINEL = "name_sentinel"
    ENABLED_OR_CAUSE = "enabled_or_cause"
    ENABLED_OR_CAUSE_IF = "enabled_or_cause_if"
    ENABLED_FLAG = "enabled_flag"
    ENABLED_IF = "enabled_if"
    TAG_POLICY = "tag_policy"
    FILTERS = "filters"
    FOCUS = "focus"
    SEVERITY = "severity"
    EXTENSIONS = "extensions"
