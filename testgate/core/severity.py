"""Severity Gate — passes tests whose severity reaches the configured minimum."""

from testgate.core.domain_types import Severity

DEFAULT_SEVERITY = Severity.NORMAL
DEFAULT_THRESHOLD = Severity.MINOR


def effective_severity(severity: Severity | None) -> Severity:
    return severity if severity is not None else DEFAULT_SEVERITY


def severity_enabled(severity: Severity | None, threshold: Severity) -> bool:
    return effective_severity(severity).level >= threshold.level
