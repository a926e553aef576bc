"""Activation Verdict — the Active | Inactive(reason) outcome of a decision.

Invariants:
    - Inactive always carries a non-blank reason (enforced at construction)
    - Verdicts are frozen values; they combine only through fold_verdicts
    - fold_verdicts is Active iff every input is Active; otherwise the
      Inactive reasons are concatenated in input order, joined by REASON_SEPARATOR

Design Decisions:
    - Two frozen dataclasses instead of bool + optional string: a disabled
      verdict without a reason cannot be represented
"""

from dataclasses import dataclass
from typing import Iterable

from testgate.core.errors import InvalidVerdictError

REASON_SEPARATOR = "; "


@dataclass(frozen=True)
class Active:
    """The test should run."""

    @property
    def active(self) -> bool:
        return True


@dataclass(frozen=True)
class Inactive:
    """The test should be skipped, for `reason`."""
    reason: str

    def __post_init__(self):
        if not isinstance(self.reason, str) or not self.reason.strip():
            raise InvalidVerdictError("Inactive verdict requires a non-empty reason")

    @property
    def active(self) -> bool:
        return False


ActivationVerdict = Active | Inactive

ACTIVE = Active()


def is_verdict(value: object) -> bool:
    return isinstance(value, (Active, Inactive))


def fold_verdicts(verdicts: Iterable[ActivationVerdict]) -> ActivationVerdict:
    """Combine verdicts: all Active -> Active, else all reasons joined in order."""
    reasons = [v.reason for v in verdicts if not v.active]
    if not reasons:
        return ACTIVE
    return Inactive(REASON_SEPARATOR.join(reasons))
