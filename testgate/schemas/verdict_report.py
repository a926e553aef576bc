"""Verdict Report Schemas — Pydantic models handed to reporters.

Invariants:
    - active=False ⇔ reason is a non-empty string
    - Reports are serializable with model_dump()/model_dump_json()
"""

from pydantic import BaseModel, Field, model_validator

from testgate.core.verdict import ActivationVerdict


class VerdictReport(BaseModel):
    """One decided test, ready to display next to its name."""
    test_path: str = Field(min_length=1)
    active: bool
    reason: str | None = None

    @model_validator(mode="after")
    def check_reason(self) -> "VerdictReport":
        if self.active and self.reason is not None:
            raise ValueError("active reports carry no reason")
        if not self.active and not (self.reason and self.reason.strip()):
            raise ValueError("inactive reports require a reason")
        return self

    @classmethod
    def from_verdict(cls, test_path: str, verdict: ActivationVerdict) -> "VerdictReport":
        if verdict.active:
            return cls(test_path=test_path, active=True)
        return cls(test_path=test_path, active=False, reason=verdict.reason)
