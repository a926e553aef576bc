"""Collaborator Protocols — contracts for pluggable filters and verdict extensions.

Invariants:
    - Core never imports concrete extensions — collaborators arrive through
      ActivationConfig or Suite.extensions
    - VerdictExtension.evaluate may return a verdict or an awaitable of one
    - Only VerdictExtension subclasses are consulted by the extension fold;
      any other registered object is ignored, even one with an evaluate()
      method (the registry is shared with unrelated capabilities)

Design Decisions:
    - VerdictExtension is a closed ABC, selected by nominal isinstance
    - TestFilter stays a Protocol: filters are only ever called, never selected
"""

from abc import ABC, abstractmethod
from fnmatch import fnmatchcase
from typing import Awaitable, Iterable, Protocol

from testgate.core.domain_types import FilterResult, TestPath
from testgate.core.verdict import ActivationVerdict


class VerdictExtension(ABC):
    """Pluggable veto/affirm step run after the built-in rules pass."""

    @abstractmethod
    def evaluate(
        self, path: TestPath,
    ) -> ActivationVerdict | Awaitable[ActivationVerdict]:
        """Verdict for the test at `path`; may be a coroutine."""


class TestFilter(Protocol):
    """Description-level inclusion filter."""
    def filter(self, path: TestPath) -> FilterResult: ...


class PathPatternFilter:
    """Includes tests whose path matches any of the glob patterns.

    An empty pattern list includes everything.
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns = tuple(p for p in (p.strip() for p in patterns) if p)

    def __repr__(self) -> str:
        return f"PathPatternFilter({list(self.patterns)!r})"

    def filter(self, path: TestPath) -> FilterResult:
        if not self.patterns:
            return FilterResult.INCLUDE
        if any(fnmatchcase(path, pattern) for pattern in self.patterns):
            return FilterResult.INCLUDE
        return FilterResult.EXCLUDE
