"""Test Case Model — declared tests, their config, and the suites that own them.

Invariants:
    - TestCase and TestCaseConfig are frozen after declaration
    - path is "<suite> -- <ancestors...> -- <name>", unique within a suite
    - all_tags() = own tags ∪ parent's all_tags() ∪ suite tags
    - Suite membership only grows through Suite.declare(); the focus scan
      cache is dropped on every declaration
    - Only root tests carry focus; "f:" on a nested test is just a name

Design Decisions:
    - TestCase compares by identity (eq=False): it holds a back-reference to
      its suite, which holds the test back
    - Name prefixes carry conventions: "!" disables, "f:" focuses
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable

from testgate.core.domain_types import (
    BANG_PREFIX, FOCUS_PREFIX, PATH_SEPARATOR, Severity, TestPath,
)
from testgate.core.verdict import ACTIVE, ActivationVerdict


def _always_active(test_case: "TestCase") -> ActivationVerdict:
    return ACTIVE


def _always_enabled(test_case: "TestCase") -> bool:
    return True


@dataclass(frozen=True)
class TestCaseConfig:
    """Per-test policy data supplied at declaration time."""

    __test__ = False

    # Tri-state enable flag; Inactive carries the cause
    enabled_or_cause: ActivationVerdict = ACTIVE

    # Tri-state predicate evaluated against the declared test
    enabled_or_cause_if: Callable[["TestCase"], ActivationVerdict] = _always_active

    enabled: bool = True
    enabled_if: Callable[["TestCase"], bool] = _always_enabled

    # None means Severity.NORMAL
    severity: Severity | None = None

    tags: frozenset[str] = frozenset()


@dataclass(frozen=True, eq=False)
class TestCase:
    """One declared test awaiting an activation decision."""

    __test__ = False

    name: str
    suite: "Suite" = field(repr=False)
    config: TestCaseConfig = field(default_factory=TestCaseConfig)
    parent: "TestCase | None" = field(default=None, repr=False)

    @property
    def path(self) -> TestPath:
        names = [self.name]
        node = self.parent
        while node is not None:
            names.append(node.name)
            node = node.parent
        names.append(self.suite.name)
        return TestPath(PATH_SEPARATOR.join(reversed(names)))

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_bang(self) -> bool:
        return self.name.startswith(BANG_PREFIX)

    @property
    def is_focused(self) -> bool:
        return self.name.startswith(FOCUS_PREFIX)

    def all_tags(self) -> frozenset[str]:
        """Tag Set Resolver: own tags plus everything inherited."""
        inherited = self.parent.all_tags() if self.parent is not None else frozenset()
        return self.config.tags | inherited | self.suite.tags


class Suite:
    """Ordered collection of declared tests plus suite-level tags and extensions."""

    def __init__(
        self,
        name: str,
        tags: frozenset[str] | set[str] = frozenset(),
        extensions: tuple = (),
    ):
        self.name = name
        self.tags = frozenset(tags)
        self.extensions = tuple(extensions)
        self._test_cases: list[TestCase] = []

    def __repr__(self) -> str:
        return f"Suite(name={self.name!r}, tests={len(self._test_cases)})"

    @property
    def test_cases(self) -> tuple[TestCase, ...]:
        return tuple(self._test_cases)

    @property
    def root_tests(self) -> tuple[TestCase, ...]:
        return tuple(t for t in self._test_cases if t.is_root)

    def declare(
        self,
        name: str,
        config: TestCaseConfig | None = None,
        parent: TestCase | None = None,
    ) -> TestCase:
        """Create and register a test case. Drops the focus scan cache."""
        if parent is not None and parent.suite is not self:
            raise ValueError(f"Parent test {parent.path!r} belongs to another suite")
        test_case = TestCase(
            name=name, suite=self, config=config or TestCaseConfig(), parent=parent,
        )
        self._test_cases.append(test_case)
        self.__dict__.pop("focused_tests", None)
        return test_case

    @cached_property
    def focused_tests(self) -> tuple[TestCase, ...]:
        return tuple(t for t in self._test_cases if t.is_root and t.is_focused)
