"""Focus Resolver — a focused root test silences its unfocused sibling roots.

Invariants:
    - A suite has focus iff one of its root tests carries the "f:" marker;
      the marker on a nested test has no effect
    - Only root-level, unfocused tests are suppressed; nested tests are
      governed by their parents
    - Read-only: the scan is cached on the suite, never mutates membership
"""

from testgate.core.test_case import Suite, TestCase


def focused_tests(suite: Suite) -> tuple[TestCase, ...]:
    return suite.focused_tests


def suite_has_focus(suite: Suite) -> bool:
    return bool(focused_tests(suite))


def is_suppressed_by_focus(test_case: TestCase) -> bool:
    """True when a sibling holds focus and this root test does not."""
    return (
        test_case.is_root
        and not test_case.is_focused
        and suite_has_focus(test_case.suite)
    )
