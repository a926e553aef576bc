"""Built-in Activation Rules — the fixed, ordered, short-circuiting rule chain.

Invariants:
    - All functions are PURE: no IO, no async, no logging, no side effects
    - Each check returns an Inactive verdict on violation, None otherwise
    - BUILTIN_RULES is in precedence order; evaluation stops at the first verdict
    - Every reason produced here starts with the test path; tri-state verdicts
      from the test's own config are returned unchanged

Design Decisions:
    - Pure functions over method dispatch: testable without mocks or a logging harness
    - The engine logs the verdict afterwards, keyed by the Rule that fired
"""

from typing import Callable

from testgate.core.activation_config import ActivationConfig
from testgate.core.domain_types import FilterResult, Rule
from testgate.core.focus import is_suppressed_by_focus
from testgate.core.severity import severity_enabled
from testgate.core.test_case import TestCase
from testgate.core.verdict import ACTIVE, ActivationVerdict, Inactive

RuleCheck = Callable[[TestCase, ActivationConfig], ActivationVerdict | None]


def _inactive(test_case: TestCase, why: str) -> Inactive:
    return Inactive(f"{test_case.path} {why}")


def check_name_sentinel(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 1: "!" prefix disables, unless the process opted out."""
    if config.bang_enabled and test_case.is_bang:
        return _inactive(test_case, "is disabled by name sentinel")
    return None


def check_enabled_or_cause(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 2: explicit tri-state flag, cause preserved verbatim."""
    verdict = test_case.config.enabled_or_cause
    return None if verdict.active else verdict


def check_enabled_or_cause_if(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 3: tri-state predicate, cause preserved verbatim."""
    verdict = test_case.config.enabled_or_cause_if(test_case)
    return None if verdict.active else verdict


def check_enabled_flag(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 4: plain boolean flag."""
    if not test_case.config.enabled:
        return _inactive(test_case, "is disabled by enabled flag")
    return None


def check_enabled_if(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 5: boolean predicate."""
    if not test_case.config.enabled_if(test_case):
        return _inactive(test_case, "is disabled by enabledIf predicate")
    return None


def check_tag_policy(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 6: compiled tag expression against own + inherited tags."""
    if not config.tag_policy.evaluate(test_case.all_tags()):
        return _inactive(test_case, "is disabled by tag policy")
    return None


def check_filters(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 7: every filter must include the test path."""
    path = test_case.path
    included = all(f.filter(path) == FilterResult.INCLUDE for f in config.filters)
    if not included:
        return _inactive(test_case, "is excluded by filter")
    return None


def check_focus(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 8: unfocused root tests yield to focused siblings."""
    if is_suppressed_by_focus(test_case):
        return _inactive(test_case, "is suppressed by sibling focus")
    return None


def check_severity(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict | None:
    """Rule 9: severity (default NORMAL) must reach the threshold."""
    if not severity_enabled(test_case.config.severity, config.min_severity):
        return _inactive(test_case, "is below severity threshold")
    return None


BUILTIN_RULES: tuple[tuple[Rule, RuleCheck], ...] = (
    (Rule.NAME_SENTINEL, check_name_sentinel),
    (Rule.ENABLED_OR_CAUSE, check_enabled_or_cause),
    (Rule.ENABLED_OR_CAUSE_IF, check_enabled_or_cause_if),
    (Rule.ENABLED_FLAG, check_enabled_flag),
    (Rule.ENABLED_IF, check_enabled_if),
    (Rule.TAG_POLICY, check_tag_policy),
    (Rule.FILTERS, check_filters),
    (Rule.FOCUS, check_focus),
    (Rule.SEVERITY, check_severity),
)


def first_failing_rule(
    test_case: TestCase, config: ActivationConfig,
) -> tuple[Rule, ActivationVerdict] | None:
    """Run the chain. Returns the first (rule, verdict) that disables, or None."""
    for rule, check in BUILTIN_RULES:
        verdict = check(test_case, config)
        if verdict is not None:
            return rule, verdict
    return None


def is_active_internal(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict:
    """Verdict of the built-in rules alone, without extensions."""
    failing = first_failing_rule(test_case, config)
    return ACTIVE if failing is None else failing[1]
