"""Activation Engine — the single entry point deciding whether a test runs.

Invariants:
    - Built-in rules run first; if any disables, extensions are never consulted
    - Only an Active built-in result is folded with extension verdicts
    - Logging happens here, after the pure rule chain has produced its verdict
    - Same TestCase + same ActivationConfig ⇒ identical verdict and reason text
      (provided the test's predicates and extensions are deterministic)

Design Decisions:
    - Async because extensions may await remote lookups; the rule chain itself
      stays synchronous in core/
    - decide_suite gathers per-test decisions concurrently; asyncio.gather
      keeps results in declaration order
"""

import asyncio
import logging

from testgate.core.activation_config import ActivationConfig
from testgate.core.activation_rules import first_failing_rule
from testgate.core.domain_types import Rule
from testgate.core.test_case import Suite, TestCase
from testgate.core.verdict import ACTIVE, ActivationVerdict, fold_verdicts
from testgate.schemas.verdict_report import VerdictReport
from testgate.services.extension_fold import (
    collect_extension_verdicts,
    resolve_extensions,
)

logger = logging.getLogger(__name__)


def _log_inactive(test_case: TestCase, rule: Rule, verdict: ActivationVerdict) -> None:
    logger.debug(
        verdict.reason,
        extra={"test_path": test_case.path, "rule": rule.value},
    )


async def is_active(test_case: TestCase, config: ActivationConfig) -> ActivationVerdict:
    """Decide one test: built-in rules, then the extension fold."""
    failing = first_failing_rule(test_case, config)
    if failing is not None:
        rule, verdict = failing
        _log_inactive(test_case, rule, verdict)
        return verdict

    extensions = resolve_extensions(test_case.suite, config)
    if not extensions:
        return ACTIVE

    verdicts = await collect_extension_verdicts(extensions, test_case.path)
    verdict = fold_verdicts([ACTIVE, *verdicts])
    if not verdict.active:
        _log_inactive(test_case, Rule.EXTENSIONS, verdict)
    return verdict


async def decide_suite(suite: Suite, config: ActivationConfig) -> list[VerdictReport]:
    """Decide every declared test of a suite. Reports follow declaration order."""
    test_cases = suite.test_cases
    verdicts = await asyncio.gather(*(is_active(t, config) for t in test_cases))
    reports = [
        VerdictReport.from_verdict(t.path, v) for t, v in zip(test_cases, verdicts)
    ]
    inactive = sum(1 for r in reports if not r.active)
    logger.info(
        "Suite '%s': %d active, %d inactive",
        suite.name, len(reports) - inactive, inactive,
    )
    return reports
