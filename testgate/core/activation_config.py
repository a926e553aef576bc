"""Activation Config — immutable snapshot of process-wide decision inputs.

Invariants:
    - Frozen: tag policy, filters, extensions and thresholds never change mid-run
    - tag_policy is compiled exactly once, when the snapshot is built;
      a malformed expression raises TagExpressionError here, before any decision
    - Built explicitly and passed to the engine — no ambient lookup in the rules
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from testgate.core.collaborator_protocols import PathPatternFilter, TestFilter
from testgate.core.domain_types import Severity
from testgate.core.severity import DEFAULT_THRESHOLD
from testgate.core.tag_expression import MatchAll, TagExpression, build_tag_policy

if TYPE_CHECKING:
    from testgate.config import Settings


@dataclass(frozen=True)
class ActivationConfig:
    tag_policy: TagExpression = MatchAll()
    filters: tuple[TestFilter, ...] = ()
    extensions: tuple[object, ...] = ()
    min_severity: Severity = DEFAULT_THRESHOLD
    bang_enabled: bool = True

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        filters: Iterable[TestFilter] = (),
        extensions: Iterable[object] = (),
    ) -> "ActivationConfig":
        """Compile settings into a snapshot. Raises TagExpressionError."""
        all_filters = list(filters)
        if settings.test_filters:
            all_filters.append(PathPatternFilter(settings.test_filters))
        return cls(
            tag_policy=build_tag_policy(
                settings.tags, settings.include_tags, settings.exclude_tags,
            ),
            filters=tuple(all_filters),
            extensions=tuple(extensions),
            min_severity=settings.min_severity,
            bang_enabled=not settings.bang_disable,
        )
