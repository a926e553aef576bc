"""Extension Fold — resolves, awaits and folds pluggable verdict extensions.

Invariants:
    - Resolution order: process-wide extensions first, then suite-local ones
    - Only VerdictExtension subclasses are consulted
    - Extensions run sequentially in registration order; reasons keep that order
    - A failing extension never raises out of the fold: it becomes an Inactive
      verdict naming the extension and the error, logged at ERROR
"""

import inspect
import logging

from testgate.core.activation_config import ActivationConfig
from testgate.core.collaborator_protocols import VerdictExtension
from testgate.core.domain_types import TestPath
from testgate.core.errors import InvalidVerdictError
from testgate.core.test_case import Suite
from testgate.core.verdict import ActivationVerdict, Inactive, is_verdict

logger = logging.getLogger(__name__)


def extension_name(extension: object) -> str:
    return getattr(extension, "name", None) or type(extension).__name__


def resolve_extensions(
    suite: Suite, config: ActivationConfig,
) -> list[VerdictExtension]:
    """Process-wide then suite-local extensions, other capabilities dropped."""
    return [
        ext for ext in (*config.extensions, *suite.extensions)
        if isinstance(ext, VerdictExtension)
    ]


async def evaluate_extension(
    extension: VerdictExtension, path: TestPath,
) -> ActivationVerdict:
    """Run one extension, awaiting if needed. Failures degrade to Inactive."""
    name = extension_name(extension)
    try:
        result = extension.evaluate(path)
        if inspect.isawaitable(result):
            result = await result
        if not is_verdict(result):
            raise InvalidVerdictError(
                f"returned {type(result).__name__} instead of an ActivationVerdict",
            )
        return result
    except Exception as e:
        logger.error(
            "Extension '%s' failed for %s: %s", name, path, e,
            extra={
                "test_path": path, "extension": name,
                "error_code": getattr(e, "code", "EXTENSION_FAILED"),
            },
            exc_info=True,
        )
        detail = str(e) or type(e).__name__
        return Inactive(f"{path} is disabled by failing extension {name}: {detail}")


async def collect_extension_verdicts(
    extensions: list[VerdictExtension], path: TestPath,
) -> list[ActivationVerdict]:
    """Evaluate extensions one at a time, in registration order."""
    verdicts = []
    for extension in extensions:
        verdicts.append(await evaluate_extension(extension, path))
    return verdicts
