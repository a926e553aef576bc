"""Bootstrap — builds the process-wide ActivationConfig once, before a run.

Invariants:
    - Logging is configured from settings before the config is compiled
    - A malformed tag expression surfaces here, once, as TagExpressionError
    - Reloading means calling get_settings.cache_clear() and bootstrapping again,
      strictly between runs
"""

import logging
from typing import Iterable

from testgate.config import Settings, get_settings
from testgate.core.activation_config import ActivationConfig
from testgate.core.collaborator_protocols import TestFilter
from testgate.core.errors import TagExpressionError
from testgate.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def load_activation_config(
    filters: Iterable[TestFilter] = (),
    extensions: Iterable[object] = (),
    settings: Settings | None = None,
    configure_logging: bool = True,
) -> ActivationConfig:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    try:
        config = ActivationConfig.from_settings(settings, filters, extensions)
    except TagExpressionError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        raise
    logger.info(
        "Activation config loaded: tags=%s min_severity=%s filters=%d extensions=%d",
        config.tag_policy, config.min_severity.value,
        len(config.filters), len(config.extensions),
    )
    return config
