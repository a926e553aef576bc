"""Structured Logging — JSON formatter and setup for decision observability.

Invariants:
    - All logs include timestamp (the record's creation time), level, logger
      name, and message
    - Extra fields (test_path, rule, extension, error_code) surfaced when present
    - JSON format by default, human-readable when fmt != "json"
    - setup_logging owns at most one root handler, named HANDLER_NAME; calling
      it again (config reload between runs) replaces that handler in place

Design Decisions:
    - setup_logging is called by the host runner or bootstrap, never by the engine
    - Handlers installed by the host are left untouched
"""

import logging
import json
from datetime import datetime, timezone

HANDLER_NAME = "testgate"

DECISION_EXTRAS = ("test_path", "rule", "extension", "error_code")


class JSONFormatter(logging.Formatter):
    """Format decision logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in DECISION_EXTRAS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def _installed_handlers() -> list[logging.Handler]:
    return [h for h in logging.root.handlers if h.get_name() == HANDLER_NAME]


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the testgate root handler. Returns it."""
    for old in _installed_handlers():
        logging.root.removeHandler(old)
        old.close()

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
