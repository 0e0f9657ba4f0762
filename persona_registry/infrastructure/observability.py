"""Log Output — one JSON object per line for the persona registry process.

Invariants:
    - Every line carries service, timestamp (record creation time, UTC), level, logger, message
    - Structured extras are copied only from an allow-list; a curp never appears as a field
    - Calling setup_logging again replaces the handler it installed earlier (no duplicate lines)

Design Decisions:
    - stdlib logging with a custom Formatter: the error handler passes
      PersonaRegistryError.log_fields() as `extra`, so log queries can filter on
      error_code/category without parsing messages
    - fmt="text" for local runs and tests; anything else selects JSON
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "persona-registry"

_EXTRA_KEYS = (
    "error_code", "category", "severity", "operation",
    "method", "path", "matricula", "attempt",
)


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "service": SERVICE_NAME,
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(extract_extras(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def extract_extras(record: logging.LogRecord) -> dict:
    """Allow-listed `extra` fields present on the record."""
    return {
        key: record.__dict__[key]
        for key in _EXTRA_KEYS
        if record.__dict__.get(key) is not None
    }


class _RegistryHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the service log handler on the root logger."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _RegistryHandler):
            logging.root.removeHandler(existing)

    handler = _RegistryHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    else:
        handler.setFormatter(JSONFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
