"""Log Output — JSON line shape, allow-listed extras, idempotent setup."""

import json
import logging

from persona_registry.core.errors import NotFound, ErrorContext
from persona_registry.infrastructure.observability import (
    SERVICE_NAME, JSONFormatter, setup_logging,
)


def _record(msg="hola", **extra):
    record = logging.LogRecord(
        "persona_registry.test", logging.WARNING, __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_has_base_fields():
    line = json.loads(JSONFormatter().format(_record("No se encontró la persona")))
    assert line["service"] == SERVICE_NAME
    assert line["level"] == "WARNING"
    assert line["logger"] == "persona_registry.test"
    assert line["message"] == "No se encontró la persona"
    assert "timestamp" in line


def test_error_log_fields_become_json_keys():
    exc = NotFound(ErrorContext(matricula=1234567890, operation="find"))
    line = json.loads(JSONFormatter().format(_record(**exc.log_fields(), path="/persona")))
    assert line["error_code"] == "RESOURCE_NOT_FOUND"
    assert line["category"] == "resource_not_found"
    assert line["matricula"] == 1234567890
    assert line["path"] == "/persona"


def test_unlisted_extras_are_dropped():
    line = json.loads(JSONFormatter().format(_record(curp="ABCD990101HDFRRN09")))
    assert "curp" not in line


def test_setup_logging_twice_installs_one_handler():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("DEBUG", "json")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        for handler in logging.root.handlers[:]:
            if handler not in before:
                logging.root.removeHandler(handler)
        logging.root.setLevel(level)
