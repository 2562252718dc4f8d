"""JSON log formatter — base fields plus request extras."""

import json
import logging

from facturas_os.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "facturas_os.test", logging.INFO, __file__, 1, "Fetched %d invoices", (2,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "facturas_os.test"
    assert out["message"] == "Fetched 2 invoices"
    assert "timestamp" in out


def test_json_formatter_includes_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(mes="2024-03", row_count=2, unrelated="x"),
    ))
    assert out["mes"] == "2024-03"
    assert out["row_count"] == 2
    assert "unrelated" not in out


def test_setup_logging_replaces_previous_handler():
    first = setup_logging("DEBUG", "text")
    second = setup_logging("INFO", "json")
    assert first not in logging.root.handlers
    assert second in logging.root.handlers
    assert isinstance(second.formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(second)
