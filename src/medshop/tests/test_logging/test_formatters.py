import json
import logging
import sys

from medshop.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(exc_info=None):
    return logging.LogRecord("medshop", logging.INFO, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.order_id = 42
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["order_id"] == 42
    assert "timestamp" in data
    assert "version" in data


def test_json_formatter_stringifies_non_serializable_extra():
    rec = make_record()

    class Money:
        def __str__(self):
            return "12.50"

    rec.stored_total = Money()

    data = json.loads(JsonFormatter(env="dev").format(rec))

    assert data["stored_total"] == "12.50"
    assert data["service"] == "medshop-api"


def test_json_formatter_includes_traceback():
    try:
        raise ValueError("boom")
    except ValueError:
        rec = make_record(exc_info=sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))

    assert "ValueError: boom" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record()
    rec.request_id = "rid-7"

    line = ColorFormatter().format(rec)

    assert "rid-7" in line
    assert line.endswith("hello tester")
    assert "\033[32m" in line
