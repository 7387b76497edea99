"""Tests for structured logging setup."""

import json
import logging

from mediafetch.utils.logging import JSONFormatter, RequestContextFilter, request_id_var, setup_logging


def make_record(**extra):
    record = logging.LogRecord("mediafetch.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras_and_request_id():
    token = request_id_var.set("req-1")
    try:
        record = make_record(endpoint="/api/search", status_code=200)
        RequestContextFilter().filter(record)
        payload = json.loads(JSONFormatter().format(record))
    finally:
        request_id_var.reset(token)

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["endpoint"] == "/api/search"
    assert payload["status_code"] == 200
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_without_request_context():
    record = make_record()
    RequestContextFilter().filter(record)
    payload = json.loads(JSONFormatter().format(record))
    assert "request_id" not in payload


def test_setup_logging_configures_root(tmp_path):
    log_file = tmp_path / "app.log"
    root = logging.getLogger()
    saved = (root.handlers[:], root.level)
    try:
        setup_logging(level="debug", json_format=False, log_file=str(log_file))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert logging.getLogger("httpx").level == logging.WARNING

        logging.getLogger("mediafetch.test").info("written")
        for handler in root.handlers:
            handler.flush()
        assert "written" in log_file.read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
