"""Tests for core.logging — request id stamping and the JSON record shape."""

import json
import logging

import pytest

from core.logging import SERVICE_NAME, RequestIdFilter, configure_logging, request_id_ctx


def _record(**extra):
    record = logging.LogRecord("api.test", logging.INFO, __file__, 1, "result created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRequestIdFilter:

    def test_outside_a_request_id_is_none(self):
        record = _record()
        assert RequestIdFilter().filter(record)
        assert record.request_id is None

    def test_current_request_id_is_copied(self):
        token = request_id_ctx.set("req-42")
        try:
            record = _record()
            RequestIdFilter().filter(record)
        finally:
            request_id_ctx.reset(token)
        assert record.request_id == "req-42"

    def test_explicit_request_id_is_kept(self):
        token = request_id_ctx.set("req-42")
        try:
            record = _record(request_id="from-handler")
            RequestIdFilter().filter(record)
        finally:
            request_id_ctx.reset(token)
        assert record.request_id == "from-handler"


def test_configure_logging_writes_json_lines(tmp_path, restore_root_logger):
    configure_logging("info", log_dir=str(tmp_path))

    token = request_id_ctx.set("req-7")
    try:
        logging.getLogger("api.v1.endpoints.results").info("result created", extra={"result_id": "R1"})
    finally:
        request_id_ctx.reset(token)
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "app.log").read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])

    assert entry["message"] == "result created"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "api.v1.endpoints.results"
    assert entry["service"] == SERVICE_NAME
    assert entry["request_id"] == "req-7"
    assert entry["result_id"] == "R1"
    assert "timestamp" in entry
