"""
Tests for structured logging helpers
"""

import json
import logging

from language_resolver.middleware.logging import (
    RequestIdFilter,
    StructuredFormatter,
    get_request_id,
    request_id_var,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("language_resolver.access", logging.INFO, __file__, 1, "GET / - 200", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_base_fields(self):
        data = json.loads(StructuredFormatter().format(_record(request_id="r-1")))
        assert data["level"] == "INFO"
        assert data["logger"] == "language_resolver.access"
        assert data["message"] == "GET / - 200"
        assert data["request_id"] == "r-1"
        assert "timestamp" in data

    def test_language_fields(self):
        record = _record(language_id=3, locale="de", signal="site_routing", status_code=200)
        data = json.loads(StructuredFormatter().format(record))
        assert data["language_id"] == 3
        assert data["locale"] == "de"
        assert data["signal"] == "site_routing"
        assert data["status_code"] == 200

    def test_unknown_extras_are_ignored(self):
        data = json.loads(StructuredFormatter().format(_record(secret="x")))
        assert "secret" not in data


class TestRequestId:
    def test_filter_adds_request_id(self):
        token = request_id_var.set("req-42")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
            assert record.request_id == "req-42"
            assert get_request_id() == "req-42"
        finally:
            request_id_var.reset(token)
