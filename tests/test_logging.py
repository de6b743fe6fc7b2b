"""Tests for token redaction, logging setup and the httpx logging hooks."""

import io
import json
import logging

import httpx
import pytest
import structlog

from expo_push.middleware.logging import (
    HANDLER_NAME,
    log_request,
    log_response,
    redact_tokens,
    setup_logging,
    teardown_logging,
)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    level = root.level
    yield
    teardown_logging()
    root.setLevel(level)
    structlog.reset_defaults()


class TestRedactTokens:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("to ExpoPushToken[abc123]", "to ExpoPushToken[REDACTED]"),
            ("ExponentPushToken[x] and ExpoPushToken[y]", "ExponentPushToken[REDACTED] and ExpoPushToken[REDACTED]"),
            ("Authorization: Bearer abc.def", "Authorization: Bearer [REDACTED]"),
            ("nothing to hide", "nothing to hide"),
        ],
    )
    def test_redaction(self, text, expected):
        assert redact_tokens(text) == expected


class TestSetupLogging:
    def test_json_lines_on_given_stream(self, restore_root_logging):
        stream = io.StringIO()
        setup_logging(stream=stream)

        logging.getLogger("expo_push.test").info("push_sent", extra={"count": 3})
        structlog.get_logger("expo_push.test").info("receipts_fetched", pending=1)

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert lines[0]["event"] == "push_sent"
        assert lines[0]["count"] == 3
        assert lines[0]["level"] == "info"
        assert lines[1]["event"] == "receipts_fetched"
        assert lines[1]["pending"] == 1

    def test_defaults_to_stderr(self, restore_root_logging, capsys):
        setup_logging()

        logging.getLogger("expo_push.test").warning("careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err.splitlines()[-1])["event"] == "careful"

    def test_repeated_setup_keeps_one_handler(self, restore_root_logging):
        setup_logging()
        setup_logging(debug=True)

        handlers = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
        assert len(handlers) == 1
        assert logging.getLogger().level == logging.DEBUG


class TestEventHooks:
    @pytest.mark.asyncio
    async def test_hooks_log_request_and_response(self, caplog):
        request = httpx.Request(
            "POST",
            "https://exp.host/--/api/v2/push/send",
            content=b"[]",
            headers={"Content-Encoding": "gzip"},
        )
        response = httpx.Response(200, request=request)

        with caplog.at_level("INFO", logger="expo_push.middleware.logging"):
            await log_request(request)
            await log_response(response)

        started, completed = caplog.records
        assert started.getMessage() == "push_request_started"
        assert started.content_encoding == "gzip"
        assert started.size == 2
        assert completed.status_code == 200
