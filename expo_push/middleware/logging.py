"""Structured logging setup and httpx event hooks with token redaction.

The hooks log through stdlib ``logging`` so an application that never calls
``setup_logging`` gets no output from this library. ``setup_logging`` renders
both stdlib and structlog records as JSON on stderr, keeping stdout free for
command output.
"""

import logging
import re
import sys
from typing import TextIO

import httpx
import structlog

logger = logging.getLogger(__name__)

# Push tokens identify a device; bearer credentials grant send access.
PUSH_TOKEN_PATTERN = re.compile(r"(Expo(?:nent)?PushToken\[)[^\]]*(\])")
BEARER_PATTERN = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)

HANDLER_NAME = "expo_push"


def redact_tokens(text: str) -> str:
    """Redact push tokens and bearer credentials from text."""
    text = PUSH_TOKEN_PATTERN.sub(r"\1REDACTED\2", text)
    text = BEARER_PATTERN.sub(r"\1[REDACTED]", text)
    return text


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Route structlog and stdlib logging to a JSON handler on ``stream`` (stderr by default).

    Safe to call more than once; the previous expo_push handler is replaced.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
    )

    root = logging.getLogger()
    teardown_logging()
    root.addHandler(handler)
    root.setLevel(log_level)


def teardown_logging() -> None:
    """Remove the handler installed by ``setup_logging``."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()


async def log_request(request: httpx.Request) -> None:
    """httpx ``request`` event hook."""
    logger.info(
        "push_request_started",
        extra={
            "method": request.method,
            "url": redact_tokens(str(request.url)),
            "content_encoding": request.headers.get("content-encoding", "identity"),
            "size": len(request.content),
        },
    )


async def log_response(response: httpx.Response) -> None:
    """httpx ``response`` event hook."""
    logger.info(
        "push_request_completed",
        extra={
            "method": response.request.method,
            "url": redact_tokens(str(response.request.url)),
            "status_code": response.status_code,
        },
    )
