"""Exception hierarchy for the push client.

Per-message failures (tickets or receipts with ``status == "error"``) are
ordinary results and never raised; only call-level failures end up here.
"""

from typing import Any


class ExpoPushError(Exception):
    """Base class for every error raised by expo_push."""


class PushTokenFormatError(ExpoPushError, ValueError):
    """Raised when a string is not an ``ExpoPushToken[...]``/``ExponentPushToken[...]``."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"expected format `ExpoPushToken[xxx]` or `ExponentPushToken[xxx]` but given {token!r}"
        )


class DispatchError(ExpoPushError):
    """A request to the push service could not be completed."""


class TransportError(DispatchError):
    """Connection failure or non-2xx response from the push service."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class CodecError(DispatchError):
    """Compressing the request body or parsing the response body failed."""


class DecodeError(ExpoPushError):
    """Response JSON does not match the ticket/receipt shape."""


class TicketCountMismatchError(DecodeError):
    """The service returned a different number of tickets than messages sent."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"expected {expected} push tickets, received {received}")
