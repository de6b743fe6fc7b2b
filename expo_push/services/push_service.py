"""Push notification dispatch to the Expo push service."""

import json
import logging
import time
from typing import Any, Callable, Iterable, Sequence, TypeVar

import httpx

from expo_push.config import (
    DEFAULT_PUSH_URL,
    DEFAULT_RECEIPTS_URL,
    MAX_CHUNK_SIZE,
    MAX_RECEIPT_IDS,
    Settings,
)
from expo_push.errors import CodecError, DecodeError, TransportError
from expo_push.metrics import (
    compressed_requests_total,
    push_receipts_total,
    push_request_duration_seconds,
    push_requests_total,
    push_tickets_total,
)
from expo_push.middleware.logging import log_request, log_response, redact_tokens
from expo_push.schemas.message import PushMessage
from expo_push.schemas.ticket import PushReceipt, PushReceiptId, PushTicket
from expo_push.services.chunker import chunked
from expo_push.services.compression import GzipPolicy, apply_policy
from expo_push.services.response_decoder import (
    decode_receipts,
    decode_service_errors,
    decode_tickets,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def serialize_messages(messages: Sequence[PushMessage]) -> bytes:
    """Serialize messages as a compact JSON array, in submission order."""
    return _dump_json([message.to_payload() for message in messages])


def _dump_json(value: Any) -> bytes:
    try:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise CodecError(f"failed to serialize request body: {e}") from e


class PushNotifier:
    """Send push messages and fetch their receipts.

    Configuration is fixed at construction, so one instance can be shared by
    concurrent tasks. Each call opens its own ``httpx.AsyncClient`` and
    closes it on every exit path. Nothing is retried: the first failure is
    raised to the caller.
    """

    def __init__(
        self,
        *,
        push_url: str = DEFAULT_PUSH_URL,
        receipts_url: str = DEFAULT_RECEIPTS_URL,
        access_token: str | None = None,
        gzip_policy: GzipPolicy | None = None,
        chunk_size: int = MAX_CHUNK_SIZE,
        receipt_chunk_size: int = MAX_RECEIPT_IDS,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        if receipt_chunk_size <= 0:
            raise ValueError(f"receipt_chunk_size must be > 0, got {receipt_chunk_size}")
        if chunk_size > MAX_CHUNK_SIZE:
            logger.warning(
                "chunk_size %d exceeds the push service maximum of %d; requests may be rejected",
                chunk_size,
                MAX_CHUNK_SIZE,
            )

        self._push_url = push_url
        self._receipts_url = receipts_url
        self._access_token = access_token
        self._gzip_policy = gzip_policy or GzipPolicy()
        self._chunk_size = chunk_size
        self._receipt_chunk_size = receipt_chunk_size
        self._timeout = timeout
        self._transport = transport

    @property
    def push_url(self) -> str:
        return self._push_url

    @property
    def receipts_url(self) -> str:
        return self._receipts_url

    @property
    def gzip_policy(self) -> GzipPolicy:
        return self._gzip_policy

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def receipt_chunk_size(self) -> int:
        return self._receipt_chunk_size

    async def send_one(self, message: PushMessage) -> PushTicket:
        """Send a single message and return its ticket."""
        tickets = await self.send_many([message])
        return tickets[0]

    async def send_many(self, messages: Iterable[PushMessage]) -> list[PushTicket]:
        """Send any number of messages, one request per chunk.

        Tickets come back in submission order. If any chunk fails the whole
        call raises and tickets from earlier chunks are not returned.
        """
        tickets: list[PushTicket] = []
        for chunk in chunked(messages, self._chunk_size):
            tickets.extend(await self.send_chunk(chunk))
        return tickets

    async def send_chunk(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        """Send one chunk in a single request.

        Chunks larger than the service maximum (100) are likely to be
        rejected; prefer ``send_many`` for arbitrary input.

        Raises:
            TransportError: connection failure or non-2xx response.
            CodecError: the body could not be compressed or the response
                was not JSON.
            DecodeError: the response is not a ticket array, or its length
                differs from ``len(messages)``.
        """
        messages = list(messages)
        if not messages:
            return []

        body = serialize_messages(messages)
        tickets = await self._post(
            "send",
            self._push_url,
            body,
            lambda payload: decode_tickets(payload, expected=len(messages)),
        )

        for ticket in tickets:
            push_tickets_total.labels(status=ticket.status).inc()
        logger.info("Sent %d push messages", len(messages))
        return tickets

    async def get_receipts(self, ids: Iterable[PushReceiptId]) -> dict[PushReceiptId, PushReceipt]:
        """Fetch receipts for previously issued ticket ids.

        Ids without a receipt yet are absent from the result; query them
        again later.
        """
        unique_ids = list(dict.fromkeys(ids))
        receipts: dict[PushReceiptId, PushReceipt] = {}

        for group in chunked(unique_ids, self._receipt_chunk_size):
            body = _dump_json({"ids": group})
            receipts.update(await self._post("receipts", self._receipts_url, body, decode_receipts))

        for receipt in receipts.values():
            push_receipts_total.labels(status=receipt.status).inc()
        logger.info("Fetched %d of %d push receipts", len(receipts), len(unique_ids))
        return receipts

    def _headers(self, compressed: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        if compressed:
            headers["Content-Encoding"] = "gzip"
        return headers

    async def _post(self, endpoint: str, url: str, body: bytes, decode: Callable[[Any], T]) -> T:
        """POST a serialized body and return the decoded JSON response."""
        content, compressed = apply_policy(body, self._gzip_policy)
        if compressed:
            compressed_requests_total.inc()
            logger.debug("Compressed %s body from %d to %d bytes", endpoint, len(body), len(content))

        start_time = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                event_hooks={"request": [log_request], "response": [log_response]},
            ) as client:
                response = await client.post(url, content=content, headers=self._headers(compressed))
                raw = response.content
        except httpx.TimeoutException as e:
            push_requests_total.labels(endpoint=endpoint, outcome="timeout").inc()
            logger.error("Push service %s request timed out", endpoint)
            raise TransportError(f"push service {endpoint} request timed out") from e
        except httpx.DecodingError as e:
            push_requests_total.labels(endpoint=endpoint, outcome="malformed").inc()
            logger.error("Push service %s response body could not be decompressed: %s", endpoint, e)
            raise CodecError(f"push service {endpoint} response body could not be decoded: {e}") from e
        except httpx.HTTPError as e:
            push_requests_total.labels(endpoint=endpoint, outcome="error").inc()
            logger.error("Push service %s request failed: %s", endpoint, redact_tokens(str(e)))
            raise TransportError(f"push service {endpoint} request failed: {e}") from e
        finally:
            push_request_duration_seconds.labels(endpoint=endpoint).observe(
                time.monotonic() - start_time
            )

        if not response.is_success:
            push_requests_total.labels(endpoint=endpoint, outcome="rejected").inc()
            errors = decode_service_errors(_parse_json_or_none(raw))
            logger.error(
                "Push service %s returned %d: %s",
                endpoint,
                response.status_code,
                redact_tokens(response.text[:200]),
            )
            raise TransportError(
                f"push service {endpoint} returned {response.status_code}",
                status_code=response.status_code,
                errors=errors,
            )

        try:
            try:
                payload = json.loads(raw)
            except ValueError as e:
                raise CodecError(f"push service {endpoint} response is not valid JSON: {e}") from e
            result = decode(payload)
        except (CodecError, DecodeError):
            push_requests_total.labels(endpoint=endpoint, outcome="malformed").inc()
            raise

        push_requests_total.labels(endpoint=endpoint, outcome="success").inc()
        return result


def _parse_json_or_none(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return None


def get_push_notifier(settings: Settings) -> PushNotifier:
    """Factory that wires a PushNotifier from settings."""
    access_token = settings.access_token.get_secret_value() if settings.access_token else None
    return PushNotifier(
        push_url=settings.push_url,
        receipts_url=settings.receipts_url,
        access_token=access_token,
        gzip_policy=GzipPolicy.from_name(settings.gzip_policy, settings.gzip_threshold),
        chunk_size=settings.chunk_size,
        receipt_chunk_size=settings.receipt_chunk_size,
        timeout=settings.timeout_seconds,
    )
