"""Decode push service responses into tickets and receipts."""

import logging
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from expo_push.errors import DecodeError, TicketCountMismatchError
from expo_push.schemas.ticket import (
    PushReceipt,
    PushReceiptId,
    PushReceiptResponse,
    PushTicket,
    PushTicketOk,
    PushTicketResponse,
    ServiceErrorResponse,
)

logger = logging.getLogger(__name__)


def decode_tickets(payload: Any, expected: int | None = None) -> list[PushTicket]:
    """Decode ``{"data": [...]}`` into tickets, preserving order.

    Raises:
        DecodeError: the payload is not a ticket response (including an
            unrecognised ``status`` value).
        TicketCountMismatchError: ``expected`` is given and differs from the
            number of tickets returned.
    """
    try:
        response = PushTicketResponse.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"malformed push ticket response: {e}") from e

    if expected is not None and len(response.data) != expected:
        logger.error(
            "Push service returned %d tickets for %d messages",
            len(response.data),
            expected,
        )
        raise TicketCountMismatchError(expected, len(response.data))
    return response.data


def decode_receipts(payload: Any) -> dict[PushReceiptId, PushReceipt]:
    """Decode ``{"data": {id: {...}}}`` into an id -> receipt mapping.

    Ids the service has not resolved yet are simply absent.
    """
    try:
        response = PushReceiptResponse.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"malformed push receipt response: {e}") from e
    return response.data


def decode_service_errors(payload: Any) -> list[dict[str, Any]]:
    """Best-effort extraction of the top-level ``errors`` array of a failed request."""
    if not isinstance(payload, dict):
        return []
    try:
        return ServiceErrorResponse.model_validate(payload).errors
    except ValidationError:
        return []


def receipt_ids(tickets: Iterable[PushTicket]) -> list[PushReceiptId]:
    """Ids of accepted tickets, in ticket order."""
    return [ticket.id for ticket in tickets if isinstance(ticket, PushTicketOk)]


def pending_ids(
    ids: Sequence[PushReceiptId], receipts: Mapping[PushReceiptId, PushReceipt]
) -> list[PushReceiptId]:
    """Ids that have no receipt yet and should be queried again later."""
    return [receipt_id for receipt_id in ids if receipt_id not in receipts]
