"""Push message, ticket and receipt schemas."""

from expo_push.schemas.message import Priority, PushMessage, PushToken, Sound, is_push_token
from expo_push.schemas.ticket import (
    ErrorCause,
    ErrorDetails,
    KnownErrorDetails,
    PushReceipt,
    PushReceiptError,
    PushReceiptId,
    PushReceiptOk,
    PushTicket,
    PushTicketError,
    PushTicketOk,
    UnknownErrorDetails,
    parse_error_details,
)

__all__ = [
    "ErrorCause",
    "ErrorDetails",
    "KnownErrorDetails",
    "Priority",
    "PushMessage",
    "PushReceipt",
    "PushReceiptError",
    "PushReceiptId",
    "PushReceiptOk",
    "PushTicket",
    "PushTicketError",
    "PushTicketOk",
    "PushToken",
    "Sound",
    "UnknownErrorDetails",
    "is_push_token",
    "parse_error_details",
]
