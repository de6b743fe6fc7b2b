"""Client for the Expo push notification service."""

from expo_push.errors import (
    CodecError,
    DecodeError,
    DispatchError,
    ExpoPushError,
    PushTokenFormatError,
    TicketCountMismatchError,
    TransportError,
)
from expo_push.schemas.message import Priority, PushMessage, PushToken, Sound
from expo_push.schemas.ticket import (
    ErrorCause,
    KnownErrorDetails,
    PushReceipt,
    PushReceiptError,
    PushReceiptId,
    PushReceiptOk,
    PushTicket,
    PushTicketError,
    PushTicketOk,
    UnknownErrorDetails,
)
from expo_push.services.chunker import chunked
from expo_push.services.compression import GzipPolicy
from expo_push.services.push_service import PushNotifier, get_push_notifier

__all__ = [
    "CodecError",
    "DecodeError",
    "DispatchError",
    "ErrorCause",
    "ExpoPushError",
    "GzipPolicy",
    "KnownErrorDetails",
    "Priority",
    "PushMessage",
    "PushNotifier",
    "PushReceipt",
    "PushReceiptError",
    "PushReceiptId",
    "PushReceiptOk",
    "PushTicket",
    "PushTicketError",
    "PushTicketOk",
    "PushToken",
    "PushTokenFormatError",
    "Sound",
    "TicketCountMismatchError",
    "TransportError",
    "UnknownErrorDetails",
    "chunked",
    "get_push_notifier",
]
