"""Push ticket and receipt schemas.

Tickets are the synchronous answer to a send request (one per message, in
order). Receipts are fetched later by ticket id and report the final
delivery outcome. Both are discriminated on ``status``.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PushReceiptId = str


class ErrorCause(str, Enum):
    DEVICE_NOT_REGISTERED = "DeviceNotRegistered"
    INVALID_CREDENTIALS = "InvalidCredentials"
    MESSAGE_TOO_BIG = "MessageTooBig"
    MESSAGE_RATE_EXCEEDED = "MessageRateExceeded"


class KnownErrorDetails(BaseModel):
    """Error details with a recognised ``error`` cause.

    Extra keys sent along (``expoPushToken``, ``fault``...) are kept.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    error: ErrorCause


class UnknownErrorDetails(BaseModel):
    """Details whose shape is not modelled yet; the raw JSON value is kept as-is."""

    model_config = ConfigDict(frozen=True)

    raw: Any


ErrorDetails = Union[KnownErrorDetails, UnknownErrorDetails]


def parse_error_details(value: Any) -> ErrorDetails | None:
    """Decode a ``details`` value, falling back to the raw value. Never fails."""
    if value is None or isinstance(value, (KnownErrorDetails, UnknownErrorDetails)):
        return value
    if isinstance(value, dict):
        try:
            return KnownErrorDetails.model_validate(value)
        except ValidationError:
            pass
    return UnknownErrorDetails(raw=value)


class _ErrorResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    message: str
    details: ErrorDetails | None = None

    @field_validator("details", mode="before")
    @classmethod
    def decode_details(cls, v: Any) -> ErrorDetails | None:
        return parse_error_details(v)

    @property
    def cause(self) -> ErrorCause | None:
        if isinstance(self.details, KnownErrorDetails):
            return self.details.error
        return None


class PushTicketOk(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    id: PushReceiptId


class PushTicketError(_ErrorResult):
    pass


PushTicket = Annotated[Union[PushTicketOk, PushTicketError], Field(discriminator="status")]


class PushReceiptOk(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"


class PushReceiptError(_ErrorResult):
    pass


PushReceipt = Annotated[Union[PushReceiptOk, PushReceiptError], Field(discriminator="status")]


class PushTicketResponse(BaseModel):
    """Body of a successful send request."""

    data: list[PushTicket]


class PushReceiptResponse(BaseModel):
    """Body of a successful receipts request."""

    data: dict[PushReceiptId, PushReceipt]


class ServiceErrorResponse(BaseModel):
    """Request-level errors the service reports instead of ``data``."""

    errors: list[dict[str, Any]] = Field(default_factory=list)
