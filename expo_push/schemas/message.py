"""Push token and message schemas.

Message format reference: https://docs.expo.dev/push-notifications/sending-notifications/#message-request-format
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from expo_push.errors import PushTokenFormatError

_TOKEN_PREFIXES = ("ExponentPushToken[", "ExpoPushToken[")


def is_push_token(value: str) -> bool:
    """Return True if ``value`` looks like an Expo push token."""
    return value.startswith(_TOKEN_PREFIXES) and value.endswith("]")


class PushToken(RootModel[str]):
    """Recipient identifier, e.g. ``ExponentPushToken[xxxxxxxx]``.

    Only the prefix and the closing bracket are checked; the service decides
    whether the bracketed part is valid.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def check_format(cls, v: str) -> str:
        if not is_push_token(v):
            raise PushTokenFormatError(v)
        return v

    @classmethod
    def parse(cls, value: str) -> "PushToken":
        if not isinstance(value, str) or not is_push_token(value):
            raise PushTokenFormatError(str(value))
        return cls(value)

    def __str__(self) -> str:
        return self.root


class Priority(str, Enum):
    """Delivery priority.

    "default" lets each platform decide (normal on Android, high on iOS).
    Normal maps to APNs priority 5 and high to 10.
    """

    DEFAULT = "default"
    NORMAL = "normal"
    HIGH = "high"


class Sound(str, Enum):
    DEFAULT = "default"


class PushMessage(BaseModel):
    """One notification addressed to a single push token.

    Optional fields left as ``None`` are dropped from the wire payload.
    Instances are frozen; the ``with_*`` helpers return validated copies::

        msg = PushMessage(to="ExpoPushToken[abc]").with_body("hi").with_ttl(60)
    """

    model_config = ConfigDict(frozen=True)

    to: PushToken
    data: Any = None
    title: str | None = None
    body: str | None = None
    sound: Sound | None = None
    ttl: int | None = Field(None, ge=0)
    expiration: int | None = Field(None, ge=0)
    priority: Priority | None = None
    badge: int | None = Field(None, ge=0)

    def to_payload(self) -> dict[str, Any]:
        """Wire representation with unset fields omitted (never ``null``)."""
        payload = self.model_dump(mode="json", exclude_none=True, exclude={"data"})
        if self.data is not None:
            payload["data"] = self.data
        return payload

    def _replace(self, **changes: Any) -> "PushMessage":
        return type(self).model_validate({**dict(self), **changes})

    def with_data(self, data: Any) -> "PushMessage":
        return self._replace(data=data)

    def with_title(self, title: str) -> "PushMessage":
        return self._replace(title=title)

    def with_body(self, body: str) -> "PushMessage":
        return self._replace(body=body)

    def with_sound(self, sound: Sound = Sound.DEFAULT) -> "PushMessage":
        return self._replace(sound=sound)

    def with_ttl(self, ttl: int) -> "PushMessage":
        return self._replace(ttl=ttl)

    def with_expiration(self, expiration: int) -> "PushMessage":
        return self._replace(expiration=expiration)

    def with_priority(self, priority: Priority) -> "PushMessage":
        return self._replace(priority=priority)

    def with_badge(self, badge: int) -> "PushMessage":
        return self._replace(badge=badge)
