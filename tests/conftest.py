"""Shared test fixtures."""

import gzip
import json

import httpx
import pytest

from expo_push.schemas.message import PushMessage
from expo_push.services.push_service import PushNotifier


class FakePushService:
    """In-memory push service reachable through ``httpx.MockTransport``.

    Send requests get one ``ok`` ticket per message whose id is derived from
    the message body, so ordering can be checked. Receipt requests answer
    from ``self.receipts`` and leave unknown ids out.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.receipts: dict[str, dict] = {}
        self.fail_on_request: int | None = None
        self.fail_status = 429

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.decode(request)

        if self.fail_on_request == len(self.requests):
            return httpx.Response(
                self.fail_status,
                json={"errors": [{"code": "PUSH_TOO_MANY_REQUESTS", "message": "Slow down"}]},
            )

        if request.url.path.endswith("/getReceipts"):
            data = {i: self.receipts[i] for i in payload["ids"] if i in self.receipts}
            return httpx.Response(200, json={"data": data})

        tickets = [
            {"status": "ok", "id": f"id-{message.get('body', index)}"}
            for index, message in enumerate(payload)
        ]
        return httpx.Response(200, json={"data": tickets})

    @staticmethod
    def decode(request: httpx.Request):
        body = request.content
        if request.headers.get("content-encoding") == "gzip":
            body = gzip.decompress(body)
        return json.loads(body)

    @property
    def payloads(self) -> list:
        return [self.decode(r) for r in self.requests]


@pytest.fixture
def push_token() -> str:
    return "ExponentPushToken[abc]"


@pytest.fixture
def make_message(push_token):
    def _make(body: str = "hi", **kwargs) -> PushMessage:
        return PushMessage(to=push_token, body=body, **kwargs)

    return _make


@pytest.fixture
def push_service() -> FakePushService:
    return FakePushService()


@pytest.fixture
def notifier(push_service) -> PushNotifier:
    return PushNotifier(transport=httpx.MockTransport(push_service.handler))
