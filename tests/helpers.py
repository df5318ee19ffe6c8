"""Shared test helpers for pushbullet_async tests."""

from __future__ import annotations

from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from typing import Any

import httpx


class MockApi:
    """Mock transport handler answering requests from a queue.

    Each queued item is either an httpx.Response or an exception to raise.
    Requests and their fully read bodies are recorded in order.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(await request.aread())
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def parse_multipart(content_type: str, body: bytes) -> list[EmailMessage]:
    """Parse a multipart/form-data body with the standard MIME parser."""
    raw = f"Content-Type: {content_type}\r\n\r\n".encode("ascii") + body
    message = BytesParser(policy=policy.HTTP).parsebytes(raw)
    assert message.is_multipart()
    return list(message.iter_parts())  # type: ignore[attr-defined]


USER_JSON = {
    "active": True,
    "created": 1381092887.398433,
    "email": "elon@teslamotors.com",
    "email_normalized": "elon@teslamotors.com",
    "iden": "ujpah72o0",
    "image_url": "https://static.pushbullet.com/missing-image/55a7dc-45",
    "max_upload_size": 26214400,
    "modified": 1441054560.741007,
    "name": "Elon Musk",
}

DEVICE_JSON = {
    "active": True,
    "app_version": 8623,
    "created": 1412047948.579029,
    "iden": "ujpah72o0sjAoRtnM0jc",
    "manufacturer": "Apple",
    "model": "iPhone 5s (GSM)",
    "modified": 1412047948.579031,
    "nickname": "Elon Musk's iPhone",
    "push_token": "production:f73be0ee7877c8c7fa69b1468cde764f",
    "type": "ios",
}
