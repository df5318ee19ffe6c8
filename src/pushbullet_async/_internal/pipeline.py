"""Request execution and response classification shared by all endpoints."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from pushbullet_async._internal.multipart import SourceError
from pushbullet_async.exceptions import (
    HttpError,
    JsonError,
    ServerError,
    StatusError,
    TransportError,
)
from pushbullet_async.models import ErrorBody

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """A successful response: the raw body and its decoded JSON value.

    content is kept next to data so a later typed decode can report the
    bytes it failed on.
    """

    content: bytes
    data: Any


def classify_response(status_code: int, content: bytes) -> Envelope:
    """Turn a buffered response into an Envelope or raise the matching error.

    The checks run in a fixed order:
    1. body is not JSON -> JsonError
    2. body has a well-formed {"error": {"code", "message"}} -> ServerError,
       whatever the status
    3. status is not 2xx -> StatusError
    4. otherwise success
    """
    try:
        data = json.loads(content)
    except ValueError as e:
        raise JsonError(e, content) from e

    if isinstance(data, dict) and "error" in data:
        try:
            error = ErrorBody.model_validate(data["error"])
        except ValidationError:
            logger.debug(f"ignoring malformed error object: {data['error']!r}")
        else:
            raise ServerError(error.code, error.message)

    if not httpx.codes.is_success(status_code):
        raise StatusError(status_code, content)

    return Envelope(content=content, data=data)


def build_request(
    http_client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: dict[str, str],
    content: Any = None,
) -> httpx.Request:
    """Build a request, reporting malformed URLs or headers as HttpError."""
    try:
        return http_client.build_request(method, url, headers=headers, content=content)
    except (httpx.InvalidURL, UnicodeEncodeError) as e:
        raise HttpError(f"request error: {e}") from e


async def send(http_client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Send a request and read the whole response body.

    A failing request body source counts as a transport failure.
    """
    try:
        return await http_client.send(request)
    except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
        raise HttpError(f"request error: {e}") from e
    except SourceError as e:
        raise TransportError(f"transport error: {e}") from e.__cause__
    except httpx.HTTPError as e:
        raise TransportError(f"transport error: {e}") from e
