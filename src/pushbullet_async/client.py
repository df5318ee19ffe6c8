"""Main PushbulletClient class for the Pushbullet HTTP API."""

from __future__ import annotations

import json
import logging
import ssl
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pushbullet_async._internal.multipart import MultipartStream, UploadData, check_upload_data
from pushbullet_async._internal.pipeline import Envelope, build_request, classify_response, send
from pushbullet_async.exceptions import InvalidTokenError, JsonError, StatusError, TlsError
from pushbullet_async.models import (
    Device,
    DeviceList,
    UploadRequestResponse,
    UploadSlot,
    User,
)
from pushbullet_async.push import PushData, PushTarget, encode_push

logger = logging.getLogger(__name__)

API_ROOT = "https://api.pushbullet.com/v2/"
TOKEN_HEADER = "Access-Token"

ModelT = TypeVar("ModelT", bound=BaseModel)
HeaderHook = Callable[[dict[str, str]], None]


def _check_token(token: str) -> str:
    """Ensure the token can be sent as a header value (visible ASCII or tab)."""
    for char in token:
        if char != "\t" and not (" " <= char <= "~"):
            raise InvalidTokenError("invalid token: illegal header value character", token)
    return token


def _decode(model: type[ModelT], envelope: Envelope) -> ModelT:
    try:
        return model.model_validate(envelope.data)
    except ValidationError as e:
        raise JsonError(e, envelope.content) from e


class PushbulletClient:
    """Asynchronous client for the Pushbullet API.

    Every request method is a coroutine. The client holds no mutable state
    once built, so one instance can serve many concurrent calls; no retries
    or timeouts are applied beyond the transport's own settings.

    Example (context manager - recommended):
        async with PushbulletClient(token) as client:
            await client.push(SelfUser(), Note(title="Hi", body="Hello, user!"))

    Example (upload, then push the file):
        async with PushbulletClient(token) as client:
            uploaded = await client.upload_request("hello.txt", "text/plain", b"Hello!\\n")
            await client.push(
                SelfUser(),
                File(
                    body="",
                    file_name=uploaded.file_name,
                    file_type=uploaded.file_type,
                    file_url=uploaded.file_url,
                ),
            )
    """

    def __init__(self, token: str, *, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the client.

        Args:
            token: Access token from the Pushbullet account settings
            http_client: Optional pre-built transport; it is not closed by
                this client

        Raises:
            InvalidTokenError: If the token is not a legal header value
            TlsError: If the HTTPS transport cannot be set up
        """
        self._token = _check_token(token)
        self._owns_http_client = http_client is None
        if http_client is None:
            try:
                http_client = httpx.AsyncClient()
            except (ssl.SSLError, OSError) as e:
                raise TlsError(f"tls error: {e}") from e
        self._http = http_client

    @classmethod
    def with_client(cls, token: str, http_client: httpx.AsyncClient) -> PushbulletClient:
        """Create a client that sends requests through an existing transport."""
        return cls(token, http_client=http_client)

    async def __aenter__(self) -> PushbulletClient:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def get_user(self) -> User:
        """Retrieve the logged in user.

        Raises:
            RequestError: If the request fails
        """
        return _decode(User, await self._get("users/me"))

    async def list_devices(self) -> list[Device]:
        """Retrieve all devices, including inactive ones.

        Raises:
            RequestError: If the request fails
        """
        return list(_decode(DeviceList, await self._get("devices")).devices)

    async def push(self, target: PushTarget, data: PushData) -> None:
        """Push data to a target. The response body is discarded.

        Args:
            target: Where to send the push, e.g. SelfUser() or DeviceTarget(iden=...)
            data: What to send: Note, Link or File

        Raises:
            TypeError: If target or data is not a known variant
            RequestError: If the request fails
        """
        body = json.dumps(encode_push(target, data))
        logger.debug(f"posting body to start push: {body}")
        await self._post("pushes", body.encode("utf-8"))

    async def upload_request(
        self,
        file_name: str,
        file_type: str,
        data: UploadData,
    ) -> UploadRequestResponse:
        """Upload a file so it can be sent with a File push.

        An upload slot is requested first, then the file is streamed to the
        returned upload URL as multipart/form-data. data may be bytes, str,
        or a sync or async iterable of bytes chunks (see iter_file); it is
        consumed once and never fully buffered.

        Args:
            file_name: Name of the file
            file_type: MIME type of the file
            data: The file contents

        Returns:
            The file name, type and URL to use in a File push. Name and type
            may differ from the ones requested.

        Raises:
            RequestError: If either phase fails; start over from the
                beginning, the upload URL is not reusable
            TypeError: If data is not bytes, str or an iterable of bytes;
                raised before any request is made
        """
        check_upload_data(data)
        body = json.dumps({"file_name": file_name, "file_type": file_type})
        slot = _decode(UploadSlot, await self._post("upload-request", body.encode("utf-8")))
        logger.debug(f"uploading {slot.file_name!r} ({slot.file_type}) to {slot.upload_url}")

        stream = MultipartStream("file", slot.file_name, slot.file_type, data)
        headers = {TOKEN_HEADER: self._token, "Content-Type": stream.content_type}
        try:
            request = build_request(self._http, "POST", slot.upload_url, headers, stream)
            response = await send(self._http, request)
        finally:
            await stream.aclose()
        if not response.is_success:
            raise StatusError(response.status_code, response.content)

        return slot.public()

    async def _get(self, endpoint: str) -> Envelope:
        return await self._request("GET", endpoint)

    async def _post(self, endpoint: str, body: bytes) -> Envelope:
        length = len(body)

        def json_headers(headers: dict[str, str]) -> None:
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(length)

        return await self._request("POST", endpoint, body, json_headers)

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: bytes | None = None,
        prepare: HeaderHook | None = None,
    ) -> Envelope:
        """Send an authenticated request to API_ROOT + endpoint and classify the response."""
        headers = {TOKEN_HEADER: self._token}
        if prepare is not None:
            prepare(headers)
        request = build_request(self._http, method, f"{API_ROOT}{endpoint}", headers, body)
        logger.debug(f"sending request: {method} {request.url}")

        response = await send(self._http, request)
        envelope = classify_response(response.status_code, response.content)
        logger.debug(f"received json: {envelope.data!r} from {endpoint}")
        return envelope
