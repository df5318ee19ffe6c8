"""Streaming multipart/form-data body with a single file part.

The payload is pulled from the caller's byte source chunk by chunk while the
request is being sent, so a file is never held in memory as a whole and its
length does not need to be known up front.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import AsyncIterable, AsyncIterator, Generator, Iterable
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
DEFAULT_CHUNK_SIZE = 64 * 1024

UploadData = Union[bytes, str, Iterable[bytes], AsyncIterable[bytes]]


class SourceError(Exception):
    """The caller's byte source failed while the body was being sent.

    The original exception is the __cause__.
    """


def check_upload_data(data: Any) -> None:
    """Raise TypeError if data cannot be used as a multipart payload."""
    if not isinstance(data, (str, bytes, bytearray, memoryview, AsyncIterable, Iterable)):
        raise TypeError(f"Unsupported upload data: {type(data).__name__}")


def _quote(value: str) -> str:
    # Same escaping browsers (and httpx) apply to form-data parameters
    return value.replace("\\", "\\\\").replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


def _header_value(value: str) -> str:
    # A header value must stay on one line
    return value.replace("\r", " ").replace("\n", " ")


class MultipartStream:
    """One "file" field of a multipart/form-data body, produced lazily.

    Iterating yields the opening boundary and part headers, then every chunk
    of the payload as the source produces it, then the closing boundary.
    The source is consumed once; a stream cannot be replayed.

    Raises:
        TypeError: If data is not bytes, str or an iterable of bytes
    """

    def __init__(
        self,
        field_name: str,
        file_name: str,
        file_type: str,
        data: UploadData,
    ) -> None:
        check_upload_data(data)
        self.field_name = field_name
        self.file_name = file_name
        self.file_type = file_type
        self.boundary = uuid.uuid4().hex
        self._data = data

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def _part_header(self) -> bytes:
        return (
            f"--{self.boundary}\r\n"
            f'Content-Disposition: form-data; name="{_quote(self.field_name)}"; '
            f'filename="{_quote(self.file_name)}"\r\n'
            f"Content-Type: {_header_value(self.file_type)}\r\n"
            "\r\n"
        ).encode("utf-8")

    def _closing(self) -> bytes:
        return CRLF + f"--{self.boundary}--".encode("ascii") + CRLF

    async def _payload(self) -> AsyncIterator[bytes]:
        data = self._data
        if isinstance(data, str):
            yield data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            yield bytes(data)
        elif isinstance(data, AsyncIterable):
            async for chunk in data:
                yield chunk
        else:
            for chunk in data:
                yield chunk

    async def aclose(self) -> None:
        """Close the source if it is a generator, e.g. to release a file.

        Safe to call more than once and after the body was fully sent.
        """
        data = self._data
        if hasattr(data, "aclose"):
            await data.aclose()
        elif isinstance(data, Generator):
            data.close()

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield self._part_header()
        sent = 0
        try:
            async for chunk in self._payload():
                if chunk:
                    sent += len(chunk)
                    yield chunk
        except Exception as e:
            logger.debug(f"source for {self.file_name!r} failed after {sent} bytes: {e!r}")
            raise SourceError(f"upload source failed: {e}") from e
        finally:
            await self.aclose()
        yield self._closing()
        logger.debug(f"multipart body for {self.file_name!r} done, {sent} payload bytes")


async def iter_file(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Read a local file in chunks without blocking the event loop.

    Example:
        await client.upload_request("a.pdf", "application/pdf", iter_file("a.pdf"))
    """
    f = await asyncio.to_thread(open, path, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(f.read, chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        await asyncio.to_thread(f.close)
