"""Data models for the pushbullet_async library.

Response models are decoded from server JSON by the client and are
immutable. Unknown fields sent by the server are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Response(BaseModel):
    model_config = ConfigDict(frozen=True)


class User(_Response):
    """Information about the logged in user."""

    created: float
    email: str
    email_normalized: str
    iden: str
    image_url: str | None = None
    max_upload_size: float
    modified: float
    name: str


class Device(_Response):
    """A device registered to the account.

    Deleted devices are still listed, with active set to False.
    """

    active: bool
    created: float
    iden: str
    modified: float
    nickname: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    icon: str | None = None
    type: str | None = None


class DeviceList(_Response):
    devices: list[Device]


class UploadRequestResponse(_Response):
    """Result of a completed file upload.

    file_name may be truncated and file_type normalized by the server.
    file_url is where the file is reachable once uploaded; pass all three
    to a File push.
    """

    file_name: str
    file_type: str
    file_url: str


class UploadSlot(UploadRequestResponse):
    """Raw upload-request response, including the single-use upload_url."""

    upload_url: str

    def public(self) -> UploadRequestResponse:
        """Drop the upload_url, which is only meaningful to the client."""
        return UploadRequestResponse(
            file_name=self.file_name,
            file_type=self.file_type,
            file_url=self.file_url,
        )


class ErrorBody(BaseModel):
    """The {"code", "message"} object the API reports errors with."""

    model_config = ConfigDict(strict=True)

    code: str
    message: str
