"""Push targets and push data.

A push is one flat JSON object: the target's field (if any) sits next to the
data's fields and its "type" discriminant. Which target was chosen is implied
by which field is present.

Example:
    encode_push(DeviceTarget(iden="d1"), Note(title="T", body="B"))
    # {"type": "note", "title": "T", "body": "B", "device_iden": "d1"}
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class PushTarget(BaseModel):
    """Base class for the places a push can be sent to."""

    model_config = ConfigDict(frozen=True)

    def fields(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SelfUser(PushTarget):
    """Push to the logged in user's own stream."""


class DeviceTarget(PushTarget):
    """Push to one device. See Device.iden and PushbulletClient.list_devices."""

    iden: str = Field(serialization_alias="device_iden")


class UserTarget(PushTarget):
    """Push to a user by email, or send an email if they have no account."""

    email: str


class ChannelTarget(PushTarget):
    """Push to every subscriber of a channel."""

    tag: str = Field(serialization_alias="channel_tag")


class ClientTarget(PushTarget):
    """Push to every user who granted access to an OAuth client."""

    iden: str = Field(serialization_alias="client_iden")


class PushData(BaseModel):
    """Base class for push contents. Subclasses set the "type" tag."""

    model_config = ConfigDict(frozen=True)

    def fields(self) -> dict[str, Any]:
        return self.model_dump()


class Note(PushData):
    type: Literal["note"] = "note"
    title: str
    body: str


class Link(PushData):
    type: Literal["link"] = "link"
    title: str
    body: str
    url: str


class File(PushData):
    """File push. The file must be uploaded first with upload_request."""

    type: Literal["file"] = "file"
    body: str
    file_name: str
    file_type: str
    file_url: str


_TARGETS = (SelfUser, DeviceTarget, UserTarget, ChannelTarget, ClientTarget)
_DATA = (Note, Link, File)


def encode_push(target: PushTarget, data: PushData) -> dict[str, Any]:
    """Merge a target and push data into the flat object POSTed to pushes.

    Raises:
        TypeError: If target or data is not one of the known variants
    """
    if not isinstance(target, _TARGETS):
        raise TypeError(f"Unsupported push target: {type(target).__name__}")
    if not isinstance(data, _DATA):
        raise TypeError(f"Unsupported push data: {type(data).__name__}")
    return {**data.fields(), **target.fields()}
