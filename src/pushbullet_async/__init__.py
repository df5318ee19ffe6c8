"""Pushbullet Async - An asynchronous Python client for the Pushbullet API.

Example usage:
    import asyncio

    from pushbullet_async import Note, PushbulletClient, SelfUser

    async def main() -> None:
        async with PushbulletClient("o.xxxxxxxx") as client:
            user = await client.get_user()
            print(f"Logged in as {user.email}")
            await client.push(SelfUser(), Note(title="User Greetings", body="Hello, user!"))

    asyncio.run(main())
"""

from pushbullet_async._internal.multipart import iter_file
from pushbullet_async.client import API_ROOT, PushbulletClient
from pushbullet_async.exceptions import (
    HttpError,
    InvalidTokenError,
    JsonError,
    PushbulletError,
    RequestError,
    ServerError,
    StartupError,
    StatusError,
    TlsError,
    TransportError,
)
from pushbullet_async.models import Device, UploadRequestResponse, User
from pushbullet_async.push import (
    ChannelTarget,
    ClientTarget,
    DeviceTarget,
    File,
    Link,
    Note,
    PushData,
    PushTarget,
    SelfUser,
    UserTarget,
    encode_push,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "PushbulletClient",
    "API_ROOT",
    "iter_file",
    # Models
    "User",
    "Device",
    "UploadRequestResponse",
    # Push payloads
    "PushTarget",
    "SelfUser",
    "DeviceTarget",
    "UserTarget",
    "ChannelTarget",
    "ClientTarget",
    "PushData",
    "Note",
    "Link",
    "File",
    "encode_push",
    # Exceptions
    "PushbulletError",
    "StartupError",
    "TlsError",
    "InvalidTokenError",
    "RequestError",
    "TransportError",
    "HttpError",
    "StatusError",
    "JsonError",
    "ServerError",
]
