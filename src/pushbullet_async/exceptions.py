"""Exception hierarchy for the pushbullet_async library."""

from __future__ import annotations


class PushbulletError(Exception):
    """Base exception for all pushbullet_async errors."""

    pass


class StartupError(PushbulletError):
    """Raised when a client cannot be constructed.

    Never raised by a request; fix the token or the TLS environment and
    construct the client again.
    """

    pass


class TlsError(StartupError):
    """Raised when the HTTPS transport fails to initialize."""

    pass


class InvalidTokenError(StartupError):
    """Raised when the access token is not a legal HTTP header value."""

    def __init__(self, message: str, token: str) -> None:
        super().__init__(f"{message} (token: {token!r})")
        self.token = token


class RequestError(PushbulletError):
    """Base exception for failures of a single API request."""

    pass


class TransportError(RequestError):
    """Raised on a lower-level I/O or connection failure."""

    pass


class HttpError(RequestError):
    """Raised when the outgoing request could not be built."""

    pass


class StatusError(RequestError):
    """Raised when the response status is not 2xx.

    The content attribute holds the raw response body.
    """

    def __init__(self, status_code: int, content: bytes) -> None:
        super().__init__(f"server error: {status_code}: {content!r}")
        self.status_code = status_code
        self.content = content


class JsonError(RequestError):
    """Raised when a response body is not JSON or has an unexpected shape.

    The error attribute holds the underlying decode error and content the
    raw bytes that failed to decode.
    """

    def __init__(self, error: Exception, content: bytes) -> None:
        super().__init__(f"invalid response json: {error}. data: {content!r}")
        self.error = error
        self.content = content


class ServerError(RequestError):
    """Raised when the response carries an application-level error object."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"server error: {code}: {message}")
        self.code = code
        self.message = message
