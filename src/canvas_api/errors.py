"""Errors raised by the Canvas API client.

Two kinds of failure are surfaced to callers:

- :class:`CreatingHeaderError` when the access token cannot be encoded into
  an ``Authorization`` header. Raised only while building a client.
- :class:`TransportError` for everything that can go wrong while a request is
  in flight: connection problems, non-success status codes, and response
  bodies that do not decode into the expected shape.
"""


class CanvasError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CreatingHeaderError(CanvasError):
    """Raised when a default request header cannot be constructed."""

    def __init__(self, header: str, reason: str):
        super().__init__(f"Failed to create a header for an http request {header}: {reason}")
        self.header = header
        self.reason = reason


class TransportError(CanvasError):
    """Raised when a request fails to send, returns an error status, or cannot be decoded.

    The underlying exception is kept as ``cause`` (and chained as
    ``__cause__``). Status codes are not interpreted.
    """

    def __init__(self, method: str, url: str, cause: Exception):
        super().__init__(f"{method} {url} failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause
