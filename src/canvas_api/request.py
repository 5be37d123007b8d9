"""Request composition for the Canvas REST API.

Every resource module builds its calls through :class:`Request`: optional
query parameters are appended only when set, mutating calls carry a
form-encoded body, and responses are validated with Pydantic into the shape
the caller asks for.
"""

import enum
import functools
import time
import urllib.parse
from collections.abc import Iterable
from typing import Any, Protocol, TypeAlias, TypeVar

import httpx
import pydantic
import structlog

from .errors import TransportError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

FormValue: TypeAlias = str | int | float | bool | enum.Enum | None
Pairs: TypeAlias = Iterable[tuple[str, FormValue]]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_value(value: FormValue) -> str:
    """Encode a single query or form value.

    Booleans become ``"true"``/``"false"`` and enums are sent by value.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return encode_value(value.value)
    return str(value)


def _encode_pairs(pairs: Pairs) -> list[tuple[str, str]]:
    return [(key, encode_value(value)) for key, value in pairs if value is not None]


@functools.lru_cache(maxsize=None)
def _adapter(response_type: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(response_type)


class Request:
    """A single request against the Canvas API.

    Built fresh for every call by :class:`RequestPort` and never reused.
    ``query`` and ``form`` return the request itself so calls can be chained.
    """

    def __init__(self, http_client: httpx.AsyncClient, method: str, url: str):
        self._http = http_client
        self.method = method
        self.url = url
        self.params: list[tuple[str, str]] = []
        self.body: list[tuple[str, str]] | None = None

    def query(self, pairs: Pairs) -> "Request":
        """Append query parameters, skipping pairs whose value is ``None``."""
        self.params.extend(_encode_pairs(pairs))
        return self

    def form(self, pairs: Pairs) -> "Request":
        """Set a form-encoded body from ordered pairs.

        Keys may repeat; pairs whose value is ``None`` are left out.
        """
        self.body = _encode_pairs(pairs)
        return self

    def build(self) -> httpx.Request:
        """Build the outgoing ``httpx.Request`` including default client headers."""
        if self.body is None:
            return self._http.build_request(self.method, self.url, params=self.params)
        return self._http.build_request(
            self.method,
            self.url,
            params=self.params,
            content=urllib.parse.urlencode(self.body),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    async def send(self, response_type: type[T]) -> T:
        """Send the request and decode the JSON response into ``response_type``.

        Raises:
            TransportError: If the request cannot be sent, the server answers
                with a non-success status, the URL is malformed, or the
                body does not match ``response_type``.
        """
        start_time = time.time()
        try:
            request = self.build()
            logger.debug(
                "Making API request",
                method=self.method,
                url=str(request.url),
            )
            response = await self._http.send(request)
            response.raise_for_status()
            duration = time.time() - start_time
            logger.debug(
                "API request completed",
                status_code=response.status_code,
                duration_seconds=round(duration, 3),
            )
            return _adapter(response_type).validate_json(response.content)
        # pydantic.ValidationError is a ValueError, as are port errors raised
        # while the transport parses the URL.
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=self.method,
                url=self.url,
                duration_seconds=round(duration, 3),
            )
            raise TransportError(self.method, self.url, exc) from exc


class RequestPort(Protocol):
    """The narrow transport interface resource modules are written against."""

    def make_query(self, path: str) -> Request: ...

    def make_put(self, path: str) -> Request: ...

    def make_post(self, path: str) -> Request: ...

    def make_delete(self, path: str) -> Request: ...
