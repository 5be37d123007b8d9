"""Canvas REST API client.

Provides the authenticated transport core shared by every resource module,
and the builder that validates configuration before a client exists.
"""

from typing import TYPE_CHECKING

import httpx
import structlog

from .errors import CreatingHeaderError
from .request import Request

if TYPE_CHECKING:
    from .config import CanvasClientConfig

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://canvas.instructure.com/api"

DEFAULT_TIMEOUT = 30.0

AUTHORIZATION = "Authorization"


def _validate_header_value(name: str, value: str) -> None:
    """Check that ``value`` is a legal HTTP header field value.

    Only visible ASCII characters, spaces and horizontal tabs are allowed,
    and the value may not start or end with a space or tab.

    Raises:
        CreatingHeaderError: On the first illegal character.
    """
    for position, char in enumerate(value):
        if char != "\t" and not " " <= char <= "~":
            msg = f"invalid character {char!r} at position {position}"
            raise CreatingHeaderError(name, msg)
    if not value or value[0] in " \t" or value[-1] in " \t":
        msg = "leading or trailing whitespace"
        raise CreatingHeaderError(name, msg)


class CanvasClient:
    """The main Canvas client that resource modules issue requests through.

    Owns one ``httpx.AsyncClient`` (and its connection pool) with the bearer
    authorization header set as a default header. Nothing on the client
    changes after it is built, so one instance can be shared by any number
    of concurrent calls. Use :meth:`builder` to create one.

    Can be used as an async context manager for automatic cleanup.
    """

    def __init__(self, http_client: httpx.AsyncClient, api_url: str):
        self._http = http_client
        self._api_url = api_url

    @staticmethod
    def builder(canvas_token: str) -> "CanvasClientBuilder":
        """Create a :class:`CanvasClientBuilder` to configure a client.

        This is the same as ``CanvasClientBuilder(canvas_token)``.
        """
        return CanvasClientBuilder(canvas_token)

    @property
    def api_url(self) -> str:
        """The base API URL every relative path is joined onto."""
        return self._api_url

    @property
    def headers(self) -> httpx.Headers:
        """A copy of the default headers sent with every request."""
        return self._http.headers.copy()

    @property
    def is_closed(self) -> bool:
        """Whether the connection pool has been released by :meth:`aclose`."""
        return self._http.is_closed

    def url_for(self, path: str) -> str:
        """Join a relative API path onto the base URL."""
        return f"{self._api_url}/{path}"

    def make_query(self, path: str) -> Request:
        """Start a GET request to ``path``, relative to the base URL."""
        return Request(self._http, "GET", self.url_for(path))

    def make_put(self, path: str) -> Request:
        """Start a PUT request to ``path``, relative to the base URL."""
        return Request(self._http, "PUT", self.url_for(path))

    def make_post(self, path: str) -> Request:
        """Start a POST request to ``path``, relative to the base URL."""
        return Request(self._http, "POST", self.url_for(path))

    def make_delete(self, path: str) -> Request:
        """Start a DELETE request to ``path``, relative to the base URL."""
        return Request(self._http, "DELETE", self.url_for(path))

    async def __aenter__(self) -> "CanvasClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager and release the connection pool."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()


class CanvasClientBuilder:
    """Configures and builds a :class:`CanvasClient`.

    Setters return the builder so calls can be chained::

        client = (
            CanvasClient.builder(token)
            .set_api_url("https://school.instructure.com/api")
            .build()
        )
    """

    def __init__(self, canvas_token: str):
        self._canvas_token = canvas_token
        self._api_url = DEFAULT_API_URL
        self._timeout = DEFAULT_TIMEOUT
        self._transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_config(cls, config: "CanvasClientConfig") -> "CanvasClientBuilder":
        """Create a builder from a validated :class:`~canvas_api.config.CanvasClientConfig`."""
        return cls(config.token).set_api_url(config.api_url).set_timeout(config.timeout)

    def set_api_url(self, api_url: str) -> "CanvasClientBuilder":
        """Set the base API URL. Defaults to :data:`DEFAULT_API_URL`.

        A trailing slash is dropped so joined paths never contain ``//``.
        """
        self._api_url = api_url.rstrip("/")
        return self

    def set_timeout(self, timeout: float) -> "CanvasClientBuilder":
        """Set the request timeout in seconds. Defaults to :data:`DEFAULT_TIMEOUT`."""
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        self._timeout = timeout
        return self

    def set_transport(self, transport: httpx.AsyncBaseTransport) -> "CanvasClientBuilder":
        """Use a custom httpx transport, e.g. ``httpx.MockTransport`` in tests."""
        self._transport = transport
        return self

    def build(self) -> CanvasClient:
        """Build the :class:`CanvasClient`.

        No network I/O happens here.

        Raises:
            CreatingHeaderError: If the token cannot be used in an
                ``Authorization`` header.
        """
        authorization = f"Bearer {self._canvas_token}"
        _validate_header_value(AUTHORIZATION, authorization)

        http_client = httpx.AsyncClient(
            headers={AUTHORIZATION: authorization},
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.debug("Created Canvas client", api_url=self._api_url)
        return CanvasClient(http_client, self._api_url)
