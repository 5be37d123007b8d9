"""Tests for CanvasClient construction and the bearer authorization header."""

import asyncio

import pytest

import canvas_api
from canvas_api import client, config, errors
from canvas_api.extensions import calendars

TEST_API_URL = "https://example.test/api"

CALENDAR = {
    "id": 42,
    "name": "Engineering",
    "parent_account_id": 1,
    "root_account_id": 1,
    "visible": True,
    "sub_account_count": 0,
    "asset_string": "account_42",
    "calendar_event_url": "/accounts/42/calendar_events/%7B%7B%20id%20%7D%7D",
    "can_create_calendar_events": True,
    "create_calendar_event_url": "/accounts/42/calendar_events",
    "new_calendar_event_url": "/accounts/42/calendar_events/new",
}

# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "token",
    ["abc\n", "a\rb", "nul\x00", "bell\x07", "del\x7f", "café", "☃", "", "abc ", "abc\t"],
)
def test_build_rejects_illegal_header_characters(token):
    """Tokens with characters illegal in header values fail to build."""
    with pytest.raises(errors.CreatingHeaderError) as exc_info:
        client.CanvasClient.builder(token).build()
    assert exc_info.value.header == "Authorization"


def test_creating_header_error_is_canvas_error():
    """Header failures belong to the package error hierarchy."""
    with pytest.raises(errors.CanvasError):
        client.CanvasClient.builder("bad\ntoken").build()


@pytest.mark.parametrize("token", ["abc", "7~AbCdEf0123456789", "with space", "tab\tinside"])
def test_build_sets_bearer_authorization(token):
    """Valid tokens produce exactly ``Bearer <token>`` as the authorization header."""
    canvas_client = client.CanvasClient.builder(token).build()
    assert canvas_client.headers["Authorization"] == f"Bearer {token}"


def test_build_uses_default_api_url():
    """Without set_api_url the published Canvas API root is used."""
    canvas_client = client.CanvasClient.builder("abc").build()
    assert canvas_client.api_url == client.DEFAULT_API_URL


def test_set_api_url_is_chainable_and_applied():
    """set_api_url returns the builder and the built client uses the URL."""
    builder = client.CanvasClient.builder("abc")
    assert builder.set_api_url("https://school.test/api") is builder
    assert builder.build().api_url == "https://school.test/api"


def test_set_api_url_drops_trailing_slash():
    """A trailing slash does not lead to double slashes in request URLs."""
    canvas_client = client.CanvasClient.builder("abc").set_api_url("https://school.test/api/").build()
    assert canvas_client.url_for("v1/account_calendars") == "https://school.test/api/v1/account_calendars"


def test_set_timeout_rejects_non_positive():
    """Timeout must be positive."""
    with pytest.raises(ValueError, match="positive"):
        client.CanvasClient.builder("abc").set_timeout(0)


def test_builder_from_config():
    """A config model carries token, URL and timeout into the builder."""
    cfg = config.CanvasClientConfig(token="abc", api_url="https://school.test/api/", timeout=5)
    canvas_client = client.CanvasClientBuilder.from_config(cfg).build()
    assert canvas_client.api_url == "https://school.test/api"
    assert canvas_client.headers["Authorization"] == "Bearer abc"


# ---------------------------------------------------------------------------
# Request primitives
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("factory", "method"),
    [
        ("make_query", "GET"),
        ("make_put", "PUT"),
        ("make_post", "POST"),
        ("make_delete", "DELETE"),
    ],
)
def test_request_primitives_join_path(factory, method):
    """Each primitive targets base_url + '/' + path with its method."""
    canvas_client = client.CanvasClient.builder("abc").set_api_url(TEST_API_URL).build()
    request = getattr(canvas_client, factory)("v1/accounts/1/reports").build()
    assert request.method == method
    assert str(request.url) == f"{TEST_API_URL}/v1/accounts/1/reports"


def test_request_primitives_return_fresh_requests():
    """Requests are never shared between calls."""
    canvas_client = client.CanvasClient.builder("abc").build()
    first = canvas_client.make_query("v1/account_calendars").query([("search_term", "ab")])
    second = canvas_client.make_query("v1/account_calendars")
    assert first is not second
    assert second.params == []


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


async def test_get_calendar_sends_expected_request(make_client):
    """GET by id hits the joined URL with the bearer header and no body."""
    canvas_client, transport = make_client(CALENDAR)

    calendar = await calendars.AccountCalendars(canvas_client).account_calendar(42)

    sent = transport.last
    assert sent.method == "GET"
    assert str(sent.url) == "https://example.test/api/v1/account_calendar/42"
    assert sent.headers["Authorization"] == "Bearer abc"
    assert sent.content == b""
    assert calendar.id == 42


async def test_independent_clients_never_mix_headers(make_client):
    """Concurrent calls on two clients each carry only their own token."""
    client_a, transport_a = make_client(CALENDAR, token="token-a")
    client_b, transport_b = make_client(CALENDAR, token="token-b")

    await asyncio.gather(
        *(calendars.AccountCalendars(client_a).account_calendar(n) for n in range(5)),
        *(calendars.AccountCalendars(client_b).account_calendar(n) for n in range(5)),
    )

    assert {r.headers["Authorization"] for r in transport_a.requests} == {"Bearer token-a"}
    assert {r.headers["Authorization"] for r in transport_b.requests} == {"Bearer token-b"}
    assert len(transport_a.requests) == len(transport_b.requests) == 5


async def test_async_context_manager_closes_client(make_client):
    """Leaving the context closes the underlying connection pool."""
    canvas_client, _transport = make_client(CALENDAR)
    async with canvas_client:
        await calendars.AccountCalendars(canvas_client).account_calendar(1)

    assert canvas_client.is_closed


def test_package_exports_capability_interfaces():
    """Each resource family's interface is importable from the package root."""
    for name in ("AccountCalendarsApi", "AccountDomainsApi", "AccountNotificationsApi", "AccountReportsApi"):
        assert name in canvas_api.__all__
        assert hasattr(canvas_api, name)
