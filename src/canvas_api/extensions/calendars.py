"""Account calendars.

See https://canvas.instructure.com/doc/api/account_calendars.html
"""

import enum
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from ..request import RequestPort


class AccountCalendar(BaseModel):
    """An account calendar as returned by the API."""

    # The ID and name of the account associated with this calendar.
    id: int
    name: str
    # None for the root account.
    parent_account_id: int | None = None
    root_account_id: int | None = None
    visible: bool
    # Number of this account's direct sub-accounts.
    sub_account_count: int
    asset_string: str
    calendar_event_url: str
    can_create_calendar_events: bool
    create_calendar_event_url: str
    new_calendar_event_url: str


class Visibility(enum.Enum):
    """Whether an account calendar is shown to users.

    The API takes this two ways: as ``"visible"``/``"hidden"`` when filtering
    lists, and as a boolean when updating a calendar. Each operation picks
    the form its endpoint expects.
    """

    VISIBLE = "visible"
    HIDDEN = "hidden"

    def as_str(self) -> str:
        """Lowercase word form, used by the sub-account listing ``filter`` query."""
        return self.value

    def as_bool(self) -> bool:
        """Boolean form, used by the ``visible`` field of the calendar update forms."""
        return self is Visibility.VISIBLE

    @classmethod
    def from_bool(cls, visible: bool) -> "Visibility":
        """Read the ``visible`` boolean the calendar endpoints return."""
        return cls.VISIBLE if visible else cls.HIDDEN


class AccountVisibility(BaseModel):
    """One entry of a bulk visibility update."""

    id: int
    visibility: Visibility


class BulkUpdateResult(BaseModel):
    """Confirmation returned by the bulk visibility update."""

    message: str


class _AccountCalendarsEnvelope(BaseModel):
    account_calendars: list[AccountCalendar]


class _CountEnvelope(BaseModel):
    count: int


@runtime_checkable
class AccountCalendarsApi(Protocol):
    async def account_calendars(self, search_term: str | None = None) -> list[AccountCalendar]: ...

    async def account_calendar(self, account_id: int) -> AccountCalendar: ...

    async def set_account_calendar_visibility(
        self,
        account_id: int,
        visibility: Visibility,
    ) -> AccountCalendar: ...

    async def set_many_account_calendars_visibility(
        self,
        account_id: int,
        calendars: Sequence[AccountVisibility],
    ) -> BulkUpdateResult: ...

    async def sub_account_calendars(
        self,
        account_id: int,
        search_term: str | None = None,
        filter: Visibility | None = None,  # noqa: A002
    ) -> list[AccountCalendar]: ...

    async def count_visible_calendars(self, account_id: int) -> int: ...


class AccountCalendars:
    """Account calendar operations bound to a client."""

    def __init__(self, client: RequestPort):
        self._client = client

    async def account_calendars(self, search_term: str | None = None) -> list[AccountCalendar]:
        """List account calendars available to the current user.

        Includes visible account calendars where the user has an account
        association. Only the first page of results is returned.

        Args:
            search_term: Only return calendars matching this term. The API
                requires at least 2 characters.
        """
        envelope = await (
            self._client.make_query("v1/account_calendars")
            .query([("search_term", search_term)])
            .send(_AccountCalendarsEnvelope)
        )
        return envelope.account_calendars

    async def account_calendar(self, account_id: int) -> AccountCalendar:
        """Get details about a specific account calendar."""
        return await self._client.make_query(f"v1/account_calendar/{account_id}").send(
            AccountCalendar,
        )

    async def set_account_calendar_visibility(
        self,
        account_id: int,
        visibility: Visibility,
    ) -> AccountCalendar:
        """Set an account calendar as hidden or visible.

        Requires the ``manage_account_calendar_visibility`` permission.
        Returns the updated calendar.
        """
        return await (
            self._client.make_put(f"v1/account_calendar/{account_id}")
            .form([("visible", visibility.as_bool())])
            .send(AccountCalendar)
        )

    async def set_many_account_calendars_visibility(
        self,
        account_id: int,
        calendars: Sequence[AccountVisibility],
    ) -> BulkUpdateResult:
        """Set visibility on many calendars at once.

        Each entry contributes an ``id`` and a ```visible``` field to the form,
        in the order given. Requires the ``manage_account_calendar_visibility``
        permission.
        """
        pairs = []
        for calendar in calendars:
            pairs.append(("id", calendar.id))
            pairs.append(("visible", calendar.visibility.as_bool()))
        return await (
            self._client.make_put(f"v1/accounts/{account_id}/account_calendars")
            .form(pairs)
            .send(BulkUpdateResult)
        )

    async def sub_account_calendars(
        self,
        account_id: int,
        search_term: str | None = None,
        filter: Visibility | None = None,  # noqa: A002
    ) -> list[AccountCalendar]:
        """List calendars for an account and its first level of sub-accounts.

        Requires the ``manage_account_calendar_visibility`` permission.

        Args:
            account_id: The parent account.
            search_term: Only return calendars matching this term (at least 2
                characters, checked by the API).
            filter: Only return visible or only hidden calendars.
        """
        envelope = await (
            self._client.make_query(f"v1/accounts/{account_id}/account_calendars")
            .query(
                [
                    ("search_term", search_term),
                    ("filter", filter.as_str() if filter is not None else None),
                ],
            )
            .send(_AccountCalendarsEnvelope)
        )
        return envelope.account_calendars

    async def count_visible_calendars(self, account_id: int) -> int:
        """Return the number of visible account calendars."""
        envelope = await self._client.make_query(
            f"v1/accounts/{account_id}/visible_calendars_count",
        ).send(_CountEnvelope)
        return envelope.count
