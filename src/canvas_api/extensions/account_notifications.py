"""Global account notifications.

See https://canvas.instructure.com/doc/api/account_notifications.html
"""

import enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from ..request import FormValue, RequestPort


class NotificationIcon(enum.Enum):
    """Icon displayed with a notification."""

    WARNING = "warning"
    INFORMATION = "information"
    QUESTION = "question"
    ERROR = "error"
    CALENDAR = "calendar"


class AccountNotification(BaseModel):
    """A global notification shown to users of an account.

    ``id`` is only known once the API has stored the notification.
    """

    id: int | None = None
    subject: str
    message: str
    # ISO 8601 timestamps, e.g. 2013-08-28T23:59:00-06:00
    start_at: str
    end_at: str
    icon: NotificationIcon = NotificationIcon.WARNING
    # None sends the notification to all roles.
    role_ids: list[int] | None = None


def notification_form(notification: AccountNotification) -> list[tuple[str, FormValue]]:
    """Flatten a notification into the form fields create and update expect."""
    pairs: list[tuple[str, FormValue]] = [
        ("account_notification[subject]", notification.subject),
        ("account_notification[message]", notification.message),
        ("account_notification[start_at]", notification.start_at),
        ("account_notification[end_at]", notification.end_at),
        ("account_notification[icon]", notification.icon),
    ]
    for role_id in notification.role_ids or []:
        pairs.append(("account_notification_roles[]", role_id))
    return pairs


@runtime_checkable
class AccountNotificationsApi(Protocol):
    async def global_notifications(
        self,
        account_id: int,
        include_past: bool | None = None,
    ) -> list[AccountNotification]: ...

    async def notification(self, account_id: int, notification_id: int) -> AccountNotification: ...

    async def close_notification(
        self,
        account_id: int,
        notification_id: int,
    ) -> AccountNotification: ...

    async def create_global_notification(
        self,
        account_id: int,
        notification: AccountNotification,
    ) -> AccountNotification: ...

    async def update_global_notification(
        self,
        account_id: int,
        notification_id: int,
        notification: AccountNotification,
    ) -> AccountNotification: ...


class AccountNotifications:
    """Account notification operations bound to a client."""

    def __init__(self, client: RequestPort):
        self._client = client

    async def global_notifications(
        self,
        account_id: int,
        include_past: bool | None = None,
    ) -> list[AccountNotification]:
        """List global notifications in the account for the current user.

        Notifications the user has closed are only included when
        ``include_past`` is true.
        """
        return await (
            self._client.make_query(f"v1/accounts/{account_id}/account_notifications")
            .query([("include_past", include_past)])
            .send(list[AccountNotification])
        )

    async def notification(self, account_id: int, notification_id: int) -> AccountNotification:
        """Get a global notification. Closed notifications are not returned."""
        return await self._client.make_query(
            f"v1/accounts/{account_id}/account_notifications/{notification_id}",
        ).send(AccountNotification)

    async def close_notification(
        self,
        account_id: int,
        notification_id: int,
    ) -> AccountNotification:
        """Dismiss a notification for the current user.

        Returns the notification as it was before it was closed.
        """
        return await self._client.make_delete(
            f"v1/accounts/{account_id}/account_notifications/{notification_id}",
        ).send(AccountNotification)

    async def create_global_notification(
        self,
        account_id: int,
        notification: AccountNotification,
    ) -> AccountNotification:
        """Create a global notification for an account. ``notification.id`` is ignored."""
        return await (
            self._client.make_post(f"v1/accounts/{account_id}/account_notifications")
            .form(notification_form(notification))
            .send(AccountNotification)
        )

    async def update_global_notification(
        self,
        account_id: int,
        notification_id: int,
        notification: AccountNotification,
    ) -> AccountNotification:
        """Replace the fields of an existing global notification."""
        return await (
            self._client.make_put(
                f"v1/accounts/{account_id}/account_notifications/{notification_id}",
            )
            .form(notification_form(notification))
            .send(AccountNotification)
        )
