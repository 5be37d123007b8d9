"""Canvas API client.

Typed async client for the Canvas LMS REST API: account calendars, account
domains, account notifications and account reports.

Exports:
    CanvasClient: Authenticated transport core shared by all resources.
    CanvasClientBuilder: Validates configuration and builds a CanvasClient.
    CanvasError, CreatingHeaderError, TransportError: Error taxonomy.
    AccountCalendars, AccountDomains, AccountNotifications, AccountReports:
        Operation sets, one per resource family, bound to a client.
    AccountCalendarsApi, AccountDomainsApi, AccountNotificationsApi,
    AccountReportsApi: The capability interfaces those classes implement.
"""

from .client import DEFAULT_API_URL, DEFAULT_TIMEOUT, CanvasClient, CanvasClientBuilder
from .errors import CanvasError, CreatingHeaderError, TransportError
from .extensions.account_domains import (
    AccountDomain,
    AccountDomains,
    AccountDomainsApi,
    AccountDomainSearch,
)
from .extensions.account_notifications import (
    AccountNotification,
    AccountNotifications,
    AccountNotificationsApi,
    NotificationIcon,
)
from .extensions.account_reports import (
    AccountReports,
    AccountReportsApi,
    CreateReportForm,
    Report,
    ReportDescription,
    ReportParameters,
)
from .extensions.calendars import (
    AccountCalendar,
    AccountCalendars,
    AccountCalendarsApi,
    AccountVisibility,
    BulkUpdateResult,
    Visibility,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "AccountCalendar",
    "AccountCalendars",
    "AccountCalendarsApi",
    "AccountDomain",
    "AccountDomainSearch",
    "AccountDomains",
    "AccountDomainsApi",
    "AccountNotification",
    "AccountNotifications",
    "AccountNotificationsApi",
    "AccountReports",
    "AccountReportsApi",
    "AccountVisibility",
    "BulkUpdateResult",
    "CanvasClient",
    "CanvasClientBuilder",
    "CanvasError",
    "CreateReportForm",
    "CreatingHeaderError",
    "NotificationIcon",
    "Report",
    "ReportDescription",
    "ReportParameters",
    "TransportError",
    "Visibility",
]
