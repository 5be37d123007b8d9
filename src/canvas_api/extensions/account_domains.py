"""Account domain lookup.

See https://canvas.instructure.com/doc/api/account_domain_lookups.html
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from ..request import RequestPort


class AccountDomain(BaseModel):
    """A Canvas account domain."""

    name: str
    domain: str
    # Which authentication_provider param to pass to the oauth flow.
    authentication_provider: str | None = None


class AccountDomainSearch:
    """A pending account domain search.

    Refine it with :meth:`set_name` and :meth:`set_domain`, then ``await``
    :meth:`search`. Unset filters are not sent.
    """

    def __init__(
        self,
        client: RequestPort,
        name: str | None = None,
        domain: str | None = None,
    ):
        self._client = client
        self.name = name
        self.domain = domain

    def set_name(self, name: str | None) -> "AccountDomainSearch":
        self.name = name
        return self

    def set_domain(self, domain: str | None) -> "AccountDomainSearch":
        self.domain = domain
        return self

    async def search(self) -> list[AccountDomain]:
        """Run the search. The API returns at most 5 matches."""
        return await (
            self._client.make_query("v1/accounts/search")
            .query([("domain", self.domain), ("name", self.name)])
            .send(list[AccountDomain])
        )


@runtime_checkable
class AccountDomainsApi(Protocol):
    def search_account_domains(
        self,
        name: str | None = None,
        domain: str | None = None,
    ) -> AccountDomainSearch: ...


class AccountDomains:
    """Account domain operations bound to a client."""

    def __init__(self, client: RequestPort):
        self._client = client

    def search_account_domains(
        self,
        name: str | None = None,
        domain: str | None = None,
    ) -> AccountDomainSearch:
        """Start a search for up to 5 matching account domains.

        Example::

            domains = await (
                AccountDomains(client)
                .search_account_domains()
                .set_name("utah")
                .search()
            )
        """
        return AccountDomainSearch(self._client, name=name, domain=domain)
