"""Account reports.

See https://canvas.instructure.com/doc/api/account_reports.html
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from ..request import FormValue, RequestPort


class ReportParameters(BaseModel):
    """Parameters a report was, or will be, run with.

    Every field is optional and which ones a report honours depends on the
    report type; see :meth:`AccountReports.available_reports`.
    """

    # The canvas id of the term to get grades from.
    enrollment_term_id: int | None = None
    include_deleted: bool | None = None
    # The id of the course to report on.
    course_id: int | None = None
    # Sort order for the csv: 'users', 'courses' or 'outcomes'.
    order: str | None = None
    users: bool | None = None
    accounts: bool | None = None
    terms: bool | None = None
    courses: bool | None = None
    sections: bool | None = None
    enrollments: bool | None = None
    groups: bool | None = None
    # Include crosslisted courses.
    xlist: bool | None = None
    sis_terms_csv: int | None = None
    sis_accounts_csv: int | None = None
    include_enrollment_state: bool | None = None
    # Submission date range, at most 2 weeks.
    start_at: str | None = None
    end_at: str | None = None


class CreateReportForm(ReportParameters):
    """Form sent when starting a report.

    ``skip_message`` suppresses the message sent to the user when the report
    completes.
    """

    skip_message: bool | None = None

    @classmethod
    def from_parameters(
        cls,
        parameters: ReportParameters,
        skip_message: bool | None = None,
    ) -> "CreateReportForm":
        return cls(**parameters.model_dump(), skip_message=skip_message)

    def to_form(self) -> list[tuple[str, FormValue]]:
        """Flatten set fields into ``parameters[<field>]`` form keys."""
        return [(f"parameters[{name}]", value) for name, value in self.model_dump().items()]


class Report(BaseModel):
    """A report instance run for an account."""

    id: int
    # The type of report.
    report: str
    file_url: str | None = None
    # The attachment api object; only present once the report has completed.
    attachment: dict[str, Any] | None = None
    status: str
    created_at: str | None = None
    started_at: str | None = None
    ended_at: str | None = None
    parameters: ReportParameters | None = None
    progress: int | None = None
    # Line count written so far, updated every 1000 records.
    current_line: int | None = None


class ReportDescription(BaseModel):
    """A report type that can be run for an account."""

    report: str
    title: str
    # Parameters vary for each report.
    parameters: dict[str, Any] | None = None


@runtime_checkable
class AccountReportsApi(Protocol):
    async def available_reports(self, account_id: int) -> list[ReportDescription]: ...

    async def create_report(
        self,
        account_id: int,
        report_type: str,
        parameters: CreateReportForm | ReportParameters | None = None,
    ) -> Report: ...

    async def reports_by_type(self, account_id: int, report_type: str) -> list[Report]: ...

    async def report(self, account_id: int, report_type: str, report_id: int) -> Report: ...

    async def delete_report(self, account_id: int, report_type: str, report_id: int) -> Report: ...


class AccountReports:
    """Account report operations bound to a client."""

    def __init__(self, client: RequestPort):
        self._client = client

    async def available_reports(self, account_id: int) -> list[ReportDescription]:
        """List the reports available to the account and their parameters."""
        return await self._client.make_query(f"v1/accounts/{account_id}/reports").send(
            list[ReportDescription],
        )

    async def create_report(
        self,
        account_id: int,
        report_type: str,
        parameters: CreateReportForm | ReportParameters | None = None,
    ) -> Report:
        """Start a report of ``report_type`` for the account.

        ``report_type`` must be one of the names returned by
        :meth:`available_reports`. Parameters that are not set are not sent.
        """
        if parameters is None:
            form = CreateReportForm()
        elif isinstance(parameters, CreateReportForm):
            form = parameters
        else:
            form = CreateReportForm.from_parameters(parameters)
        return await (
            self._client.make_post(f"v1/accounts/{account_id}/reports/{report_type}")
            .form(form.to_form())
            .send(Report)
        )

    async def reports_by_type(self, account_id: int, report_type: str) -> list[Report]:
        """List all reports of a type that have been run for the account."""
        return await self._client.make_query(
            f"v1/accounts/{account_id}/reports/{report_type}",
        ).send(list[Report])

    async def report(self, account_id: int, report_type: str, report_id: int) -> Report:
        """Get the status of a report."""
        return await self._client.make_query(
            f"v1/accounts/{account_id}/reports/{report_type}/{report_id}",
        ).send(Report)

    async def delete_report(self, account_id: int, report_type: str, report_id: int) -> Report:
        """Delete a generated report instance."""
        return await self._client.make_delete(
            f"v1/accounts/{account_id}/reports/{report_type}/{report_id}",
        ).send(Report)
