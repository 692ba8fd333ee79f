"""
Reporting Module Service (``ledger_modules.reporting.service``).

Responsibility
--------------
Orchestrates account report generation by bridging the kernel selectors
(``AccountSelector``, ``TransactionSelector``) to the pure ``generate``
function in ``statements.py``.  This is a **read-only** service.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the registry or ledger.
* The transaction fetch applies the date window; ``generate`` never
  re-filters by date.
* Accounts and transactions are fetched by separate queries; brief
  staleness between the two is tolerated.

Failure modes
-------------
* Selector query failure  -> ``UpstreamFailure`` propagates.
* ``end_date < start_date``  -> ``ValueError`` from ``ReportFilter``.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.transaction_selector import TransactionSelector

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import LedgerReport, ReportFilter
from ledger_modules.reporting.statements import generate, report_to_dict

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Account report generation service.

    Contract
    --------
    * ``generate`` returns a ``LedgerReport``; ``to_dict`` renders it.
    * All methods are read-only.

    Guarantees
    ----------
    * No report logic lives in this class; it delegates to
      ``statements.generate``.
    * Clock is injectable for deterministic default windows.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._accounts = AccountSelector(session)
        self._transactions = TransactionSelector(session)

    def default_filter(self) -> ReportFilter:
        return ReportFilter.last_days(self._clock, self._config.default_window_days)

    def _effective_filter(self, report_filter: ReportFilter | None) -> ReportFilter:
        if report_filter is None:
            return self.default_filter()
        if report_filter.has_window:
            return report_filter
        default = self.default_filter()
        return ReportFilter(
            start_date=default.start_date,
            end_date=default.end_date,
            selected_account_id=report_filter.selected_account_id,
            owner_accounts_only=report_filter.owner_accounts_only,
        )

    def generate(self, report_filter: ReportFilter | None = None) -> LedgerReport:
        """
        Generate account reports for the filter's window.

        A filter with neither date set covers the last
        ``default_window_days`` days up to today.
        """
        effective = self._effective_filter(report_filter)
        accounts = self._accounts.all()
        transactions = self._transactions.all_in_window(
            effective.start_date, effective.end_date
        )

        reports, summary = generate(transactions, accounts, effective)

        logger.info(
            "account_report_generated",
            extra={
                "start_date": effective.start_date,
                "end_date": effective.end_date,
                "selected_account_id": effective.selected_account_id,
                "owner_accounts_only": effective.owner_accounts_only,
                "transaction_count": len(transactions),
                "account_count": summary.account_count,
            },
        )
        return LedgerReport(
            report_filter=effective,
            generated_at=self._clock.now().isoformat(),
            accounts=reports,
            summary=summary,
        )

    def to_dict(self, report: LedgerReport) -> dict:
        rendered = report_to_dict(
            report.accounts, report.summary, self._config.display_precision
        )
        rendered["startDate"] = (
            report.report_filter.start_date.isoformat()
            if report.report_filter.start_date
            else None
        )
        rendered["endDate"] = (
            report.report_filter.end_date.isoformat()
            if report.report_filter.end_date
            else None
        )
        rendered["generatedAt"] = report.generated_at
        return rendered
