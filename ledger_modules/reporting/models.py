"""
Account Reporting Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects for report inputs and outputs: the report
filter, per-account reports with their matched entries, and the summary
across all reported accounts.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``statements.generate`` and ``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True``; reports are recomputed, never patched.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``net_amount`` is always ``total_credit - total_debit``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import AccountInfo, TransactionInfo
from ledger_kernel.models.transaction import LineSide


@dataclass(frozen=True)
class ReportFilter:
    """
    Which accounts to report on, over which window.

    The date window is applied by whoever fetches the transactions;
    ``generate`` trusts that its input already matches it.  A
    ``selected_account_id`` takes precedence over ``owner_accounts_only``.
    """

    start_date: date | None = None
    end_date: date | None = None
    selected_account_id: UUID | None = None
    owner_accounts_only: bool = False

    def __post_init__(self):
        if isinstance(self.selected_account_id, str):
            object.__setattr__(self, "selected_account_id", UUID(self.selected_account_id))
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )

    @property
    def has_window(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    @classmethod
    def last_days(
        cls,
        clock: Clock,
        days: int,
        selected_account_id: UUID | None = None,
        owner_accounts_only: bool = False,
    ) -> ReportFilter:
        """Window covering the ``days`` days up to and including today."""
        today = clock.today()
        return cls(
            start_date=today - timedelta(days=days),
            end_date=today,
            selected_account_id=selected_account_id,
            owner_accounts_only=owner_accounts_only,
        )


@dataclass(frozen=True)
class ReportEntry:
    """One transaction line matched to a reported account."""

    transaction: TransactionInfo
    amount: Decimal
    side: LineSide
    description: str


@dataclass(frozen=True)
class AccountReport:
    """Activity of a single account inside the report window."""

    account: AccountInfo
    total_credit: Decimal
    total_debit: Decimal
    net_amount: Decimal
    entries: tuple[ReportEntry, ...]


@dataclass(frozen=True)
class ReportSummary:
    """Totals across every account that produced a report."""

    account_count: int
    total_credit: Decimal
    total_debit: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class LedgerReport:
    """A generated report plus the parameters that produced it."""

    report_filter: ReportFilter
    generated_at: str  # ISO format timestamp from injected clock
    accounts: tuple[AccountReport, ...]
    summary: ReportSummary
