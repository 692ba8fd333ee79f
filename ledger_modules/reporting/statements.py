"""
Account Report Functions (``ledger_modules.reporting.statements``).

Responsibility
--------------
Pure transformation functions that turn a transaction set and the account
registry into per-account reports and a summary, plus a dict renderer for
JSON output.

Architecture position
---------------------
**Modules layer** -- pure functional core with ZERO I/O.  Called by
``ReportingService``, which handles data fetching.

Invariants enforced
-------------------
* A line belongs to an account when its stored account name equals the
  account's current name.  Lines keep the name they were booked with, so
  this is a string match, not an id join.
* Accounts with no matching line are left out of the result.
* Entries are ordered by transaction date, newest first; equal dates keep
  scan order.
* Totals are accumulated as unrounded ``Decimal``; rounding happens only
  in ``report_to_dict``.
* Output depends only on the inputs: the same transactions in any order
  give the same totals.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from ledger_kernel.db.types import DISPLAY_DECIMAL_PLACES, ZERO, round_money
from ledger_kernel.domain.dtos import AccountInfo, TransactionInfo
from ledger_kernel.models.transaction import LineSide

from ledger_modules.reporting.models import (
    AccountReport,
    ReportEntry,
    ReportFilter,
    ReportSummary,
)


def select_accounts(
    accounts: Sequence[AccountInfo],
    report_filter: ReportFilter,
) -> list[AccountInfo]:
    """
    Apply the account part of the filter.

    A selected account wins over ``owner_accounts_only``.
    """
    if report_filter.selected_account_id is not None:
        return [a for a in accounts if a.id == report_filter.selected_account_id]
    if report_filter.owner_accounts_only:
        return [a for a in accounts if a.is_owner_account]
    return list(accounts)


def build_account_report(
    account: AccountInfo,
    transactions: Sequence[TransactionInfo],
) -> AccountReport | None:
    """Report for one account, or None when no line matches it."""
    entries: list[ReportEntry] = []
    total_credit = ZERO
    total_debit = ZERO

    for transaction in transactions:
        for line in transaction.lines:
            if line.account_name != account.name:
                continue
            if line.side == LineSide.CREDIT:
                total_credit += line.amount
            else:
                total_debit += line.amount
            entries.append(
                ReportEntry(
                    transaction=transaction,
                    amount=line.amount,
                    side=line.side,
                    description=line.description,
                )
            )

    if not entries:
        return None

    # sorted() is stable with reverse=True, so equal dates keep scan order
    entries.sort(key=lambda e: e.transaction.transaction_date, reverse=True)
    return AccountReport(
        account=account,
        total_credit=total_credit,
        total_debit=total_debit,
        net_amount=total_credit - total_debit,
        entries=tuple(entries),
    )


def summarize_reports(reports: Sequence[AccountReport]) -> ReportSummary:
    total_credit = sum((r.total_credit for r in reports), ZERO)
    total_debit = sum((r.total_debit for r in reports), ZERO)
    return ReportSummary(
        account_count=len(reports),
        total_credit=total_credit,
        total_debit=total_debit,
        net_amount=total_credit - total_debit,
    )


def generate(
    transactions: Sequence[TransactionInfo],
    accounts: Sequence[AccountInfo],
    report_filter: ReportFilter,
) -> tuple[tuple[AccountReport, ...], ReportSummary]:
    """
    Build per-account reports and their summary.

    Args:
        transactions: Transactions already restricted to the report window.
        accounts: The account registry, in display order.
        report_filter: Account selection.  Its dates are not re-applied.

    Returns:
        Reports in account order (accounts with activity only) and the
        summary over exactly those reports.
    """
    reports = []
    for account in select_accounts(accounts, report_filter):
        report = build_account_report(account, transactions)
        if report is not None:
            reports.append(report)
    return tuple(reports), summarize_reports(reports)


# =========================================================================
# Renderer (dict/JSON output)
# =========================================================================


def _money(value: Decimal, precision: int) -> str:
    return str(round_money(value, precision))


def report_to_dict(
    reports: Sequence[AccountReport],
    summary: ReportSummary,
    precision: int = DISPLAY_DECIMAL_PLACES,
) -> dict[str, Any]:
    """Render reports and summary with amounts rounded for display."""
    return {
        "accounts": [
            {
                "account": report.account.to_payload(),
                "totalCredit": _money(report.total_credit, precision),
                "totalDebit": _money(report.total_debit, precision),
                "netAmount": _money(report.net_amount, precision),
                "entries": [
                    {
                        "transactionId": entry.transaction.sequential_transaction_id,
                        "date": entry.transaction.transaction_date.isoformat(),
                        "description": entry.description,
                        "amount": _money(entry.amount, precision),
                        "type": entry.side.value,
                    }
                    for entry in report.entries
                ],
            }
            for report in reports
        ],
        "summary": {
            "accountCount": summary.account_count,
            "totalCredit": _money(summary.total_credit, precision),
            "totalDebit": _money(summary.total_debit, precision),
            "netAmount": _money(summary.net_amount, precision),
        },
    }
