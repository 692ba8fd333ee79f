"""
Dashboard Module Service (``ledger_modules.dashboard.service``).

Fetches accounts, account types and transactions through the kernel
selectors and hands them to the pure ``summarize``.  Read-only.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from ledger_config.schema import LedgerSettings
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.transaction_selector import TransactionSelector

from ledger_modules.dashboard.models import DashboardSummary
from ledger_modules.dashboard.summary import DEFAULT_RECENT_LIMIT, summarize

logger = get_logger("modules.dashboard.service")


class DashboardService:
    """Dashboard summary over the whole ledger."""

    def __init__(self, session: Session, settings: LedgerSettings | None = None):
        self._session = session
        self._recent_limit = (
            settings.recent_transactions_limit if settings else DEFAULT_RECENT_LIMIT
        )
        self._accounts = AccountSelector(session)
        self._transactions = TransactionSelector(session)

    def summary(self) -> DashboardSummary:
        result = summarize(
            accounts=self._accounts.all(),
            transactions=self._transactions.all_in_window(),
            account_types=self._accounts.account_types(),
            recent_limit=self._recent_limit,
        )
        logger.info(
            "dashboard_summarized",
            extra={
                "total_accounts": result.total_accounts,
                "total_transactions": result.total_transactions,
                "recent_count": len(result.recent_transactions),
            },
        )
        return result
