"""
Dashboard projection (``ledger_modules.dashboard.summary``).

Pure function over already-fetched accounts, transactions and account
types.  ZERO I/O; no validation.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ledger_kernel.domain.dtos import AccountInfo, AccountTypeInfo, TransactionInfo

from ledger_modules.dashboard.models import DashboardSummary

DEFAULT_RECENT_LIMIT = 5


def most_recent(
    transactions: Sequence[TransactionInfo],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> tuple[TransactionInfo, ...]:
    """
    The ``limit`` newest transactions by date.

    Equal dates are ordered by sequential id, newest first.
    """
    ordered = sorted(
        transactions,
        key=lambda t: (t.transaction_date, t.sequential_transaction_id),
        reverse=True,
    )
    return tuple(ordered[:limit])


def summarize(
    accounts: Sequence[AccountInfo],
    transactions: Sequence[TransactionInfo],
    account_types: Sequence[AccountTypeInfo],
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardSummary:
    """Count accounts, transactions and types and pick the recent window."""
    if recent_limit < 0:
        raise ValueError(f"recent_limit must be >= 0, got {recent_limit}")

    per_type = Counter(account.account_type.name for account in accounts)
    type_names = {t.name for t in account_types} | set(per_type)

    return DashboardSummary(
        total_accounts=len(accounts),
        owner_accounts=sum(1 for account in accounts if account.is_owner_account),
        total_transactions=len(transactions),
        total_account_types=len(account_types),
        recent_transactions=most_recent(transactions, recent_limit),
        accounts_by_type=tuple((name, per_type[name]) for name in sorted(type_names)),
    )
