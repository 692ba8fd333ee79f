"""Dashboard value objects."""

from __future__ import annotations

from dataclasses import dataclass

from ledger_kernel.domain.dtos import TransactionInfo


@dataclass(frozen=True)
class DashboardSummary:
    """
    Headline counts for the ledger plus its most recent transactions.

    ``accounts_by_type`` pairs each account type name with the number of
    accounts of that type, ordered by type name; types with no accounts
    are listed with a count of zero.
    """

    total_accounts: int
    owner_accounts: int
    total_transactions: int
    total_account_types: int
    recent_transactions: tuple[TransactionInfo, ...]
    accounts_by_type: tuple[tuple[str, int], ...]

    def to_dict(self) -> dict:
        return {
            "totalAccounts": self.total_accounts,
            "ownerAccounts": self.owner_accounts,
            "totalTransactions": self.total_transactions,
            "totalAccountTypes": self.total_account_types,
            "recentTransactions": [t.to_payload() for t in self.recent_transactions],
            "accountsByType": [
                {"type": name, "count": count} for name, count in self.accounts_by_type
            ],
        }
