"""Tests for DashboardService (ledger_modules/dashboard/service.py)."""

from ledger_config.schema import LedgerSettings
from ledger_modules.dashboard.service import DashboardService


def test_summary_over_stored_data(session, ledger, seeded_accounts, balanced_lines):
    for day in range(1, 8):
        ledger.create(f"2024-01-{day:02d}", balanced_lines)

    summary = DashboardService(session).summary()
    assert summary.total_accounts == 3
    assert summary.owner_accounts == 2
    assert summary.total_transactions == 7
    assert summary.total_account_types == 2
    assert summary.accounts_by_type == (("Bank", 2), ("Customer", 1))
    assert [t.sequential_transaction_id for t in summary.recent_transactions] == [7, 6, 5, 4, 3]


def test_recent_limit_from_settings(session, ledger, seeded_accounts, balanced_lines):
    for day in range(1, 4):
        ledger.create(f"2024-01-{day:02d}", balanced_lines)

    settings = LedgerSettings(recent_transactions_limit=2)
    summary = DashboardService(session, settings=settings).summary()
    assert len(summary.recent_transactions) == 2
