"""Dashboard module: ledger-wide counts and recent transactions."""

from ledger_modules.dashboard.models import DashboardSummary
from ledger_modules.dashboard.service import DashboardService
from ledger_modules.dashboard.summary import summarize

__all__ = [
    "DashboardService",
    "DashboardSummary",
    "summarize",
]
