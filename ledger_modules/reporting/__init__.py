"""
Account Reporting Module (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that reconstructs per-account financial positions from
the transaction history: totals per side, net amount and the matched
entries of every account with activity in a date window, plus a summary
across those accounts.

Architecture position
---------------------
**Modules layer** -- all report logic is the pure ``generate`` function;
``ReportingService`` only fetches inputs.
"""

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    AccountReport,
    LedgerReport,
    ReportEntry,
    ReportFilter,
    ReportSummary,
)
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import generate, report_to_dict

__all__ = [
    "AccountReport",
    "LedgerReport",
    "ReportEntry",
    "ReportFilter",
    "ReportSummary",
    "ReportingConfig",
    "ReportingService",
    "generate",
    "report_to_dict",
]
