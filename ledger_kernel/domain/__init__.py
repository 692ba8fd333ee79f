"""Pure domain layer: DTOs, line helpers and the clock abstraction."""

from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.dtos import (
    AccountData,
    AccountInfo,
    AccountTypeInfo,
    LineDraft,
    TransactionDraft,
    TransactionInfo,
    TransactionLineInfo,
    TransactionPage,
    ValidationIssue,
    ValidationResult,
    parse_flag,
    resolve_account_name,
)
from ledger_kernel.domain.lines import (
    LineTotals,
    add_line,
    remove_line,
    renumber,
    totals,
    validate_lines,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "AccountData",
    "AccountInfo",
    "AccountTypeInfo",
    "LineDraft",
    "TransactionDraft",
    "TransactionInfo",
    "TransactionLineInfo",
    "TransactionPage",
    "ValidationIssue",
    "ValidationResult",
    "parse_flag",
    "resolve_account_name",
    "LineTotals",
    "add_line",
    "remove_line",
    "renumber",
    "totals",
    "validate_lines",
]
