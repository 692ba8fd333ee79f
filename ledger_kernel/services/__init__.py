"""Mutating kernel services.  Services flush; callers commit."""

from ledger_kernel.services.account_registry import AccountRegistry
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.sequence_service import SequenceService
from ledger_kernel.services.transaction_ledger import TransactionLedger

__all__ = [
    "AccountRegistry",
    "BaseService",
    "SequenceService",
    "TransactionLedger",
]
