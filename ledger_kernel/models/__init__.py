"""ORM models for the ledger kernel."""

from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.models.sequence import SequenceCounter
from ledger_kernel.models.transaction import (
    LineSide,
    Transaction,
    TransactionLine,
    TransactionStatus,
)

__all__ = [
    "Account",
    "AccountType",
    "SequenceCounter",
    "Transaction",
    "TransactionLine",
    "TransactionStatus",
    "LineSide",
]
