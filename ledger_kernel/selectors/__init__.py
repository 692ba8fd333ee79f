"""Read-only query selectors."""

from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.transaction_selector import TransactionSelector

__all__ = [
    "AccountSelector",
    "BaseSelector",
    "TransactionSelector",
]
