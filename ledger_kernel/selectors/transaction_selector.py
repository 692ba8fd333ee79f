"""
Module: ledger_kernel.selectors.transaction_selector
Responsibility: Windowed, paginated reads of stored transactions.  This is
    the "fetch transactions" side of the storage boundary: callers receive
    transactions already filtered to the requested date window.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Window bounds are inclusive on both ends; a missing bound is open.
    - Order is newest first: transaction date descending, then sequential
      transaction id descending, so equal dates have a stable order.
"""

from __future__ import annotations

import math
from datetime import date
from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.db.storage import coerce_id, storage_errors
from ledger_kernel.domain.dtos import TransactionInfo, TransactionPage
from ledger_kernel.models.transaction import Transaction
from ledger_kernel.selectors.base import BaseSelector


class TransactionSelector(BaseSelector):
    """Selector for transaction queries."""

    @staticmethod
    def _window(statement, start_date: date | None, end_date: date | None):
        if start_date is not None:
            statement = statement.where(Transaction.transaction_date >= start_date)
        if end_date is not None:
            statement = statement.where(Transaction.transaction_date <= end_date)
        return statement

    def list(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> TransactionPage:
        """
        Fetch one page of transactions inside ``[start_date, end_date]``.

        With no ``limit`` the whole window is returned as a single page.

        Raises:
            ValueError: If page < 1 or limit < 1.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        with storage_errors("transaction.list"):
            total = self.session.execute(
                self._window(
                    select(func.count(Transaction.id)), start_date, end_date
                )
            ).scalar_one()

            statement = self._window(
                select(Transaction), start_date, end_date
            ).order_by(
                Transaction.transaction_date.desc(),
                Transaction.sequential_transaction_id.desc(),
            )
            if limit is not None:
                statement = statement.offset((page - 1) * limit).limit(limit)

            rows = self.session.execute(statement).scalars().all()
            transactions = tuple(TransactionInfo.from_model(row) for row in rows)

        total_pages = max(1, math.ceil(total / limit)) if limit else 1
        return TransactionPage(
            transactions=transactions,
            total_pages=total_pages,
            current_page=page,
            total=total,
        )

    def all_in_window(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[TransactionInfo]:
        """Every transaction inside the window, newest first."""
        return list(self.list(start_date, end_date).transactions)

    def recent(self, limit: int) -> list[TransactionInfo]:
        return list(self.list(page=1, limit=limit).transactions)

    def get(self, transaction_id: UUID | str) -> TransactionInfo | None:
        parsed = coerce_id(transaction_id)
        if parsed is None:
            return None
        with storage_errors("transaction.get"):
            row = self.session.get(Transaction, parsed)
            return TransactionInfo.from_model(row) if row is not None else None

    def count(self) -> int:
        with storage_errors("transaction.count"):
            return self.session.execute(
                select(func.count(Transaction.id))
            ).scalar_one()
