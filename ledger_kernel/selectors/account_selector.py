"""
Module: ledger_kernel.selectors.account_selector
Responsibility: Read-only queries over the account registry -- accounts,
    owner accounts, account types and the historical lines still carrying an
    account's name.
Architecture position: Kernel > Selectors.

Failure modes:
    - SQLAlchemyError is re-raised as UpstreamFailure.
"""

from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.db.storage import coerce_id, storage_errors
from ledger_kernel.domain.dtos import AccountInfo, AccountTypeInfo
from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.models.transaction import TransactionLine
from ledger_kernel.selectors.base import BaseSelector


class AccountSelector(BaseSelector):
    """Selector for account registry queries."""

    def all(self) -> list[AccountInfo]:
        """Every account, ordered by sequential account id."""
        with storage_errors("account.list"):
            rows = self.session.execute(
                select(Account).order_by(Account.sequential_account_id)
            ).scalars().all()
            return [AccountInfo.from_model(row) for row in rows]

    def owner_accounts(self) -> list[AccountInfo]:
        """Accounts flagged as belonging to the ledger's own entity."""
        with storage_errors("account.list_owner"):
            rows = self.session.execute(
                select(Account)
                .where(Account.is_owner_account.is_(True))
                .order_by(Account.sequential_account_id)
            ).scalars().all()
            return [AccountInfo.from_model(row) for row in rows]

    def get(self, account_id: UUID | str) -> AccountInfo | None:
        parsed = coerce_id(account_id)
        if parsed is None:
            return None
        with storage_errors("account.get"):
            row = self.session.get(Account, parsed)
            return AccountInfo.from_model(row) if row is not None else None

    def get_by_name(self, name: str) -> AccountInfo | None:
        with storage_errors("account.get_by_name"):
            row = self.session.execute(
                select(Account).where(Account.name == name)
            ).scalar_one_or_none()
            return AccountInfo.from_model(row) if row is not None else None

    def account_names(self) -> frozenset[str]:
        """Names of every selectable account (the join key used by lines)."""
        with storage_errors("account.names"):
            return frozenset(
                self.session.execute(select(Account.name)).scalars().all()
            )

    def account_types(self) -> list[AccountTypeInfo]:
        """Every account type, ordered by name."""
        with storage_errors("account_type.list"):
            rows = self.session.execute(
                select(AccountType).order_by(AccountType.name)
            ).scalars().all()
            return [AccountTypeInfo.from_model(row) for row in rows]

    def count_accounts_for_type(self, account_type_id: UUID) -> int:
        with storage_errors("account_type.count_accounts"):
            return self.session.execute(
                select(func.count(Account.id)).where(
                    Account.account_type_id == account_type_id
                )
            ).scalar_one()

    def count_lines_for_name(self, name: str) -> int:
        """Number of stored transaction lines booked against ``name``."""
        with storage_errors("account.count_lines"):
            return self.session.execute(
                select(func.count(TransactionLine.id)).where(
                    TransactionLine.account_name == name
                )
            ).scalar_one()
