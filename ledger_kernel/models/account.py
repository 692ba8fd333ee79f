"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the account registry -- account types and
    the accounts that transaction lines are booked against.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - AccountType.name is unique (uq_account_type_name) and is the human key
      used by the create/update account payload.
    - Account.name is unique (uq_account_name).  It is the join key between
      transaction lines and accounts: lines store the name literal, not the id.
    - sequential_account_id is allocated by SequenceService and is unique.

Failure modes:
    - IntegrityError on duplicate names if the service-level check is bypassed.

Audit relevance:
    Renaming or deleting an account does not touch historical transaction
    lines; those keep the name string captured when they were booked.
"""

from uuid import UUID

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TimestampMixin, UUIDString


class AccountType(TimestampMixin, Base):
    """
    A category of account (e.g. "Bank", "Customer", "Expense").

    Contract:
        Immutable in normal operation once referenced by an account; the
        registry refuses to rename or delete a referenced type.
    """

    __tablename__ = "account_types"

    __table_args__ = (
        UniqueConstraint("name", name="uq_account_type_name"),
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    accounts: Mapped[list["Account"]] = relationship(
        back_populates="account_type",
    )

    def __repr__(self) -> str:
        return f"<AccountType {self.name}>"


class Account(TimestampMixin, Base):
    """
    A registry account -- the target of transaction lines.

    Contract:
        name is unique and non-empty; account_type is always set.  Optional
        contact fields are either a non-empty trimmed string or NULL, never "".

    Guarantees:
        - sequential_account_id is a dense, human-facing number.
        - is_owner_account marks accounts belonging to the ledger's own entity.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("name", name="uq_account_name"),
        UniqueConstraint("sequential_account_id", name="uq_account_seq"),
        Index("idx_account_owner", "is_owner_account"),
    )

    sequential_account_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    account_type_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("account_types.id"),
        nullable=False,
    )

    # Bank account number, not the registry's own id
    account_number: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    branch: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    address: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    contact: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    is_owner_account: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    account_type: Mapped["AccountType"] = relationship(
        back_populates="accounts",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<Account {self.sequential_account_id}: {self.name}>"
