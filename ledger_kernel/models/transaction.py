"""
Module: ledger_kernel.models.transaction
Responsibility: ORM persistence for transactions and their lines -- the
    single source of financial truth in this system.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Balance: credits == debits within the configured tolerance (checked by
      TransactionLedger before flush; TransactionInfo.is_balanced re-checks it).
    - Lines are owned exclusively by their transaction (delete-orphan cascade).
    - serial_number is dense 1..N within a transaction, in submission order.
    - Lines store account_name as a literal string.  There is deliberately no
      foreign key to accounts: a line is a historical snapshot.

Failure modes:
    - ValidationError (raised by the ledger, not this model) when a draft is
      unbalanced or has invalid rows.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, MoneyType, TimestampMixin, UUIDString


class TransactionStatus(str, Enum):
    """Lifecycle status of a transaction."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class LineSide(str, Enum):
    """Which side of the transaction this line is on.

    Amount is always positive; side determines sign convention.
    """

    DEBIT = "debit"
    CREDIT = "credit"


class Transaction(TimestampMixin, Base):
    """
    Transaction header -- the atomic unit of double-entry bookkeeping.

    Contract:
        Has at least one line.  total_amount equals the common credit/debit
        total once the transaction is balanced.

    Non-goals:
        - This model does NOT enforce balance at the ORM level; enforcement
          lives in TransactionLedger.
    """

    __tablename__ = "transactions"

    __table_args__ = (
        UniqueConstraint("sequential_transaction_id", name="uq_transaction_seq"),
        Index("idx_transaction_date", "transaction_date"),
        Index("idx_transaction_status", "status"),
    )

    sequential_transaction_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    # Calendar date of the transaction (drives report windows)
    transaction_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    total_amount: Mapped[Decimal] = mapped_column(
        MoneyType(),
        nullable=False,
    )

    status: Mapped[TransactionStatus] = mapped_column(
        String(10),
        default=TransactionStatus.PENDING,
        nullable=False,
    )

    lines: Mapped[list["TransactionLine"]] = relationship(
        back_populates="transaction",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TransactionLine.serial_number",
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.sequential_transaction_id} {self.transaction_date}>"


class TransactionLine(TimestampMixin, Base):
    """
    Individual debit or credit line within a transaction.

    Contract:
        Belongs to exactly one Transaction and records a positive amount on
        one side against an account identified by name.
    """

    __tablename__ = "transaction_lines"

    __table_args__ = (
        Index("idx_line_transaction", "transaction_id"),
        Index("idx_line_account_name", "account_name"),
    )

    transaction_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("transactions.id"),
        nullable=False,
    )

    # Presentation order within the transaction, not an identity
    serial_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    account_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(
        MoneyType(),
        nullable=False,
    )

    side: Mapped[LineSide] = mapped_column(
        String(10),
        nullable=False,
    )

    transaction: Mapped["Transaction"] = relationship(
        back_populates="lines",
    )

    def __repr__(self) -> str:
        return f"<TransactionLine {self.serial_number} {self.side} {self.amount}>"
