"""
TransactionLedger -- owns the lifetime of transactions and their lines.

Responsibility:
    Validates a submitted date plus line drafts against the double-entry
    balance law and the current account registry, then stores the
    transaction with dense serial numbers and a sequential id.

Architecture position:
    Kernel > Services.  Validation is the pure validate_lines() from
    domain/lines.py; persistence is a flush inside the caller's session.

Invariants enforced:
    - All violations of one submission are collected and raised together
      as a single ValidationError; nothing is written when any exist.
    - Stored lines are renumbered 1..N in submission order.
    - total_amount is the balanced credit total.
    - Validation, sequence allocation and line writes happen inside one
      database transaction; the sequence counter row lock serializes
      concurrent creates.

Failure modes:
    - ValidationError: row or balance violations, or an unparseable date.
    - TransactionNotFoundError: unknown id on get/update/delete.
    - UpstreamFailure: the store failed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.db.storage import storage_errors
from ledger_kernel.db.types import BALANCE_TOLERANCE
from ledger_kernel.domain.dtos import (
    LineDraft,
    TransactionDraft,
    TransactionInfo,
    ValidationIssue,
    parse_transaction_date,
)
from ledger_kernel.domain.lines import renumber, totals, validate_lines
from ledger_kernel.exceptions import TransactionNotFoundError, ValidationError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.transaction import (
    Transaction,
    TransactionLine,
    TransactionStatus,
)
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.sequence_service import SequenceService

logger = get_logger("services.transaction_ledger")


class TransactionLedger(BaseService[Transaction]):
    """
    Create, read and delete balanced transactions.

    Args:
        session: Caller-owned session; the ledger only flushes.
        tolerance: Largest |credits - debits| accepted as balanced.
        default_status: Status assigned when create() is given none.
    """

    model = Transaction

    def __init__(
        self,
        session: Session,
        tolerance: Decimal = BALANCE_TOLERANCE,
        default_status: TransactionStatus = TransactionStatus.PENDING,
    ):
        super().__init__(session)
        self._tolerance = tolerance
        self._default_status = TransactionStatus(default_status)
        self._accounts = AccountSelector(session)
        self._sequences = SequenceService(session)

    @property
    def tolerance(self) -> Decimal:
        return self._tolerance

    def create(
        self,
        transaction_date: date | str,
        lines: Iterable[LineDraft | Mapping[str, Any]],
        status: TransactionStatus | None = None,
    ) -> TransactionInfo:
        """
        Validate and store a transaction.

        Args:
            transaction_date: Calendar date, or an ISO date/timestamp string.
            lines: Line drafts, or detail mappings ``{account, description,
                amount, type}``.
            status: Overrides the ledger's default status.

        Raises:
            ValidationError: Listing every row violation, then the balance
                violation, rows numbered from 1.
        """
        day, drafts = self._validated(transaction_date, lines)
        numbered = renumber(drafts)
        sums = totals(numbered)
        status = TransactionStatus(status) if status is not None else self._default_status

        with storage_errors("transaction.create"):
            transaction = Transaction(
                sequential_transaction_id=self._sequences.next_value(
                    SequenceService.TRANSACTION
                ),
                transaction_date=day,
                total_amount=sums.credit,
                status=status.value,
                lines=[
                    TransactionLine(
                        serial_number=draft.serial_number,
                        account_name=str(draft.account_name).strip(),
                        description=str(draft.description).strip(),
                        amount=draft.parsed_amount,
                        side=draft.parsed_side.value,
                    )
                    for draft in numbered
                ],
            )
            self.session.add(transaction)
            self.session.flush()

        with LogContext.bind(transaction_id=transaction.id):
            logger.info(
                "transaction_created",
                extra={
                    "sequential_transaction_id": transaction.sequential_transaction_id,
                    "transaction_date": day,
                    "line_count": len(numbered),
                    "total_amount": str(sums.credit),
                    "status": status.value,
                },
            )
        return TransactionInfo.from_model(transaction)

    def create_from_payload(self, payload: Mapping[str, Any]) -> TransactionInfo:
        """Create from the wire shape ``{date, details: [...]}``."""
        draft = TransactionDraft.from_payload(payload)
        return self.create(draft.transaction_date, draft.lines)

    def get(self, transaction_id: UUID | str) -> TransactionInfo:
        return TransactionInfo.from_model(self._require(transaction_id))

    def update(
        self,
        transaction_id: UUID | str,
        transaction_date: date | str,
        lines: Iterable[LineDraft | Mapping[str, Any]],
    ) -> TransactionInfo:
        """
        Validate an edit of a stored transaction without applying it.

        Edits are checked exactly like create(); a valid edit is logged as
        ``transaction_update_ignored`` and the stored transaction is
        returned unchanged.
        """
        transaction = self._require(transaction_id)
        _, drafts = self._validated(transaction_date, lines)

        with LogContext.bind(transaction_id=transaction.id):
            logger.warning(
                "transaction_update_ignored",
                extra={
                    "sequential_transaction_id": transaction.sequential_transaction_id,
                    "line_count": len(drafts),
                },
            )
        return TransactionInfo.from_model(transaction)

    def delete(self, transaction_id: UUID | str) -> None:
        transaction = self._require(transaction_id)
        sequential_id = transaction.sequential_transaction_id

        with storage_errors("transaction.delete"):
            self.session.delete(transaction)
            self.session.flush()

        with LogContext.bind(transaction_id=transaction.id):
            logger.info(
                "transaction_deleted",
                extra={"sequential_transaction_id": sequential_id},
            )

    def _require(self, transaction_id: UUID | str) -> Transaction:
        transaction = self._load(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(str(transaction_id))
        return transaction

    def _validated(
        self,
        transaction_date: date | str,
        lines: Iterable[LineDraft | Mapping[str, Any]],
    ) -> tuple[date, tuple[LineDraft, ...]]:
        """Parse and check a submission; raise one ValidationError for all problems."""
        drafts = tuple(
            line if isinstance(line, LineDraft) else LineDraft.from_payload(line)
            for line in lines
        )
        issues: list[ValidationIssue] = []

        day = None
        try:
            day = parse_transaction_date(transaction_date)
        except (TypeError, ValueError):
            issues.append(
                ValidationIssue(
                    code="DATE_INVALID",
                    message="Date must be an ISO calendar date",
                )
            )

        result = validate_lines(
            drafts,
            known_accounts=self._accounts.account_names(),
            tolerance=self._tolerance,
        )
        issues.extend(result.issues)

        if issues:
            logger.warning(
                "transaction_validation_failed",
                extra={
                    "issue_count": len(issues),
                    "messages": [issue.message for issue in issues],
                },
            )
            raise ValidationError(issues)
        return day, drafts
