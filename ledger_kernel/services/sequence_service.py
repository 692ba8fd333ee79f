"""
SequenceService -- monotonic sequence allocation via locked counter rows.

Responsibility:
    Provides strictly increasing numbers for the human-facing sequential
    account and transaction ids.  Uses a dedicated counter table with
    row-level locking (``SELECT ... FOR UPDATE``) so that concurrent
    creates are serialized on the counter row.

Architecture position:
    Kernel > Services.  Called by AccountRegistry and TransactionLedger.

Invariants enforced:
    - The SQL aggregate-max-plus-one pattern is never used; the locked
      counter row is the sole source of truth for the next value.
    - The increment is only visible after the caller's transaction commits.
      Rollback returns the value.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.sequence import SequenceCounter

logger = get_logger("services.sequence")


class SequenceService:
    """
    Service for generating transactional sequence numbers.

    Usage:
        seq = SequenceService(session).next_value(SequenceService.TRANSACTION)
    """

    ACCOUNT = "account"
    TRANSACTION = "transaction"

    def __init__(self, session: Session):
        self._session = session

    def _locked_counter(self, sequence_name: str) -> SequenceCounter | None:
        return self._session.execute(
            select(SequenceCounter)
            .where(SequenceCounter.name == sequence_name)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def next_value(self, sequence_name: str) -> int:
        """
        Lock (or create) the counter row, increment it and return the new value.

        Postconditions:
            - Returns an integer > 0 strictly greater than any value previously
              committed for this sequence name.
        """
        counter = self._locked_counter(sequence_name)

        if counter is None:
            counter = SequenceCounter(name=sequence_name, current_value=0)
            self._session.add(counter)

        counter.current_value += 1
        self._session.flush()
        logger.debug(
            "sequence_allocated",
            extra={"sequence_name": sequence_name, "value": counter.current_value},
        )
        return counter.current_value

    def current_value(self, sequence_name: str) -> int | None:
        """Current value of a sequence without incrementing (None if never used)."""
        counter = self._session.execute(
            select(SequenceCounter).where(SequenceCounter.name == sequence_name)
        ).scalar_one_or_none()
        return counter.current_value if counter is not None else None
