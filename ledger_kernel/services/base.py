"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every service in the kernel layer.  All concrete services inherit
    from BaseService, receiving a SQLAlchemy ``Session`` that they use
    via ``session.flush()`` -- never ``session.commit()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    - Transaction boundaries: services flush within the caller's
      transaction and never commit or rollback themselves.  The caller
      (normally ``session_scope()``) owns commit/rollback, so a failed
      operation leaves nothing behind.
    - Storage failures surface as UpstreamFailure (see db/storage.py);
      nothing is retried.
"""

from abc import ABC
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base
from ledger_kernel.db.storage import coerce_id, storage_errors

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Contract:
        Accepts a SQLAlchemy ``Session`` from the caller and uses
        ``session.flush()`` to persist changes within the active
        transaction.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide query-only (read) methods -- those belong
          in ``ledger_kernel/selectors/``.
    """

    model: type[ModelType]

    def __init__(self, session: Session):
        self.session = session

    def _load(self, entity_id: UUID | str) -> ModelType | None:
        """Fetch the ORM row for ``entity_id``; None if absent or malformed."""
        parsed = coerce_id(entity_id)
        if parsed is None:
            return None
        with storage_errors(f"{self.model.__tablename__}.load"):
            return self.session.get(self.model, parsed)
