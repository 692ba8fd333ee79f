"""
Storage-boundary helpers shared by services and selectors.

Any SQLAlchemyError raised while talking to the store leaves the kernel as
UpstreamFailure, with the driver exception chained as ``__cause__``.
"""

from contextlib import contextmanager
from typing import Generator
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from ledger_kernel.exceptions import UpstreamFailure
from ledger_kernel.logging_config import get_logger

logger = get_logger("db.storage")


@contextmanager
def storage_errors(operation: str) -> Generator[None, None, None]:
    """
    Re-raise any SQLAlchemyError inside the block as UpstreamFailure.

    Kernel errors (validation, not-found) pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "storage_failure",
            extra={"operation": operation},
            exc_info=True,
        )
        raise UpstreamFailure(operation, type(exc).__name__) from exc


def coerce_id(value: UUID | str) -> UUID | None:
    """Parse an id given as UUID or string; None when it cannot be an id."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None
