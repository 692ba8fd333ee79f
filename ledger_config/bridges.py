"""
Config -> Kernel bridges.

Functions that turn ``LedgerSettings`` into kernel objects.  They live in
ledger_config because the kernel must never import ledger_config.

Usage:
    settings = get_settings()
    engine = init_engine(settings)
    with session_scope() as session:
        ledger = build_transaction_ledger(session, settings)
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ledger_config.schema import LedgerSettings
from ledger_kernel.db.engine import init_engine_from_url
from ledger_kernel.logging_config import configure_logging
from ledger_kernel.services.transaction_ledger import TransactionLedger


def init_engine(settings: LedgerSettings, **engine_kwargs) -> Engine:
    """Configure logging at the settings' level, then create the engine."""
    configure_logging(level=settings.log_level_value)
    return init_engine_from_url(settings.database_url, **engine_kwargs)


def build_transaction_ledger(session: Session, settings: LedgerSettings) -> TransactionLedger:
    return TransactionLedger(
        session,
        tolerance=settings.balance_tolerance,
        default_status=settings.default_transaction_status,
    )
