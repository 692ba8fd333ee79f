"""Database layer - engine, base classes, and money types."""

from ledger_kernel.db.base import Base, MoneyType, TimestampMixin, UUIDString
from ledger_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)
from ledger_kernel.db.types import BALANCE_TOLERANCE, parse_amount, round_money

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "MoneyType",
    "TimestampMixin",
    "UUIDString",
    "BALANCE_TOLERANCE",
    "parse_amount",
    "round_money",
]
