"""
Settings schema (``ledger_config.schema``).

Frozen dataclass holding every runtime knob of the ledger.  Values are
checked on construction; a bad value raises ``ValueError`` naming the
offending key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any

from ledger_kernel.models.transaction import TransactionStatus

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LedgerSettings:
    """
    Runtime settings for the ledger.

    Attributes:
        database_url: SQLAlchemy URL of the store.
        balance_tolerance: Largest |credits - debits| accepted as balanced.
        recent_transactions_limit: Size of the dashboard's recent window.
        default_transaction_status: Status given to newly created transactions.
        page_size: Default page size for transaction listings.
        report_window_days: Length of the default report window.
        log_level: Level name for the ledger_kernel logger hierarchy.
    """

    database_url: str = "sqlite:///ledger.db"
    balance_tolerance: Decimal = Decimal("0.01")
    recent_transactions_limit: int = 5
    default_transaction_status: TransactionStatus = TransactionStatus.PENDING
    page_size: int = 50
    report_window_days: int = 30
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.database_url:
            raise ValueError("database_url must not be empty")
        if self.balance_tolerance < 0:
            raise ValueError(
                f"balance_tolerance must be >= 0, got {self.balance_tolerance}"
            )
        for name in ("recent_transactions_limit", "page_size", "report_window_days"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LedgerSettings:
        """
        Build settings from a plain mapping (YAML document or env overrides).

        Unknown keys are rejected; missing keys keep their defaults.

        Raises:
            ValueError: On unknown keys or values that cannot be converted.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            kwargs[key] = _convert(key, value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "database_url": self.database_url,
            "balance_tolerance": str(self.balance_tolerance),
            "recent_transactions_limit": self.recent_transactions_limit,
            "default_transaction_status": self.default_transaction_status.value,
            "page_size": self.page_size,
            "report_window_days": self.report_window_days,
            "log_level": self.log_level,
        }


def _convert(key: str, value: Any) -> Any:
    if key == "database_url":
        return str(value).strip()
    if key == "balance_tolerance":
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"balance_tolerance is not a number: {value!r}") from None
    if key == "default_transaction_status":
        try:
            return TransactionStatus(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"default_transaction_status is not a valid status: {value!r}"
            ) from None
    if key == "log_level":
        return str(value).strip().upper()
    # Remaining keys are integers
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None
