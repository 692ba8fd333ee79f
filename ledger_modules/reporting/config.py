"""
Reporting Configuration Schema.

Controls the default report window and display rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ledger_config.schema import LedgerSettings
from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    ``default_window_days`` is used when a report is requested without
    any dates: the window becomes the last N days up to today.
    """

    default_window_days: int = 30

    # Rounding precision for display
    display_precision: int = 2

    def __post_init__(self):
        if self.default_window_days < 1:
            raise ValueError("default_window_days must be at least 1")
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_settings(cls, settings: LedgerSettings) -> Self:
        return cls(default_window_days=settings.report_window_days)
