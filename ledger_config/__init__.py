"""
ledger_config -- single public entrypoint for runtime settings.

Responsibility:
    Provides ``get_settings()``, which reads the optional YAML settings
    file and ``LEDGER_*`` environment overrides and returns a validated,
    frozen ``LedgerSettings``.

Architecture position:
    Configuration sits above ``ledger_kernel`` and below
    ``ledger_modules``.  The kernel MUST NEVER import from
    ``ledger_config``; ``ledger_config.bridges`` translates settings into
    kernel objects.

Failure modes:
    - ``FileNotFoundError`` -- an explicit settings file does not exist.
    - ``ValueError`` -- unknown keys or invalid values.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from ledger_config.loader import load_raw_settings
from ledger_config.schema import LedgerSettings

_logger = logging.getLogger("ledger_kernel.config")


def get_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> LedgerSettings:
    """
    Load runtime settings.

    Args:
        path: YAML settings file.  Defaults to ``$LEDGER_CONFIG`` when set;
            with neither, only defaults and environment overrides apply.
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If a setting is unknown or invalid.
    """
    environ = os.environ if environ is None else environ
    raw = load_raw_settings(Path(path) if path is not None else None, environ)
    settings = LedgerSettings.from_dict(raw)

    _logger.info(
        "ledger_settings_loaded",
        extra={
            "source_keys": sorted(raw),
            "report_window_days": settings.report_window_days,
            "default_transaction_status": settings.default_transaction_status.value,
        },
    )
    return settings


__all__ = [
    "LedgerSettings",
    "get_settings",
]
