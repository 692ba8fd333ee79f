"""
JSON-lines logging for the ledger kernel.

Each record is emitted as one JSON object: the event name as ``message``,
every ``extra=`` field, and whichever transaction/account id is bound by
LogContext while a write is in progress.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from typing import Any

_ROOT_LOGGER = "ledger_kernel"

_bound_ids: ContextVar[dict[str, str]] = ContextVar("ledger_log_ids")


class LogContext:
    """Entity ids stamped onto every record logged inside ``bind()``."""

    FIELDS = ("transaction_id", "account_id")

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_bound_ids.get({}))

    @classmethod
    def clear(cls) -> None:
        _bound_ids.set({})

    @classmethod
    @contextmanager
    def bind(cls, **ids: Any) -> Iterator[None]:
        """
        Stamp ``transaction_id`` and/or ``account_id`` for the block.

        Values are stringified; None leaves a field unbound.  The previous
        binding is restored on exit.
        """
        unknown = set(ids) - set(cls.FIELDS)
        if unknown:
            raise TypeError(f"Unsupported log context field(s): {sorted(unknown)}")
        merged = dict(_bound_ids.get({}))
        merged.update({key: str(value) for key, value in ids.items() if value is not None})
        token = _bound_ids.set(merged)
        try:
            yield
        finally:
            _bound_ids.reset(token)


# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    # Decimal, UUID and enums
    return str(value)


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                entry.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "code": getattr(error, "code", None),
            }
            entry["traceback"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=_json_default)


def get_logger(name: str) -> logging.Logger:
    """Logger named ``ledger_kernel.<name>``."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


_installed_handler: logging.Handler | None = None


def configure_logging(
    *,
    level: int | str = logging.INFO,
    handler: logging.Handler | None = None,
) -> None:
    """
    Send ``ledger_kernel.*`` records to one JSON handler at ``level``.

    Calling again swaps the handler and level installed by the previous
    call; handlers added by other code are left alone.
    """
    global _installed_handler

    root = logging.getLogger(_ROOT_LOGGER)
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    _installed_handler = handler or logging.StreamHandler()
    _installed_handler.setFormatter(StructuredFormatter())
    root.addHandler(_installed_handler)
    root.setLevel(level)
    root.propagate = False


def reset_logging() -> None:
    """Undo configure_logging()."""
    global _installed_handler

    root = logging.getLogger(_ROOT_LOGGER)
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
        _installed_handler = None
    root.setLevel(logging.NOTSET)
    root.propagate = True
