"""
Injectable "now" for code whose defaults depend on the current date.

ReportingService asks its clock for today() to build the default report
window; tests hand it a DeterministicClock instead of the system clock.
"""

from abc import ABC, abstractmethod
from datetime import UTC, date, datetime, timedelta


class Clock(ABC):
    """Source of timezone-aware UTC time."""

    @abstractmethod
    def now(self) -> datetime: ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(UTC)


class DeterministicClock(Clock):
    """Stands still at ``at`` (2024-01-01 12:00 UTC by default) until moved."""

    def __init__(self, at: datetime | None = None):
        self._at = at or datetime(2024, 1, 1, 12, tzinfo=UTC)

    def now(self) -> datetime:
        return self._at

    def set_time(self, at: datetime) -> None:
        self._at = at

    def advance(self, seconds: int = 1) -> None:
        self._at += timedelta(seconds=seconds)
