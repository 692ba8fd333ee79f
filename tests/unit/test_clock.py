"""Unit tests for the injectable clocks (ledger_kernel/domain/clock.py)."""

from datetime import UTC, date, datetime

from ledger_kernel.domain.clock import DeterministicClock, SystemClock


class TestDeterministicClock:

    def test_fixed_until_moved(self):
        clock = DeterministicClock(datetime(2024, 1, 31, 23, 59, 0, tzinfo=UTC))
        assert clock.now() == clock.now()
        assert clock.today() == date(2024, 1, 31)

    def test_advance_crosses_midnight(self):
        clock = DeterministicClock(datetime(2024, 1, 31, 23, 59, 0, tzinfo=UTC))
        clock.advance(120)
        assert clock.today() == date(2024, 2, 1)

    def test_set_time_replaces_advanced_time(self):
        clock = DeterministicClock()
        clock.advance(3600)
        clock.set_time(datetime(2024, 6, 1, tzinfo=UTC))
        assert clock.now() == datetime(2024, 6, 1, tzinfo=UTC)


def test_system_clock_is_timezone_aware():
    assert SystemClock().now().tzinfo is not None
