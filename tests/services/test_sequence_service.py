"""Tests for SequenceService (ledger_kernel/services/sequence_service.py)."""

from ledger_kernel.services.sequence_service import SequenceService


class TestSequenceService:

    def test_starts_at_one(self, session):
        assert SequenceService(session).next_value("demo") == 1

    def test_monotonic(self, session):
        service = SequenceService(session)
        values = [service.next_value("demo") for _ in range(5)]
        assert values == [1, 2, 3, 4, 5]

    def test_sequences_are_independent(self, session):
        service = SequenceService(session)
        service.next_value(SequenceService.ACCOUNT)
        service.next_value(SequenceService.ACCOUNT)
        assert service.next_value(SequenceService.TRANSACTION) == 1

    def test_current_value(self, session):
        service = SequenceService(session)
        assert service.current_value("demo") is None
        service.next_value("demo")
        assert service.current_value("demo") == 1

    def test_rollback_returns_value(self, session):
        service = SequenceService(session)
        service.next_value("demo")
        session.commit()
        service.next_value("demo")
        session.rollback()
        assert service.next_value("demo") == 2
