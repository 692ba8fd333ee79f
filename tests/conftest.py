"""
Pytest fixtures for the ledger test suite.

Provides:
- Structured logging configuration and a captured_logs fixture
- An in-memory SQLite database per test (engine, session)
- A deterministic clock
- Registry/ledger services and a seeded account registry
- Builders for pure DTOs used by the reporting and dashboard tests
"""

import json
import logging
from datetime import UTC, date, datetime
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.domain.dtos import (
    AccountInfo,
    AccountTypeInfo,
    LineDraft,
    TransactionInfo,
    TransactionLineInfo,
)
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.models.transaction import LineSide, TransactionStatus
from ledger_kernel.services.account_registry import AccountRegistry
from ledger_kernel.services.transaction_ledger import TransactionLedger


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, ledger):
            ledger.create(...)
            logs = captured_logs()
            assert any(r["message"] == "transaction_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables."""
    reset_engine()
    eng = init_engine_from_url("sqlite:///:memory:")
    create_tables()
    yield eng
    drop_tables()
    reset_engine()


@pytest.fixture
def session(engine):
    sess = get_session()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def clock():
    """Clock frozen at 2024-01-31 12:00 UTC."""
    return DeterministicClock(datetime(2024, 1, 31, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def registry(session):
    return AccountRegistry(session)


@pytest.fixture
def ledger(session):
    return TransactionLedger(session)


@pytest.fixture
def seeded_accounts(registry, session):
    """
    Two types and three accounts:

    - "Main Bank" (Bank, owner)
    - "Acme Ltd" (Customer, not owner)
    - "Petty Cash" (Bank, owner)
    """
    registry.create_type("Bank", "Bank and cash accounts")
    registry.create_type("Customer")
    accounts = {
        "bank": registry.create(
            {"name": "Main Bank", "type": "Bank", "isOwnerAccount": True}
        ),
        "customer": registry.create(
            {"name": "Acme Ltd", "type": "Customer", "isOwnerAccount": False}
        ),
        "cash": registry.create(
            {"name": "Petty Cash", "type": "Bank", "isOwnerAccount": True}
        ),
    }
    session.flush()
    return accounts


@pytest.fixture
def balanced_lines():
    """A balanced two-line draft between Main Bank and Acme Ltd."""
    return [
        LineDraft(account_name="Main Bank", description="rent", amount="500", side="credit"),
        LineDraft(account_name="Acme Ltd", description="rent", amount="500", side="debit"),
    ]


# =============================================================================
# Pure DTO builders
# =============================================================================


@pytest.fixture
def make_account():
    """Build an AccountInfo without touching the database."""
    counter = iter(range(1, 10_000))
    types: dict[str, AccountTypeInfo] = {}

    def _make(name: str, owner: bool = False, type_name: str = "General") -> AccountInfo:
        account_type = types.setdefault(
            type_name, AccountTypeInfo(id=uuid4(), name=type_name)
        )
        return AccountInfo(
            id=uuid4(),
            sequential_account_id=next(counter),
            name=name,
            account_type=account_type,
            is_owner_account=owner,
        )

    return _make


@pytest.fixture
def make_transaction():
    """
    Build a TransactionInfo from ``(account, description, amount, side)`` tuples.

    Usage::

        make_transaction(date(2024, 1, 5), [("A", "rent", "500", "credit"), ...])
    """
    counter = iter(range(1, 10_000))

    def _make(day: date, lines, status=TransactionStatus.PENDING) -> TransactionInfo:
        line_infos = tuple(
            TransactionLineInfo(
                serial_number=index,
                account_name=account,
                description=description,
                amount=Decimal(str(amount)),
                side=LineSide(side),
            )
            for index, (account, description, amount, side) in enumerate(lines, start=1)
        )
        return TransactionInfo(
            id=uuid4(),
            sequential_transaction_id=next(counter),
            transaction_date=day,
            lines=line_infos,
            total_amount=sum(
                (li.amount for li in line_infos if li.side == LineSide.CREDIT),
                Decimal("0"),
            ),
            status=status,
        )

    return _make
