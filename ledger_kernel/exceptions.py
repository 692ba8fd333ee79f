"""
Typed Exception Hierarchy for the Ledger Kernel.

Every error raised by the kernel is a subclass of LedgerKernelError, carries a
machine-readable ``code`` class attribute, and stores its context as plain
attributes so it survives logging and serialization.

    LedgerKernelError (base)
    |
    +-- ValidationError            VALIDATION_FAILED
    |
    +-- NotFoundError              NOT_FOUND
    |   +-- AccountNotFoundError       ACCOUNT_NOT_FOUND
    |   +-- AccountTypeNotFoundError   ACCOUNT_TYPE_NOT_FOUND
    |   +-- TransactionNotFoundError   TRANSACTION_NOT_FOUND
    |
    +-- UpstreamFailure            UPSTREAM_FAILURE

Handling pattern:

    try:
        ledger.create(day, lines)
    except ValidationError as e:
        return {"error": e.code, "messages": e.messages}
    except UpstreamFailure as e:
        log.error("storage failed during %s", e.operation)

ValidationError and NotFoundError are surfaced to the caller verbatim and are
never retried.  UpstreamFailure wraps a storage failure; the kernel performs
no automatic retry and never leaves a partial commit behind.
"""

from collections.abc import Iterable


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


class ValidationError(LedgerKernelError):
    """
    One or more rule violations.

    ``issues`` holds every violation found for a single operation, in the
    order they were detected.  Each issue exposes ``message`` and, for
    row-level problems, a 1-based ``row``.
    """

    code: str = "VALIDATION_FAILED"

    def __init__(self, issues: Iterable):
        self.issues = tuple(issues)
        self.messages = [issue.message for issue in self.issues]
        super().__init__("\n".join(self.messages) or "Validation failed")


class NotFoundError(LedgerKernelError):
    """An operation referenced an id absent from the store."""

    code: str = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class AccountNotFoundError(NotFoundError):
    """Account with given ID was not found."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__("Account", account_id)


class AccountTypeNotFoundError(NotFoundError):
    """Account type with given ID was not found."""

    code: str = "ACCOUNT_TYPE_NOT_FOUND"

    def __init__(self, account_type_id: str):
        self.account_type_id = account_type_id
        super().__init__("Account type", account_type_id)


class TransactionNotFoundError(NotFoundError):
    """Transaction with given ID was not found."""

    code: str = "TRANSACTION_NOT_FOUND"

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__("Transaction", transaction_id)


class UpstreamFailure(LedgerKernelError):
    """
    The storage collaborator failed.

    The original driver/ORM exception is chained as ``__cause__``.
    """

    code: str = "UPSTREAM_FAILURE"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage failure during {operation}: {reason}")
