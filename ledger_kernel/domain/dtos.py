"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable data structures that cross the kernel boundary:
    drafts coming in from callers (AccountData, LineDraft, TransactionDraft),
    records going out (AccountTypeInfo, AccountInfo, TransactionLineInfo,
    TransactionInfo, TransactionPage) and the validation result types.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    from_model() class methods are boundary converters invoked only from the
    service and selector layers.

Invariants enforced:
    - Services and selectors return DTOs, never ORM entities.
    - Account references are resolved to a single canonical name string at
      the boundary (resolve_account_name); nothing downstream branches on
      the shape of a reference.
    - Money fields are Decimal.

Data flow:
    payload -> TransactionDraft -> (ledger validation) -> Transaction row
    Transaction row -> TransactionInfo -> reports / dashboard
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Union
from uuid import UUID

from ledger_kernel.db.types import BALANCE_TOLERANCE, parse_amount, within_tolerance
from ledger_kernel.models.transaction import LineSide, TransactionStatus

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account as AccountModel
    from ledger_kernel.models.account import AccountType as AccountTypeModel
    from ledger_kernel.models.transaction import Transaction as TransactionModel


# =============================================================================
# Validation results
# =============================================================================


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single rule violation.

    Carries a machine-readable code, the human-readable message surfaced to
    the caller, and the 1-based row number for row-level problems.
    """

    code: str
    message: str
    row: int | None = None


@dataclass(frozen=True)
class ValidationResult:
    """
    Aggregates zero or more ValidationIssues in detection order.

    is_valid is True only when there are no issues; bool(result) mirrors it.
    """

    is_valid: bool
    issues: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(is_valid=True, issues=())

    @classmethod
    def failure(cls, *issues: ValidationIssue) -> ValidationResult:
        return cls(is_valid=False, issues=tuple(issues))

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> ValidationResult:
        if issues:
            return cls.failure(*issues)
        return cls.success()

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]

    def __bool__(self) -> bool:
        return self.is_valid


# =============================================================================
# Account registry
# =============================================================================


@dataclass(frozen=True)
class AccountTypeInfo:
    """Immutable snapshot of an account type."""

    id: UUID
    name: str
    description: str | None = None

    @classmethod
    def from_model(cls, model: AccountTypeModel) -> AccountTypeInfo:
        return cls(id=model.id, name=model.name, description=model.description)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": str(self.id), "name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class AccountInfo:
    """
    Immutable snapshot of a registry account.

    ``name`` is the join key used by transaction lines and reports.
    """

    id: UUID
    sequential_account_id: int
    name: str
    account_type: AccountTypeInfo
    account_number: str | None = None
    branch: str | None = None
    address: str | None = None
    contact: str | None = None
    is_owner_account: bool = False

    @classmethod
    def from_model(cls, model: AccountModel) -> AccountInfo:
        return cls(
            id=model.id,
            sequential_account_id=model.sequential_account_id,
            name=model.name,
            account_type=AccountTypeInfo.from_model(model.account_type),
            account_number=model.account_number,
            branch=model.branch,
            address=model.address,
            contact=model.contact,
            is_owner_account=model.is_owner_account,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": str(self.id),
            "accountId": self.sequential_account_id,
            "name": self.name,
            "type": self.account_type.to_payload(),
            "isOwnerAccount": self.is_owner_account,
        }
        for key, value in (
            ("accountNo", self.account_number),
            ("branch", self.branch),
            ("address", self.address),
            ("contact", self.contact),
        ):
            if value is not None:
                payload[key] = value
        return payload


def _clean_optional(value: Any) -> str | None:
    """Trim an optional text field; empty-after-trim becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


_FLAG_VALUES = {"true": True, "false": False, "1": True, "0": False, "": False}


def parse_flag(value: Any) -> bool:
    """
    Parse a yes/no field that may arrive as a bool or as form text.

    Raises:
        ValueError: For anything other than a bool, None, 0/1 or
            "true"/"false" (any case).
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    key = str(value).strip().lower()
    if key not in _FLAG_VALUES:
        raise ValueError(f"Expected true or false, got {value!r}")
    return _FLAG_VALUES[key]


def _text(value: Any) -> str:
    """Required text field as a string; None becomes ""."""
    return "" if value is None else str(value)


@dataclass(frozen=True)
class AccountData:
    """
    Create/update payload for an account.

    ``account_type`` is the *name* of an existing AccountType.
    """

    name: str
    account_type: str
    account_number: str | None = None
    branch: str | None = None
    address: str | None = None
    contact: str | None = None
    # Raw flag as submitted; normalized() parses it
    is_owner_account: bool | str | None = False

    def normalized(self) -> AccountData:
        """Trimmed copy; optional fields that are empty after trimming become None."""
        return AccountData(
            name=_text(self.name).strip(),
            account_type=_text(self.account_type).strip(),
            account_number=_clean_optional(self.account_number),
            branch=_clean_optional(self.branch),
            address=_clean_optional(self.address),
            contact=_clean_optional(self.contact),
            is_owner_account=parse_flag(self.is_owner_account),
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> AccountData:
        """Parse ``{name, type, accountNo?, branch?, address?, contact?, isOwnerAccount}``."""
        account_type = payload.get("type") or ""
        if isinstance(account_type, Mapping):
            account_type = account_type.get("name") or ""
        return cls(
            name=payload.get("name") or "",
            account_type=account_type,
            account_number=payload.get("accountNo"),
            branch=payload.get("branch"),
            address=payload.get("address"),
            contact=payload.get("contact"),
            is_owner_account=payload.get("isOwnerAccount", False),
        )


# A line's account may arrive as a bare name, a mapping with "name", or an AccountInfo
AccountRef = Union[str, Mapping[str, Any], AccountInfo, None]


def resolve_account_name(ref: AccountRef) -> str:
    """Resolve any account reference shape to the canonical account name."""
    if ref is None:
        return ""
    if isinstance(ref, AccountInfo):
        return ref.name
    if isinstance(ref, Mapping):
        return str(ref.get("name") or "").strip()
    return str(ref).strip()


# =============================================================================
# Transaction drafts
# =============================================================================


def parse_side(value: Any) -> LineSide | None:
    """Parse "debit"/"credit" (any case) into a LineSide; None if unrecognised."""
    if isinstance(value, LineSide):
        return value
    if isinstance(value, str):
        try:
            return LineSide(value.strip().lower())
        except ValueError:
            return None
    return None


def parse_transaction_date(value: Any) -> date:
    """
    Parse an ISO calendar date or ISO timestamp into a calendar date.

    Raises:
        ValueError: If value is not a date, datetime or ISO string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    raise ValueError(f"Cannot parse date from {value!r}")


@dataclass(frozen=True)
class LineDraft:
    """
    One row as entered by the user, before validation.

    ``amount`` keeps the raw input (string, number or Decimal) so that a
    half-typed value is never silently turned into something else; it is
    parsed with parse_amount() when validated or totalled.
    """

    account_name: str = ""
    description: str = ""
    amount: Any = ""
    side: LineSide | str = LineSide.CREDIT
    serial_number: int = 0

    @property
    def parsed_amount(self) -> Decimal:
        return parse_amount(self.amount)

    @property
    def parsed_side(self) -> LineSide | None:
        return parse_side(self.side)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], serial_number: int = 0) -> LineDraft:
        """Parse one ``{account, description, amount, type}`` detail."""
        return cls(
            account_name=resolve_account_name(payload.get("account")),
            description=_text(payload.get("description")),
            amount=payload.get("amount"),
            side=payload.get("type") or "",
            serial_number=serial_number,
        )


@dataclass(frozen=True)
class TransactionDraft:
    """
    A transaction as submitted for creation: a date plus line drafts.

    ``transaction_date`` keeps the submitted value; the ledger parses it so
    that a bad date is reported together with the line violations.
    """

    transaction_date: date | str | None
    lines: tuple[LineDraft, ...]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TransactionDraft:
        """Parse the create shape ``{date, details: [{account, description, amount, type}]}``."""
        details = payload.get("details") or []
        return cls(
            transaction_date=payload.get("date"),
            lines=tuple(
                LineDraft.from_payload(detail, serial_number=index)
                for index, detail in enumerate(details, start=1)
            ),
        )


# =============================================================================
# Stored transactions
# =============================================================================


@dataclass(frozen=True)
class TransactionLineInfo:
    """Immutable snapshot of a stored transaction line."""

    serial_number: int
    account_name: str
    description: str
    amount: Decimal
    side: LineSide

    def to_payload(self) -> dict[str, Any]:
        return {
            "serialNo": self.serial_number,
            "account": self.account_name,
            "description": self.description,
            "amount": str(self.amount),
            "type": self.side.value,
        }


@dataclass(frozen=True)
class TransactionInfo:
    """
    Immutable snapshot of a stored transaction.

    Holds no back-reference into the session; safe to hand to reports.
    """

    id: UUID
    sequential_transaction_id: int
    transaction_date: date
    lines: tuple[TransactionLineInfo, ...]
    total_amount: Decimal
    status: TransactionStatus

    @property
    def total_debits(self) -> Decimal:
        return sum(
            (line.amount for line in self.lines if line.side == LineSide.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        return sum(
            (line.amount for line in self.lines if line.side == LineSide.CREDIT),
            Decimal("0"),
        )

    def is_balanced(self, tolerance: Decimal = BALANCE_TOLERANCE) -> bool:
        return within_tolerance(self.total_credits, self.total_debits, tolerance)

    @classmethod
    def from_model(cls, model: TransactionModel) -> TransactionInfo:
        return cls(
            id=model.id,
            sequential_transaction_id=model.sequential_transaction_id,
            transaction_date=model.transaction_date,
            lines=tuple(
                TransactionLineInfo(
                    serial_number=line.serial_number,
                    account_name=line.account_name,
                    description=line.description,
                    amount=line.amount,
                    side=LineSide(line.side),
                )
                for line in sorted(model.lines, key=lambda ln: ln.serial_number)
            ),
            total_amount=model.total_amount,
            status=TransactionStatus(model.status),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "transactionId": self.sequential_transaction_id,
            "date": self.transaction_date.isoformat(),
            "details": [line.to_payload() for line in self.lines],
            "totalAmount": str(self.total_amount),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class TransactionPage:
    """One page of a windowed transaction fetch."""

    transactions: tuple[TransactionInfo, ...]
    total_pages: int
    current_page: int
    total: int
