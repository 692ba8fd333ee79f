"""
AccountRegistry -- owns the lifetime of accounts and account types.

Responsibility:
    Create, update and delete accounts and account types.  Every write
    validates the whole payload first and reports all problems together.

Architecture position:
    Kernel > Services.  Reads go through AccountSelector; writes flush
    inside the caller's session.

Invariants enforced:
    - Account names and account type names are unique and non-empty.
    - An account always references an existing account type.
    - Optional account fields are either trimmed text or None, never "".
    - A type referenced by any account cannot be changed or deleted.
    - Deleting an account never touches historical transaction lines;
      they keep the name captured when they were booked.

Failure modes:
    - ValidationError: one or more payload problems.
    - AccountNotFoundError / AccountTypeNotFoundError: unknown id.
    - UpstreamFailure: the store failed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.db.storage import coerce_id, storage_errors
from ledger_kernel.domain.dtos import (
    AccountData,
    AccountInfo,
    AccountTypeInfo,
    ValidationIssue,
)
from ledger_kernel.exceptions import (
    AccountNotFoundError,
    AccountTypeNotFoundError,
    ValidationError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.sequence_service import SequenceService

logger = get_logger("services.account_registry")


class AccountRegistry(BaseService[Account]):
    """
    Account and account-type CRUD.

    Usage:
        with session_scope() as session:
            registry = AccountRegistry(session)
            bank = registry.create_type("Bank")
            info = registry.create({"name": "Main", "type": "Bank", "isOwnerAccount": True})
    """

    model = Account

    def __init__(self, session: Session):
        super().__init__(session)
        self._selector = AccountSelector(session)
        self._sequences = SequenceService(session)

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def list(self) -> list[AccountInfo]:
        return self._selector.all()

    def list_owner_accounts(self) -> list[AccountInfo]:
        return self._selector.owner_accounts()

    def get(self, account_id: UUID | str) -> AccountInfo:
        return AccountInfo.from_model(self._require_account(account_id))

    def create(self, data: AccountData | Mapping[str, Any]) -> AccountInfo:
        """
        Validate and store a new account.

        Raises:
            ValidationError: Missing name or type, unknown type, or a name
                already used by another account.
        """
        data = _coerce_account_data(data)
        account_type = self._validate_account(data)

        with storage_errors("account.create"):
            account = Account(
                sequential_account_id=self._sequences.next_value(
                    SequenceService.ACCOUNT
                ),
                name=data.name,
                account_type=account_type,
                account_number=data.account_number,
                branch=data.branch,
                address=data.address,
                contact=data.contact,
                is_owner_account=data.is_owner_account,
            )
            self.session.add(account)
            self.session.flush()

        with LogContext.bind(account_id=account.id):
            logger.info(
                "account_created",
                extra={
                    "account_name": account.name,
                    "sequential_account_id": account.sequential_account_id,
                    "account_type": account_type.name,
                    "is_owner_account": account.is_owner_account,
                },
            )
        return AccountInfo.from_model(account)

    def update(
        self,
        account_id: UUID | str,
        data: AccountData | Mapping[str, Any],
    ) -> AccountInfo:
        """
        Replace an account's fields with ``data``.

        Renaming does not rewrite historical lines; the old name stays on
        them and no longer matches the account in reports.
        """
        account = self._require_account(account_id)
        data = _coerce_account_data(data)
        account_type = self._validate_account(data, exclude_id=account.id)
        previous_name = account.name

        with storage_errors("account.update"):
            account.name = data.name
            account.account_type = account_type
            account.account_number = data.account_number
            account.branch = data.branch
            account.address = data.address
            account.contact = data.contact
            account.is_owner_account = data.is_owner_account
            self.session.flush()

        with LogContext.bind(account_id=account.id):
            if previous_name != account.name:
                logger.warning(
                    "account_renamed",
                    extra={
                        "previous_name": previous_name,
                        "account_name": account.name,
                        "orphaned_line_count": self._selector.count_lines_for_name(
                            previous_name
                        ),
                    },
                )
            logger.info("account_updated", extra={"account_name": account.name})
        return AccountInfo.from_model(account)

    def delete(self, account_id: UUID | str) -> None:
        """
        Remove an account from the registry.

        Allowed even while historical lines still carry the name; those
        lines are left untouched and the count is logged.
        """
        account = self._require_account(account_id)
        name = account.name
        referencing_lines = self._selector.count_lines_for_name(name)

        with storage_errors("account.delete"):
            self.session.delete(account)
            self.session.flush()

        with LogContext.bind(account_id=account.id):
            if referencing_lines:
                logger.warning(
                    "account_deleted_with_history",
                    extra={
                        "account_name": name,
                        "referencing_line_count": referencing_lines,
                    },
                )
            else:
                logger.info("account_deleted", extra={"account_name": name})

    # -------------------------------------------------------------------------
    # Account types
    # -------------------------------------------------------------------------

    def list_types(self) -> list[AccountTypeInfo]:
        return self._selector.account_types()

    def create_type(self, name: str, description: str | None = None) -> AccountTypeInfo:
        name = (name or "").strip()
        self._validate_type_name(name)

        with storage_errors("account_type.create"):
            account_type = AccountType(
                name=name,
                description=_strip_or_none(description),
            )
            self.session.add(account_type)
            self.session.flush()

        logger.info(
            "account_type_created",
            extra={"account_type_id": str(account_type.id), "account_type": name},
        )
        return AccountTypeInfo.from_model(account_type)

    def update_type(
        self,
        account_type_id: UUID | str,
        name: str,
        description: str | None = None,
    ) -> AccountTypeInfo:
        account_type = self._require_type(account_type_id)
        self._ensure_type_unreferenced(account_type, "changed")
        name = (name or "").strip()
        self._validate_type_name(name, exclude_id=account_type.id)

        with storage_errors("account_type.update"):
            account_type.name = name
            account_type.description = _strip_or_none(description)
            self.session.flush()

        logger.info(
            "account_type_updated",
            extra={"account_type_id": str(account_type.id), "account_type": name},
        )
        return AccountTypeInfo.from_model(account_type)

    def delete_type(self, account_type_id: UUID | str) -> None:
        account_type = self._require_type(account_type_id)
        self._ensure_type_unreferenced(account_type, "deleted")

        with storage_errors("account_type.delete"):
            self.session.delete(account_type)
            self.session.flush()

        logger.info(
            "account_type_deleted",
            extra={
                "account_type_id": str(account_type.id),
                "account_type": account_type.name,
            },
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_account(self, account_id: UUID | str) -> Account:
        account = self._load(account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    def _require_type(self, account_type_id: UUID | str) -> AccountType:
        parsed = coerce_id(account_type_id)
        account_type = None
        if parsed is not None:
            with storage_errors("account_type.load"):
                account_type = self.session.get(AccountType, parsed)
        if account_type is None:
            raise AccountTypeNotFoundError(str(account_type_id))
        return account_type

    def _find_type_by_name(self, name: str) -> AccountType | None:
        with storage_errors("account_type.find"):
            return self.session.execute(
                select(AccountType).where(AccountType.name == name)
            ).scalar_one_or_none()

    def _validate_account(
        self,
        data: AccountData,
        exclude_id: UUID | None = None,
    ) -> AccountType:
        """Collect every problem with ``data``; return the resolved type."""
        issues: list[ValidationIssue] = []
        account_type = None

        if not data.name:
            issues.append(
                ValidationIssue(code="NAME_REQUIRED", message="Account name is required")
            )
        else:
            existing = self._selector.get_by_name(data.name)
            if existing is not None and existing.id != exclude_id:
                issues.append(
                    ValidationIssue(
                        code="NAME_DUPLICATE",
                        message=f"Account name '{data.name}' already exists",
                    )
                )

        if not data.account_type:
            issues.append(
                ValidationIssue(code="TYPE_REQUIRED", message="Account type is required")
            )
        else:
            account_type = self._find_type_by_name(data.account_type)
            if account_type is None:
                issues.append(
                    ValidationIssue(
                        code="TYPE_UNKNOWN",
                        message=f"Account type '{data.account_type}' does not exist",
                    )
                )

        if issues:
            logger.warning(
                "account_validation_failed",
                extra={"messages": [issue.message for issue in issues]},
            )
            raise ValidationError(issues)
        return account_type

    def _validate_type_name(self, name: str, exclude_id: UUID | None = None) -> None:
        if not name:
            raise ValidationError(
                [ValidationIssue(code="NAME_REQUIRED", message="Account type name is required")]
            )
        existing = self._find_type_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError(
                [
                    ValidationIssue(
                        code="NAME_DUPLICATE",
                        message=f"Account type '{name}' already exists",
                    )
                ]
            )

    def _ensure_type_unreferenced(self, account_type: AccountType, action: str) -> None:
        count = self._selector.count_accounts_for_type(account_type.id)
        if count:
            raise ValidationError(
                [
                    ValidationIssue(
                        code="TYPE_IN_USE",
                        message=(
                            f"Account type '{account_type.name}' is used by "
                            f"{count} account(s) and cannot be {action}"
                        ),
                    )
                ]
            )


def _coerce_account_data(data: AccountData | Mapping[str, Any]) -> AccountData:
    if not isinstance(data, AccountData):
        data = AccountData.from_payload(data)
    try:
        return data.normalized()
    except ValueError:
        logger.warning(
            "account_validation_failed",
            extra={"messages": ["Owner account flag must be true or false"]},
        )
        raise ValidationError(
            [
                ValidationIssue(
                    code="OWNER_FLAG_INVALID",
                    message="Owner account flag must be true or false",
                )
            ]
        ) from None


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None

