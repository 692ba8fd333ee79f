"""
Tests for AccountRegistry (ledger_kernel/services/account_registry.py).

Verifies:
- create/update require a name and a known type, collecting all problems
- Optional fields are trimmed and stored as None when empty
- Names are unique
- Deleting an account leaves historical lines alone and logs the count
- Referenced account types cannot be changed or deleted
"""

from uuid import uuid4

import pytest

from ledger_kernel.domain.dtos import AccountData
from ledger_kernel.exceptions import (
    AccountNotFoundError,
    AccountTypeNotFoundError,
    ValidationError,
)
from ledger_kernel.models.account import Account


class TestCreateAccount:

    def test_create_from_payload(self, registry, seeded_accounts):
        info = registry.create(
            {
                "name": " Savings ",
                "type": "Bank",
                "accountNo": " 001-22 ",
                "branch": "",
                "contact": "   ",
                "isOwnerAccount": True,
            }
        )
        assert info.name == "Savings"
        assert info.account_type.name == "Bank"
        assert info.account_number == "001-22"
        assert info.branch is None
        assert info.contact is None
        assert info.is_owner_account

    @pytest.mark.parametrize("raw, expected", [("false", False), ("TRUE", True), ("0", False), (None, False)])
    def test_owner_flag_from_form_text(self, registry, seeded_accounts, raw, expected):
        info = registry.create({"name": "Savings", "type": "Bank", "isOwnerAccount": raw})
        assert info.is_owner_account is expected

    def test_unrecognised_owner_flag_rejected(self, registry, seeded_accounts):
        with pytest.raises(ValidationError) as exc_info:
            registry.create({"name": "Savings", "type": "Bank", "isOwnerAccount": "maybe"})
        assert [issue.code for issue in exc_info.value.issues] == ["OWNER_FLAG_INVALID"]
        assert registry.list() == list(seeded_accounts.values())

    def test_empty_optionals_stored_as_null(self, registry, seeded_accounts, session):
        info = registry.create(AccountData(name="Vendor", account_type="Customer", address="  "))
        row = session.get(Account, info.id)
        assert row.address is None

    def test_sequential_ids_increase(self, registry, seeded_accounts):
        ids = [a.sequential_account_id for a in registry.list()]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3
        new = registry.create({"name": "Another", "type": "Bank"})
        assert new.sequential_account_id > max(ids)

    def test_all_problems_reported_together(self, registry, seeded_accounts):
        with pytest.raises(ValidationError) as exc_info:
            registry.create({"name": "  ", "type": ""})
        assert exc_info.value.messages == [
            "Account name is required",
            "Account type is required",
        ]

    def test_unknown_type(self, registry, seeded_accounts):
        with pytest.raises(ValidationError) as exc_info:
            registry.create({"name": "X", "type": "Nope"})
        assert exc_info.value.messages == ["Account type 'Nope' does not exist"]

    def test_duplicate_name(self, registry, seeded_accounts):
        with pytest.raises(ValidationError) as exc_info:
            registry.create({"name": "Main Bank", "type": "Bank"})
        assert exc_info.value.issues[0].code == "NAME_DUPLICATE"

    def test_logs_creation(self, registry, seeded_accounts, captured_logs):
        registry.create({"name": "Logged", "type": "Bank"})
        record = next(r for r in captured_logs() if r["message"] == "account_created")
        assert record["account_name"] == "Logged"
        assert "account_id" in record


class TestListAccounts:

    def test_list_and_owner_accounts(self, registry, seeded_accounts):
        assert [a.name for a in registry.list()] == ["Main Bank", "Acme Ltd", "Petty Cash"]
        assert [a.name for a in registry.list_owner_accounts()] == ["Main Bank", "Petty Cash"]

    def test_get_unknown(self, registry, seeded_accounts):
        with pytest.raises(AccountNotFoundError):
            registry.get(uuid4())

    def test_get_malformed_id(self, registry, seeded_accounts):
        with pytest.raises(AccountNotFoundError):
            registry.get("not-a-uuid")


class TestUpdateAccount:

    def test_update_fields(self, registry, seeded_accounts):
        bank = seeded_accounts["bank"]
        updated = registry.update(
            bank.id,
            {"name": "Main Bank", "type": "Customer", "branch": " North ", "isOwnerAccount": False},
        )
        assert updated.account_type.name == "Customer"
        assert updated.branch == "North"
        assert not updated.is_owner_account
        assert updated.sequential_account_id == bank.sequential_account_id

    def test_keep_own_name_is_not_duplicate(self, registry, seeded_accounts):
        bank = seeded_accounts["bank"]
        registry.update(str(bank.id), {"name": "Main Bank", "type": "Bank"})

    def test_rename_to_existing_name(self, registry, seeded_accounts):
        with pytest.raises(ValidationError):
            registry.update(seeded_accounts["bank"].id, {"name": "Acme Ltd", "type": "Bank"})

    def test_update_unknown(self, registry, seeded_accounts):
        with pytest.raises(AccountNotFoundError):
            registry.update(uuid4(), {"name": "X", "type": "Bank"})

    def test_rename_logs_orphaned_lines(
        self, registry, ledger, seeded_accounts, balanced_lines, captured_logs
    ):
        ledger.create("2024-01-05", balanced_lines)
        registry.update(seeded_accounts["bank"].id, {"name": "Renamed Bank", "type": "Bank"})
        record = next(r for r in captured_logs() if r["message"] == "account_renamed")
        assert record["previous_name"] == "Main Bank"
        assert record["orphaned_line_count"] == 1


class TestDeleteAccount:

    def test_delete(self, registry, seeded_accounts):
        registry.delete(seeded_accounts["cash"].id)
        assert "Petty Cash" not in [a.name for a in registry.list()]

    def test_delete_unknown(self, registry, seeded_accounts):
        with pytest.raises(AccountNotFoundError):
            registry.delete(uuid4())

    def test_delete_keeps_historical_lines(
        self, registry, ledger, seeded_accounts, balanced_lines, captured_logs
    ):
        txn = ledger.create("2024-01-05", balanced_lines)
        registry.delete(seeded_accounts["bank"].id)

        stored = ledger.get(txn.id)
        assert [line.account_name for line in stored.lines] == ["Main Bank", "Acme Ltd"]

        record = next(
            r for r in captured_logs() if r["message"] == "account_deleted_with_history"
        )
        assert record["level"] == "WARNING"
        assert record["referencing_line_count"] == 1

    def test_deleted_account_not_selectable_for_new_lines(
        self, registry, ledger, seeded_accounts, balanced_lines
    ):
        registry.delete(seeded_accounts["bank"].id)
        with pytest.raises(ValidationError) as exc_info:
            ledger.create("2024-01-05", balanced_lines)
        assert exc_info.value.messages == ["Row 1: Account 'Main Bank' does not exist"]


class TestAccountTypes:

    def test_list_types_sorted(self, registry, seeded_accounts):
        assert [t.name for t in registry.list_types()] == ["Bank", "Customer"]

    def test_create_type_trims(self, registry):
        info = registry.create_type("  Expense ", "  ")
        assert info.name == "Expense"
        assert info.description is None

    def test_duplicate_type(self, registry, seeded_accounts):
        with pytest.raises(ValidationError):
            registry.create_type("Bank")

    def test_empty_type_name(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            registry.create_type("   ")
        assert exc_info.value.messages == ["Account type name is required"]

    def test_update_unreferenced_type(self, registry):
        info = registry.create_type("Expense")
        updated = registry.update_type(info.id, "Expenses", "Operating costs")
        assert updated.name == "Expenses"
        assert updated.description == "Operating costs"

    def test_referenced_type_cannot_be_changed(self, registry, seeded_accounts):
        bank_type = seeded_accounts["bank"].account_type
        with pytest.raises(ValidationError) as exc_info:
            registry.update_type(bank_type.id, "Banks")
        assert exc_info.value.issues[0].code == "TYPE_IN_USE"

    def test_referenced_type_cannot_be_deleted(self, registry, seeded_accounts):
        bank_type = seeded_accounts["bank"].account_type
        with pytest.raises(ValidationError) as exc_info:
            registry.delete_type(bank_type.id)
        assert "used by 2 account(s)" in exc_info.value.messages[0]

    def test_delete_unreferenced_type(self, registry):
        info = registry.create_type("Temporary")
        registry.delete_type(info.id)
        assert "Temporary" not in [t.name for t in registry.list_types()]

    def test_unknown_type_id(self, registry):
        with pytest.raises(AccountTypeNotFoundError):
            registry.delete_type(uuid4())
