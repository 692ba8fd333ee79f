"""
Unit tests for the pure line helpers (ledger_kernel/domain/lines.py).

Verifies:
- Serial numbers are dense 1..N after any add/remove sequence
- Totals are recomputed from the full list
- validate_lines collects every violation, rows first, balance last
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ledger_kernel.domain.dtos import LineDraft
from ledger_kernel.domain.lines import (
    add_line,
    remove_line,
    renumber,
    totals,
    validate_lines,
)
from ledger_kernel.models.transaction import LineSide


def _line(account="A", description="x", amount="100", side="credit"):
    return LineDraft(account_name=account, description=description, amount=amount, side=side)


class TestRenumber:

    def test_dense_from_one(self):
        lines = renumber([_line(), _line(), _line()])
        assert [line.serial_number for line in lines] == [1, 2, 3]

    def test_input_untouched(self):
        original = [LineDraft(serial_number=7)]
        renumber(original)
        assert original[0].serial_number == 7

    def test_add_line_appends_blank_credit_row(self):
        lines = add_line([_line()])
        assert len(lines) == 2
        assert lines[1].serial_number == 2
        assert lines[1].side == LineSide.CREDIT
        assert lines[1].amount == ""

    def test_remove_line_renumbers(self):
        lines = add_line(add_line([_line(account="A")], _line(account="B")), _line(account="C"))
        lines = remove_line(lines, 1)
        assert [line.account_name for line in lines] == ["A", "C"]
        assert [line.serial_number for line in lines] == [1, 2]

    def test_remove_only_row_is_noop(self):
        lines = remove_line([_line()], 0)
        assert len(lines) == 1
        assert lines[0].serial_number == 1

    def test_remove_out_of_range(self):
        with pytest.raises(IndexError):
            remove_line([_line(), _line()], 5)

    @given(
        ops=st.lists(
            st.one_of(
                st.just(("add", 0)),
                st.tuples(st.just("remove"), st.integers(min_value=0, max_value=20)),
            ),
            max_size=40,
        )
    )
    @settings(max_examples=100)
    def test_serials_stay_dense_under_any_edit_sequence(self, ops):
        lines = add_line(())
        for op, index in ops:
            if op == "add":
                lines = add_line(lines)
            elif lines:
                lines = remove_line(lines, index % len(lines))
        assert [line.serial_number for line in lines] == list(range(1, len(lines) + 1))
        assert len(lines) >= 1


class TestTotals:

    def test_sums_per_side(self):
        result = totals([
            _line(amount="100", side="credit"),
            _line(amount="40", side="debit"),
            _line(amount="60.5", side="debit"),
        ])
        assert result.credit == Decimal("100")
        assert result.debit == Decimal("100.5")
        assert result.difference == Decimal("0.5")

    def test_invalid_amounts_count_as_zero(self):
        result = totals([_line(amount="abc"), _line(amount="-3", side="debit")])
        assert result.credit == Decimal("0")
        assert result.debit == Decimal("0")

    def test_unknown_side_excluded(self):
        result = totals([_line(amount="10", side="sideways")])
        assert result.credit == result.debit == Decimal("0")

    def test_balanced_within_one_cent(self):
        assert totals([_line(amount="10.01"), _line(amount="10", side="debit")]).is_balanced()
        assert not totals([_line(amount="10.02"), _line(amount="10", side="debit")]).is_balanced()


class TestValidateLines:

    def test_balanced_valid_lines(self):
        result = validate_lines([
            _line(account="A", amount="500", side="credit"),
            _line(account="B", amount="500", side="debit"),
        ])
        assert result.is_valid
        assert result.issues == ()

    def test_no_lines(self):
        result = validate_lines([])
        assert not result
        assert [i.code for i in result.issues] == ["NO_LINES"]

    def test_imbalance_is_single_global_issue(self):
        result = validate_lines([
            _line(account="A", description="x", amount="100", side="credit"),
            _line(account="B", description="y", amount="90", side="debit"),
        ])
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.code == "UNBALANCED"
        assert issue.row is None
        assert "Total debits must equal total credits" in issue.message
        assert "debits=90" in issue.message
        assert "credits=100" in issue.message
        assert "difference=10" in issue.message

    def test_row_and_global_issue_together(self):
        """Three lines, one empty description, five-unit imbalance: two messages."""
        result = validate_lines([
            _line(account="A", description="a", amount="50", side="credit"),
            _line(account="B", description="  ", amount="25", side="debit"),
            _line(account="C", description="c", amount="20", side="debit"),
        ])
        assert result.messages == [
            "Row 2: Description is required",
            result.issues[1].message,
        ]
        assert result.issues[1].code == "UNBALANCED"

    def test_one_message_per_violated_rule_rows_from_one(self):
        result = validate_lines([
            _line(account="", description="", amount="0", side="credit"),
            _line(account="B", description="ok", amount="abc", side="debit"),
        ])
        assert result.messages == [
            "Row 1: Account is required",
            "Row 1: Description is required",
            "Row 1: Amount must be greater than 0",
            "Row 2: Amount must be greater than 0",
        ]
        assert [i.row for i in result.issues] == [1, 1, 1, 2]

    def test_unknown_account_checked_against_registry_names(self):
        result = validate_lines(
            [_line(account="Ghost", amount="5"), _line(account="A", amount="5", side="debit")],
            known_accounts={"A", "B"},
        )
        assert result.messages == ["Row 1: Account 'Ghost' does not exist"]

    def test_account_names_are_trimmed(self):
        result = validate_lines(
            [_line(account=" A ", amount="5"), _line(account="B", amount="5", side="debit")],
            known_accounts={"A", "B"},
        )
        assert result.is_valid

    def test_invalid_side(self):
        result = validate_lines([_line(side="both")])
        codes = [i.code for i in result.issues]
        assert "SIDE_INVALID" in codes

    def test_custom_tolerance(self):
        lines = [_line(amount="100.5"), _line(account="B", amount="100", side="debit")]
        assert not validate_lines(lines)
        assert validate_lines(lines, tolerance=Decimal("1"))

    def test_non_text_fields_reported_not_raised(self):
        lines = [
            _line(account=None, description=7),
            _line(account="B", description=None, side="debit"),
        ]
        codes = [i.code for i in validate_lines(lines).issues]
        assert codes == ["ACCOUNT_REQUIRED", "DESCRIPTION_REQUIRED"]
