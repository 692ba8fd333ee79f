"""
Pure helpers for transaction line lists.

Serial numbers and running totals are derived values: they are recomputed
from the full line list after every mutation (renumber, totals) rather than
maintained incrementally.  ZERO I/O.  ZERO side effects.  Every function
returns a new tuple and leaves its input untouched.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, replace
from decimal import Decimal

from ledger_kernel.db.types import BALANCE_TOLERANCE, ZERO, within_tolerance
from ledger_kernel.domain.dtos import (
    LineDraft,
    ValidationIssue,
    ValidationResult,
)
from ledger_kernel.models.transaction import LineSide


@dataclass(frozen=True)
class LineTotals:
    """Credit and debit totals of a line list."""

    credit: Decimal
    debit: Decimal

    @property
    def difference(self) -> Decimal:
        """Absolute imbalance between the two sides."""
        return abs(self.credit - self.debit)

    def is_balanced(self, tolerance: Decimal = BALANCE_TOLERANCE) -> bool:
        return within_tolerance(self.credit, self.debit, tolerance)


def renumber(lines: Sequence[LineDraft]) -> tuple[LineDraft, ...]:
    """Return copies of ``lines`` with serial numbers 1..N in list order."""
    return tuple(
        replace(line, serial_number=index)
        for index, line in enumerate(lines, start=1)
    )


def add_line(
    lines: Sequence[LineDraft],
    line: LineDraft | None = None,
) -> tuple[LineDraft, ...]:
    """Append a row (a blank credit row by default) and renumber."""
    return renumber((*lines, line if line is not None else LineDraft()))


def remove_line(lines: Sequence[LineDraft], index: int) -> tuple[LineDraft, ...]:
    """
    Remove the row at 0-based ``index`` and renumber.

    A draft always keeps at least one row: removing the only row is a no-op.
    """
    if len(lines) <= 1:
        return renumber(lines)
    if not 0 <= index < len(lines):
        raise IndexError(f"line index {index} out of range")
    return renumber([line for i, line in enumerate(lines) if i != index])


def totals(lines: Sequence[LineDraft]) -> LineTotals:
    """
    Sum parsed amounts per side.

    Unparseable or non-positive amounts count as zero; rows with an
    unrecognised side are left out of both totals.
    """
    credit = ZERO
    debit = ZERO
    for line in lines:
        side = line.parsed_side
        if side == LineSide.CREDIT:
            credit += line.parsed_amount
        elif side == LineSide.DEBIT:
            debit += line.parsed_amount
    return LineTotals(credit=credit, debit=debit)


def validate_lines(
    lines: Sequence[LineDraft],
    known_accounts: Collection[str] | None = None,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> ValidationResult:
    """
    Check every row and the double-entry balance, collecting ALL violations.

    Row checks run in row order (rows numbered from 1), one issue per
    violated rule; the global balance check is reported last, once.

    Args:
        lines: Drafts in submission order.
        known_accounts: Names of selectable accounts.  When given, a
            non-empty name outside this set is a violation.
        tolerance: Largest |credits - debits| still considered balanced.
    """
    issues: list[ValidationIssue] = []

    if not lines:
        issues.append(
            ValidationIssue(code="NO_LINES", message="At least one line is required")
        )
        return ValidationResult.from_issues(issues)

    for row, line in enumerate(lines, start=1):
        account_name = str(line.account_name or "").strip()
        if not account_name:
            issues.append(
                ValidationIssue(
                    code="ACCOUNT_REQUIRED",
                    message=f"Row {row}: Account is required",
                    row=row,
                )
            )
        elif known_accounts is not None and account_name not in known_accounts:
            issues.append(
                ValidationIssue(
                    code="ACCOUNT_UNKNOWN",
                    message=f"Row {row}: Account '{account_name}' does not exist",
                    row=row,
                )
            )

        if not str(line.description or "").strip():
            issues.append(
                ValidationIssue(
                    code="DESCRIPTION_REQUIRED",
                    message=f"Row {row}: Description is required",
                    row=row,
                )
            )

        if line.parsed_amount <= ZERO:
            issues.append(
                ValidationIssue(
                    code="AMOUNT_NOT_POSITIVE",
                    message=f"Row {row}: Amount must be greater than 0",
                    row=row,
                )
            )

        if line.parsed_side is None:
            issues.append(
                ValidationIssue(
                    code="SIDE_INVALID",
                    message=f"Row {row}: Type must be debit or credit",
                    row=row,
                )
            )

    sums = totals(lines)
    if not sums.is_balanced(tolerance):
        issues.append(
            ValidationIssue(
                code="UNBALANCED",
                message=(
                    "Total debits must equal total credits "
                    f"(debits={sums.debit}, credits={sums.credit}, "
                    f"difference={sums.difference})"
                ),
            )
        )

    return ValidationResult.from_issues(issues)
