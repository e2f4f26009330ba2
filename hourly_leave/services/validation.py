"""Validation of the hours table before a calculation or export."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode, IssueKind
from hourly_leave.models.record import MAX_MONTHLY_HOURS, MIN_MONTHLY_HOURS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hourly_leave.models.record import MonthlyRecord

EMPTY_FIELD_MESSAGE = "有欄位未填寫，如要列入年資，請填寫 0～160 之間"
OUT_OF_RANGE_MESSAGE = "有欄位超出 0～160 範圍，請修正後再計算"


@dataclass(frozen=True)
class RecordIssue:
    """A single offending hours cell, addressed by display position."""

    index: int
    year: int
    month: int
    kind: IssueKind


@dataclass
class ValidationResult:
    """Per-record issues found by ``validate_records``."""

    checked: int = 0
    issues: list[RecordIssue] = field(default_factory=list)

    @property
    def empty_count(self) -> int:
        return sum(1 for issue in self.issues if issue.kind == IssueKind.EMPTY)

    @property
    def invalid_count(self) -> int:
        return sum(1 for issue in self.issues if issue.kind == IssueKind.INVALID)

    @property
    def ok(self) -> bool:
        return not self.issues


def classify_hours(hours: float | None) -> IssueKind | None:
    """Return the issue kind for an hours value, or None when it is acceptable."""
    if hours is None:
        return IssueKind.EMPTY
    if not math.isfinite(hours) or hours < MIN_MONTHLY_HOURS or hours > MAX_MONTHLY_HOURS:
        return IssueKind.INVALID
    return None


def parse_hours_input(raw: float | str | None) -> float | None:
    """Convert a raw form value into a stored hours value.

    Blank input means "not filled in" and becomes None. Text that is not a
    number becomes NaN, which validation later reports as INVALID.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return float("nan")
    if isinstance(raw, (int, float)):
        return float(raw)
    text = raw.strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return float("nan")


def validate_records(records: Sequence[MonthlyRecord]) -> ValidationResult:
    """Scan every displayed record and collect empty or out-of-range hours."""
    result = ValidationResult(checked=len(records))
    for index, record in enumerate(records):
        kind = classify_hours(record.hours)
        if kind is not None:
            result.issues.append(RecordIssue(index=index, year=record.year, month=record.month, kind=kind))
    return result


def ensure_valid(result: ValidationResult) -> None:
    """Raise when the table may not be used for a calculation.

    Empty cells are reported ahead of out-of-range ones.
    """
    if result.empty_count:
        raise LeaveError(ErrorCode.EMPTY_FIELD, EMPTY_FIELD_MESSAGE)
    if result.invalid_count:
        raise LeaveError(ErrorCode.OUT_OF_RANGE, OUT_OF_RANGE_MESSAGE)
