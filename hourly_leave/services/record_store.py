"""In-memory monthly hours table with (year, month) uniqueness and display ordering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from pydantic import ValidationError

from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode, RecordField, SortDirection
from hourly_leave.models.record import MonthlyRecord, format_year_month, from_month_index
from hourly_leave.services.accrual import valid_sorted_records
from hourly_leave.services.validation import parse_hours_input

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

MAX_FILL_MONTHS = 600

MISSING_HIRE_DATE_MESSAGE = "請先填寫「到職日」才能一鍵補齊！"
FUTURE_START_MESSAGE = "到職年月在未來，無法補到本月。"


@dataclass(frozen=True)
class RecordUpdate:
    """Set one field of the record at a display position."""

    index: int
    field: RecordField
    value: int | float | str | None


class RecordStore:
    """Ordered collection of monthly records.

    Records are kept in display order (newest first by default) after every
    mutation, so positional indexes match what the caller shows. The accrual
    engine sorts chronologically on its own and never depends on this order.
    """

    def __init__(
        self,
        records: Iterable[MonthlyRecord] = (),
        sort_direction: SortDirection = SortDirection.DESC,
    ) -> None:
        self._records: list[MonthlyRecord] = []
        self.sort_direction = sort_direction
        for record in records:
            if self._find(record.year, record.month) is not None:
                msg = f"該年月已存在：{format_year_month(record.year, record.month)}"
                raise LeaveError(ErrorCode.DUPLICATE_MONTH, msg)
            self._records.append(record)
        self._sort()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[MonthlyRecord]:
        """Records in display order (a copy)."""
        return list(self._records)

    def valid_records(self) -> list[MonthlyRecord]:
        """Records that count toward accrual, oldest first."""
        return valid_sorted_records(self._records)

    def index_of(self, year: int, month: int) -> int | None:
        return self._find(year, month)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_blank(self, today: date | None = None) -> MonthlyRecord:
        """Append an empty record for the month after the latest one present.

        An empty table starts at the current month.
        """
        if self._records:
            latest = max(r.month_index for r in self._records)
            year, month = from_month_index(latest + 1)
        else:
            today = today or date.today()
            year, month = today.year, today.month

        try:
            record = MonthlyRecord(year=year, month=month)
        except ValidationError:
            raise LeaveError(ErrorCode.OUT_OF_RANGE, f"無效的年份：{year}") from None
        self._records.append(record)
        self._sort()
        return record

    def fill_to_current(
        self,
        start_year: int | None,
        start_month: int | None,
        today: date | None = None,
    ) -> list[MonthlyRecord]:
        """Create blank records from the start month through the current month.

        Months already present are left alone. At most ``MAX_FILL_MONTHS``
        months are generated. Returns the records created.
        """
        if not start_year or not start_month:
            raise LeaveError(ErrorCode.MISSING_HIRE_DATE, MISSING_HIRE_DATE_MESSAGE)

        today = today or date.today()
        start_index = start_year * 12 + (start_month - 1)
        target_index = today.year * 12 + (today.month - 1)
        if start_index > target_index:
            raise LeaveError(ErrorCode.FUTURE_START, FUTURE_START_MESSAGE)

        count = min(target_index - start_index + 1, MAX_FILL_MONTHS)
        existing = {r.key for r in self._records}
        created: list[MonthlyRecord] = []
        for offset in range(count):
            year, month = from_month_index(start_index + offset)
            if (year, month) in existing:
                continue
            created.append(MonthlyRecord(year=year, month=month))

        self._records.extend(created)
        self._sort()
        logger.info(
            "Filled %d month(s) from %s to %s",
            len(created),
            format_year_month(start_year, start_month),
            format_year_month(today.year, today.month),
        )
        return created

    def delete(self, index: int) -> MonthlyRecord:
        """Remove the record at a display position."""
        self._check_index(index)
        return self._records.pop(index)

    def update(self, index: int, field: RecordField, value: int | float | str | None) -> MonthlyRecord:
        """Set one field of one record; see ``apply_updates``."""
        return self.apply_updates([RecordUpdate(index=index, field=field, value=value)])[0]

    def apply_updates(self, updates: Iterable[RecordUpdate]) -> list[MonthlyRecord]:
        """Apply a batch of edits atomically.

        Indexes refer to display positions before the batch. If any edit is
        rejected the store is left exactly as it was.
        """
        staged = list(self._records)
        touched: list[int] = []
        for update in updates:
            self._check_index(update.index)
            current = staged[update.index]
            staged[update.index] = _apply_field(current, update.field, update.value)
            touched.append(update.index)

        seen: set[tuple[int, int]] = set()
        for record in staged:
            if record.key in seen:
                msg = f"該年月已存在：{format_year_month(record.year, record.month)}"
                raise LeaveError(ErrorCode.DUPLICATE_MONTH, msg)
            seen.add(record.key)

        updated = [staged[i] for i in touched]
        self._records = staged
        self._sort()
        return updated

    def toggle_sort(self) -> SortDirection:
        """Flip the display order and return the new direction."""
        self.sort_direction = SortDirection.ASC if self.sort_direction == SortDirection.DESC else SortDirection.DESC
        self._sort()
        return self.sort_direction

    def clear(self) -> None:
        self._records.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, year: int, month: int) -> int | None:
        for i, record in enumerate(self._records):
            if record.year == year and record.month == month:
                return i
        return None

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._records):
            raise LeaveError(ErrorCode.RECORD_NOT_FOUND, f"找不到第 {index + 1} 列資料")

    def _sort(self) -> None:
        self._records.sort(key=lambda r: r.sort_key, reverse=self.sort_direction == SortDirection.DESC)


def _apply_field(record: MonthlyRecord, field: RecordField, value: int | float | str | None) -> MonthlyRecord:
    """Return a copy of ``record`` with one field replaced and re-validated."""
    if field == RecordField.HOURS:
        return MonthlyRecord(year=record.year, month=record.month, hours=parse_hours_input(value))

    msg = f"無效的{'年份' if field == RecordField.YEAR else '月份'}：{value}"
    if isinstance(value, bool):
        raise LeaveError(ErrorCode.OUT_OF_RANGE, msg)
    data = record.model_dump()
    data[field.value] = value
    try:
        return MonthlyRecord.model_validate(data)
    except ValidationError:
        raise LeaveError(ErrorCode.OUT_OF_RANGE, msg) from None
