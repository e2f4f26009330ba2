"""Spreadsheet export of a leave calculation."""

from __future__ import annotations

import logging
from datetime import date
from io import BytesIO
from typing import TYPE_CHECKING

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from hourly_leave.config import get_settings
from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode
from hourly_leave.services.accrual import compute_leave_summary, valid_sorted_records
from hourly_leave.services.report import render_summary
from hourly_leave.services.validation import ensure_valid, validate_records

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hourly_leave.models.record import MonthlyRecord
    from hourly_leave.services.accrual import LeaveSummary
    from hourly_leave.services.worksheet import WorksheetProfile

logger = logging.getLogger(__name__)

SHEET_TITLE = "特休試算"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
NOTHING_TO_EXPORT_MESSAGE = "沒有資料可匯出"

_SECTION_FONT = Font(bold=True)
_HEADER_FILL = PatternFill("solid", fgColor="F2F3F5")
_CENTER = Alignment(horizontal="center", vertical="center")


def export_filename(identifier: str, today: date | None = None) -> str:
    """``<prefix>_<identifier or placeholder>_<YYYY-MM-DD>.xlsx``."""
    settings = get_settings()
    today = today or date.today()
    ident = identifier.strip() or settings.export_identifier_placeholder
    return f"{settings.export_filename_prefix}_{ident}_{today.isoformat()}.xlsx"


def build_leave_workbook(
    profile: WorksheetProfile,
    summary: LeaveSummary,
    records: Sequence[MonthlyRecord],
) -> BytesIO:
    """Write title, results and monthly detail blocks to a one-sheet workbook.

    ``records`` are the valid records in chronological order.
    """
    identifier = profile.identifier.strip()
    unit = profile.unit.strip()
    wage = profile.wage or 0.0
    view = render_summary(summary, wage)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    section_rows: list[int] = []

    def section(title: str) -> None:
        ws.append([title])
        section_rows.append(ws.max_row)

    section("累計特休表")
    ws.append([f"學號：{identifier or '（未填）'}"])
    ws.append([f"時薪：{f'{wage:.0f}' if wage > 0 else '—'}"])
    ws.append([f"服務單位：{unit or '—'}"])
    ws.append([])

    section("試算結果")
    ws.append([f"任職區間：{view.period}"])
    ws.append([f"有效月份數：{view.valid_months}"])
    ws.append([f"累計總工時：{view.total_hours} 小時"])
    ws.append([f"年資：{view.seniority}"])
    ws.append([])
    for line in view.result_lines:
        ws.append([line])
    ws.append([])

    section("每月工時明細")
    ws.append(["年", "月", "工時（小時）"])
    header_row = ws.max_row
    for col in range(1, 4):
        cell = ws.cell(row=header_row, column=col)
        cell.font = _SECTION_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _CENTER

    for record in records:
        ws.append([record.year, record.month, round(record.hours or 0.0, 1)])
        ws.cell(row=ws.max_row, column=3).number_format = "0.0"

    for row in section_rows:
        ws.cell(row=row, column=1).font = _SECTION_FONT

    ws.column_dimensions[get_column_letter(1)].width = 14
    ws.column_dimensions[get_column_letter(2)].width = 8
    ws.column_dimensions[get_column_letter(3)].width = 14

    bio = BytesIO()
    wb.save(bio)
    bio.seek(0)
    return bio


def export_records(
    profile: WorksheetProfile,
    records: Sequence[MonthlyRecord],
    today: date | None = None,
) -> tuple[str, BytesIO]:
    """Validate, compute and export a record table.

    Returns ``(filename, workbook bytes)``. Nothing is built when validation
    fails or there is no usable record.
    """
    ensure_valid(validate_records(records))
    if not records:
        raise LeaveError(ErrorCode.NO_DATA, NOTHING_TO_EXPORT_MESSAGE)

    summary = compute_leave_summary(records)
    valid = valid_sorted_records(records)
    filename = export_filename(profile.identifier, today)
    bio = build_leave_workbook(profile, summary, valid)
    logger.info(
        "Exported %s: %d valid month(s), %d segment(s)",
        filename,
        summary.valid_months,
        len(summary.segments),
    )
    return filename, bio
