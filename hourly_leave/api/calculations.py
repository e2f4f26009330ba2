"""API endpoints for validation, leave calculation and spreadsheet export."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from hourly_leave.api.deps import TodayDep, WorksheetDep
from hourly_leave.models.record import MonthlyRecord
from hourly_leave.schemas.calculation import (
    CalculateRequest,
    CalculationResponse,
    SegmentResponse,
    ValidationIssueResponse,
    ValidationResponse,
)
from hourly_leave.services.accrual import compute_bonus, compute_leave_summary
from hourly_leave.services.export import XLSX_MEDIA_TYPE, export_records
from hourly_leave.services.record_store import RecordStore
from hourly_leave.services.report import render_summary
from hourly_leave.services.validation import ensure_valid, validate_records

if TYPE_CHECKING:
    from collections.abc import Sequence

calculations_router = APIRouter(
    prefix="/worksheets/{worksheet_id}",
    tags=["calculations"],
)

stateless_router = APIRouter(
    prefix="/calculations",
    tags=["calculations"],
)


def _calculate(records: Sequence[MonthlyRecord], wage: float | None) -> CalculationResponse:
    """Validate, compute and render; nothing is computed if validation fails."""
    ensure_valid(validate_records(records))
    summary = compute_leave_summary(records)
    bonus = compute_bonus(summary, wage)
    view = render_summary(summary, wage)

    segments = [
        SegmentResponse(
            label=seg.label,
            range_label=seg.range_label,
            hours=seg.hours,
            raw=seg.raw,
            rounded=seg.rounded,
            bonus_raw=bonus.segments[i].raw if bonus is not None else None,
            bonus_rounded=bonus.segments[i].rounded if bonus is not None else None,
            lines=view.segments[i].lines if view.entitled else [],
        )
        for i, seg in enumerate(summary.segments)
    ]
    return CalculationResponse(
        period=summary.period_text,
        valid_months=summary.valid_months,
        total_hours=summary.total_hours,
        seniority_years=summary.seniority_years,
        seniority_months=summary.seniority_months,
        seniority_text=summary.seniority_text,
        entitled=summary.entitled,
        total_raw=summary.total_raw,
        total_rounded=summary.total_rounded,
        bonus_total_raw=bonus.total.raw if bonus is not None else None,
        bonus_total_rounded=bonus.total.rounded if bonus is not None else None,
        message=view.message,
        segments=segments,
        lines=view.result_lines,
    )


@calculations_router.get("/validation", response_model=ValidationResponse)
async def validate_worksheet(worksheet: WorksheetDep) -> ValidationResponse:
    """Report empty and out-of-range hours cells by display position."""
    result = validate_records(worksheet.store.records)
    return ValidationResponse(
        ok=result.ok,
        checked=result.checked,
        empty_count=result.empty_count,
        invalid_count=result.invalid_count,
        issues=[
            ValidationIssueResponse(index=i.index, year=i.year, month=i.month, kind=i.kind) for i in result.issues
        ],
    )


@calculations_router.post("/calculate", response_model=CalculationResponse)
async def calculate_worksheet(worksheet: WorksheetDep) -> CalculationResponse:
    """Compute the leave summary for a worksheet."""
    return _calculate(worksheet.store.records, worksheet.profile.wage)


@calculations_router.get("/export")
async def export_worksheet(worksheet: WorksheetDep, today: TodayDep) -> StreamingResponse:
    """Download the calculation as an .xlsx workbook."""
    filename, bio = export_records(worksheet.profile, worksheet.store.records, today)
    headers = {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}
    return StreamingResponse(bio, media_type=XLSX_MEDIA_TYPE, headers=headers)


@stateless_router.post("", response_model=CalculationResponse)
async def calculate(payload: CalculateRequest) -> CalculationResponse:
    """Compute a leave summary from a submitted record list without storing it."""
    store = RecordStore(MonthlyRecord(year=r.year, month=r.month, hours=r.hours) for r in payload.records)
    return _calculate(store.records, payload.wage)
