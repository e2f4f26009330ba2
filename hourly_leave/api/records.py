"""API endpoints for editing a worksheet's monthly hours table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body

from hourly_leave.api.deps import TodayDep, WorksheetDep
from hourly_leave.schemas.record import (
    FillRecordsRequest,
    FillRecordsResponse,
    RecordListResponse,
    RecordResponse,
    UpdateRecordsRequest,
)
from hourly_leave.services.record_store import RecordUpdate

if TYPE_CHECKING:
    from hourly_leave.services.record_store import RecordStore

records_router = APIRouter(
    prefix="/worksheets/{worksheet_id}/records",
    tags=["records"],
)


def _record_list(store: RecordStore) -> RecordListResponse:
    records = store.records
    return RecordListResponse(
        items=[RecordResponse.from_record(i, r) for i, r in enumerate(records)],
        total=len(records),
        sort_direction=store.sort_direction,
    )


@records_router.get("", response_model=RecordListResponse)
async def list_records(worksheet: WorksheetDep) -> RecordListResponse:
    """List records in display order."""
    return _record_list(worksheet.store)


@records_router.post("", response_model=RecordResponse, status_code=201)
async def add_record(worksheet: WorksheetDep, today: TodayDep) -> RecordResponse:
    """Add a blank record for the month after the latest one (or this month)."""
    record = worksheet.store.add_blank(today)
    index = worksheet.store.index_of(record.year, record.month)
    return RecordResponse.from_record(index if index is not None else 0, record)


@records_router.post("/fill", response_model=FillRecordsResponse)
async def fill_records(
    worksheet: WorksheetDep,
    today: TodayDep,
    payload: FillRecordsRequest | None = Body(default=None),  # noqa: B008
) -> FillRecordsResponse:
    """Fill blank months from the hire date (or a given start) through this month."""
    if payload is not None and payload.start_year is not None and payload.start_month is not None:
        start_year, start_month = payload.start_year, payload.start_month
    elif worksheet.profile.hire_date is not None:
        start_year, start_month = worksheet.profile.hire_date.year, worksheet.profile.hire_date.month
    else:
        start_year = start_month = None

    created = worksheet.store.fill_to_current(start_year, start_month, today)
    listing = _record_list(worksheet.store)
    return FillRecordsResponse(**listing.model_dump(), created=len(created))


@records_router.patch("", response_model=RecordListResponse)
async def update_records(payload: UpdateRecordsRequest, worksheet: WorksheetDep) -> RecordListResponse:
    """Apply a batch of (index, field, value) edits, all or nothing."""
    worksheet.store.apply_updates(
        RecordUpdate(index=u.index, field=u.field, value=u.value) for u in payload.updates
    )
    return _record_list(worksheet.store)


@records_router.delete("/{index}", response_model=RecordListResponse)
async def delete_record(index: int, worksheet: WorksheetDep) -> RecordListResponse:
    """Delete the record at a display position; confirmation is up to the client."""
    worksheet.store.delete(index)
    return _record_list(worksheet.store)


@records_router.post("/sort", response_model=RecordListResponse)
async def toggle_sort(worksheet: WorksheetDep) -> RecordListResponse:
    """Flip the display order between newest-first and oldest-first."""
    worksheet.store.toggle_sort()
    return _record_list(worksheet.store)
