# ruff: noqa: TC003
"""API endpoints for worksheet profiles."""

from __future__ import annotations

import uuid

from fastapi import APIRouter

from hourly_leave.api.deps import WorksheetDep
from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode
from hourly_leave.schemas.record import RecordResponse
from hourly_leave.schemas.worksheet import CreateWorksheetRequest, UpdateWorksheetRequest, WorksheetResponse
from hourly_leave.services.worksheet import Worksheet, WorksheetProfile, get_worksheet_service

worksheets_router = APIRouter(
    prefix="/worksheets",
    tags=["worksheets"],
)


def _to_response(worksheet: Worksheet) -> WorksheetResponse:
    records = worksheet.store.records
    return WorksheetResponse(
        id=worksheet.id,
        identifier=worksheet.profile.identifier,
        unit=worksheet.profile.unit,
        wage=worksheet.profile.wage,
        hire_date=worksheet.profile.hire_date,
        sort_direction=worksheet.store.sort_direction,
        records=[RecordResponse.from_record(i, r) for i, r in enumerate(records)],
        total=len(records),
    )


@worksheets_router.post(
    "",
    response_model=WorksheetResponse,
    status_code=201,
)
async def create_worksheet(payload: CreateWorksheetRequest) -> WorksheetResponse:
    """Create an empty worksheet with the given profile."""
    profile = WorksheetProfile(
        identifier=payload.identifier,
        unit=payload.unit,
        wage=payload.wage,
        hire_date=payload.hire_date,
    )
    return _to_response(get_worksheet_service().create(profile))


@worksheets_router.get(
    "/{worksheet_id}",
    response_model=WorksheetResponse,
)
async def get_worksheet(worksheet: WorksheetDep) -> WorksheetResponse:
    """Get a worksheet's profile and records in display order."""
    return _to_response(worksheet)


@worksheets_router.patch(
    "/{worksheet_id}",
    response_model=WorksheetResponse,
)
async def update_worksheet(payload: UpdateWorksheetRequest, worksheet: WorksheetDep) -> WorksheetResponse:
    """Update profile fields; explicit nulls clear wage and hire date."""
    changes = payload.model_dump(exclude_unset=True)
    for key in ("identifier", "unit"):
        if changes.get(key) is None:
            changes.pop(key, None)
    worksheet.profile = worksheet.profile.model_copy(update=changes)
    return _to_response(worksheet)


@worksheets_router.post(
    "/{worksheet_id}/clear",
    response_model=WorksheetResponse,
)
async def clear_worksheet(worksheet: WorksheetDep) -> WorksheetResponse:
    """Remove every record and blank the profile."""
    worksheet.reset()
    return _to_response(worksheet)


@worksheets_router.delete(
    "/{worksheet_id}",
    status_code=204,
)
async def delete_worksheet(worksheet_id: uuid.UUID) -> None:
    """Forget a worksheet."""
    if not get_worksheet_service().delete(worksheet_id):
        raise LeaveError(ErrorCode.WORKSHEET_NOT_FOUND, "Worksheet not found")
