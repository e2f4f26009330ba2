# ruff: noqa: TC003
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode
from hourly_leave.services.record_store import RecordStore


class WorksheetProfile(BaseModel):
    """Who the hours belong to and how unused leave is paid."""

    identifier: str = Field(default="", max_length=100)  # 學號
    unit: str = Field(default="", max_length=255)  # 服務單位
    wage: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    hire_date: date | None = None


@dataclass
class Worksheet:
    """A profile together with its monthly hours table."""

    id: uuid.UUID
    profile: WorksheetProfile = field(default_factory=WorksheetProfile)
    store: RecordStore = field(default_factory=RecordStore)

    def reset(self) -> None:
        """Drop every record and blank the profile."""
        self.store.clear()
        self.profile = WorksheetProfile()


@runtime_checkable
class WorksheetService(Protocol):
    """Interface for worksheet storage."""

    def create(self, profile: WorksheetProfile | None = None) -> Worksheet:
        """Create and register an empty worksheet."""
        ...

    def get(self, worksheet_id: uuid.UUID) -> Worksheet | None:
        """Fetch a worksheet. Returns None if not found."""
        ...

    def delete(self, worksheet_id: uuid.UUID) -> bool:
        """Forget a worksheet. Returns False if it did not exist."""
        ...


class InMemoryWorksheetService:
    """Process-local worksheet storage; contents are lost on restart."""

    def __init__(self) -> None:
        self._worksheets: dict[uuid.UUID, Worksheet] = {}

    def create(self, profile: WorksheetProfile | None = None) -> Worksheet:
        worksheet = Worksheet(id=uuid.uuid4(), profile=profile or WorksheetProfile())
        self._worksheets[worksheet.id] = worksheet
        return worksheet

    def get(self, worksheet_id: uuid.UUID) -> Worksheet | None:
        return self._worksheets.get(worksheet_id)

    def delete(self, worksheet_id: uuid.UUID) -> bool:
        return self._worksheets.pop(worksheet_id, None) is not None


def require_worksheet(service: WorksheetService, worksheet_id: uuid.UUID) -> Worksheet:
    """Fetch a worksheet or raise WORKSHEET_NOT_FOUND."""
    worksheet = service.get(worksheet_id)
    if worksheet is None:
        raise LeaveError(ErrorCode.WORKSHEET_NOT_FOUND, "Worksheet not found")
    return worksheet


_worksheet_service: WorksheetService = InMemoryWorksheetService()


def get_worksheet_service() -> WorksheetService:
    """FastAPI dependency for the worksheet service."""
    return _worksheet_service


def set_worksheet_service(service: WorksheetService) -> None:
    """Override the service (for testing or production wiring)."""
    global _worksheet_service
    _worksheet_service = service
