# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import Depends, Path

from hourly_leave.services.worksheet import Worksheet, get_worksheet_service, require_worksheet


async def get_today() -> date:
    """Current date; overridden in tests to pin the calendar."""
    return date.today()


TodayDep = Annotated[date, Depends(get_today)]


async def get_worksheet(worksheet_id: uuid.UUID = Path()) -> Worksheet:
    """Resolve the worksheet named in the path or fail with 404."""
    return require_worksheet(get_worksheet_service(), worksheet_id)


WorksheetDep = Annotated[Worksheet, Depends(get_worksheet)]
