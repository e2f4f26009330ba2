from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from hourly_leave.api.deps import get_today
from hourly_leave.main import app
from hourly_leave.services.worksheet import InMemoryWorksheetService, set_worksheet_service

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

# Pinned "current month" for every test that depends on the calendar.
TODAY = date(2025, 3, 15)


@pytest.fixture(autouse=True)
def _fresh_worksheet_service() -> Iterator[InMemoryWorksheetService]:
    """Give every test an empty worksheet registry."""
    svc = InMemoryWorksheetService()
    set_worksheet_service(svc)
    yield svc
    set_worksheet_service(InMemoryWorksheetService())


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the calendar pinned to ``TODAY``."""

    async def _override_get_today() -> date:
        return TODAY

    app.dependency_overrides[get_today] = _override_get_today
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
