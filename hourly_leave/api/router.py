from fastapi import APIRouter

from hourly_leave.api.calculations import calculations_router, stateless_router
from hourly_leave.api.calendar import calendar_router
from hourly_leave.api.records import records_router
from hourly_leave.api.worksheets import worksheets_router

api_router = APIRouter()
api_router.include_router(worksheets_router)
api_router.include_router(records_router)
api_router.include_router(calculations_router)
api_router.include_router(stateless_router)
api_router.include_router(calendar_router)
