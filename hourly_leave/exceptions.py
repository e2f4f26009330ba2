from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hourly_leave.models.enums import ErrorCode

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.EMPTY_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NO_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FUTURE_START: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_HIRE_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_MONTH: status.HTTP_409_CONFLICT,
    ErrorCode.RECORD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WORKSHEET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    code: str | None = None
    detail: str | None = None
    status_code: int


class AppError(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class LeaveError(AppError):
    """A refused leave operation; the store it concerns is left untouched."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        super().__init__(message, status_code=_STATUS_BY_CODE[code])


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            code=getattr(exc, "code", None),
            detail=exc.message,
            status_code=exc.status_code,
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
