from typing import Optional

from fastapi import HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class AppointmentValidationError(ValueError):
    """Client input defect on an inbound appointment payload."""

    message = "Invalid appointment."

    def __init__(self, message: Optional[str] = None):
        self.message = message or type(self).message
        super().__init__(self.message)


class MalformedJSONError(AppointmentValidationError):
    message = "Body must be valid JSON."


class MissingFieldsError(AppointmentValidationError):
    message = "All fields are required."


class InvalidDateError(AppointmentValidationError):
    message = "Date and time must be valid."


class StoreError(Exception):
    """The backing file could not be read or written."""


class CorruptStoreError(StoreError):
    """The backing file does not hold a JSON array of appointments."""


class PathTraversalError(Exception):
    pass


class AssetNotFoundError(Exception):
    pass


class PayloadTooLargeError(Exception):
    """Request body exceeded the configured ceiling; the request is dropped."""


def create_error_response(error_message: str) -> dict:
    """Create a standardized error response"""
    return {"message": error_message}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException as ``{"message": ...}``; CORS is allowed for any origin."""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail),
        headers=CORS_HEADERS,
    )


async def validation_exception_handler(request: Request, exc: AppointmentValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=create_error_response(exc.message),
        headers=CORS_HEADERS,
    )
