import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = "1"


class DuplicateCodeError(Exception):
    """Raised by the storage layer when the unique index on ``code`` rejects a row."""

    def __init__(self, code: str):
        super().__init__(f"Code '{code}' already exists")
        self.code = code


class CodeGenerationExhausted(Exception):
    """Raised when every generated candidate collided with an existing code."""

    def __init__(self, attempts: int):
        super().__init__(f"No unique code found after {attempts} attempts")
        self.attempts = attempts


class InvalidInput(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class CodeConflict(HTTPException):
    def __init__(self, code: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT, detail=f"Code '{code}' is already taken"
        )


class ServiceUnavailable(HTTPException):
    def __init__(self, detail: str = "Could not allocate a short code, please retry"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )


class LinkNotFound(HTTPException):
    def __init__(self, code: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Link '{code}' not found")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def storage_unavailable_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """Report lost connectivity to the database; the request is not retried here."""
    logger.error(
        "Storage unavailable while serving %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(OperationalError, storage_unavailable_handler)
