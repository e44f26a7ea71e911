import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UploadRejected(Exception):
    """Raised during intake when an upload fails type or size validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _upload_rejected_handler(request: Request, exc: UploadRejected):
    logger.error("Intake error: %s", exc.message)
    return _message(400, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.error("Intake error: %s", message)
    return _message(400, message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _message(exc.status_code, str(exc.detail))


async def _unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("General error: %s", exc)
    return _message(400, str(exc) or "Bad request")


def register_error_handlers(app: FastAPI) -> None:
    # Intake errors and everything else share the response shape; only the log line differs.
    app.add_exception_handler(UploadRejected, _upload_rejected_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
