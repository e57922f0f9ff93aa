"""App-wide exception handlers that answer with the standard envelope.

Errors that never reach a response builder (validation failures, unhandled
exceptions) still produce {"code": ..., "msg": ...} bodies, so clients see one
error format.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apiresp.logging import get_logger
from apiresp.schemas.error import BAD_REQUEST, INTERNAL_ERROR, ErrorInfo

logger = get_logger(__name__)


def _error_json(status_code: int, info: ErrorInfo) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(info))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 instead of FastAPI's default 422 body."""
    logger.warning("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return _error_json(400, BAD_REQUEST)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback
    - Returns the generic InternalError envelope (no stack traces leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return _error_json(500, INTERNAL_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Register the envelope-producing handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
