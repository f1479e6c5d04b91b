"""Exception handlers rendering every failure as ``{success, error}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from copilot.errors import GenerationFailedError
from database.errors import AnalystModeViolation, QueryError, SQLExecutionError

logger = logging.getLogger(__name__)


async def query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
    """Map statement pipeline errors to their status codes."""
    content: dict = {"success": False, "error": exc.message}
    if isinstance(exc, SQLExecutionError):
        content["sql_error"] = True
    if isinstance(exc, AnalystModeViolation):
        content["is_dangerous"] = False
        content["needs_confirmation"] = False
    return JSONResponse(status_code=exc.status_code, content=content)


async def generation_failed_handler(request: Request, exc: GenerationFailedError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400 with the offending fields."""
    details = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning("Validation error on %s: %s", request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Invalid request", "details": details},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QueryError, query_error_handler)
    app.add_exception_handler(GenerationFailedError, generation_failed_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
