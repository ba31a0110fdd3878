"""
FastAPI exception handlers that map app-level exceptions to HTTP responses.

Services and repositories raise `medshop.exceptions.base.*`; each exception already
knows its payload (`to_payload()`) and status (`http_status()`), so the handlers
here only log and serialize.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from medshop.exceptions.base import (
    BusinessRuleError,
    DatabaseError,
    InvalidInputError,
    InvalidOperationError,
    NotFoundError,
    RepositoryError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)


# Most specific first. These handlers are intentionally tiny.

async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """404 Not Found."""
    logger.info("NotFoundError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def business_rule_handler(request: Request, exc: BusinessRuleError) -> JSONResponse:
    """
    400 for errors a trigger or procedure raised on purpose.
    Payload: {"error", "message", "errorNumber", "severity", "source", "details"}
    """
    logger.info(
        "BusinessRuleError for %s %s: number=%s source=%s",
        request.method, request.url.path, exc.number, exc.source.value,
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    """400 for arguments the service rejected before calling the database."""
    logger.info("InvalidOperationError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """500 for infrastructure faults. No `source` field: nothing on the server meant to refuse the call."""
    logger.error("DatabaseError for %s %s: number=%s", request.method, request.url.path, exc.number)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    logger.error("UnexpectedError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Fallback for any other app-level error (status defined by its error_code)."""
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    422 for malformed bodies / query strings, in the same shape as other app errors:
    {"error": "Invalid request", "message": "...", "code": "invalid_input", "fields": [...]}
    """
    fields = []
    messages = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            fields.append(".".join(loc))
        messages.append(f"{'.'.join(loc) or 'request'}: {error.get('msg')}")

    wrapped = InvalidInputError("; ".join(messages) or "Invalid request", fields=fields)
    logger.info("RequestValidationError for %s %s: fields=%s", request.method, request.url.path, fields)
    return JSONResponse(status_code=wrapped.http_status(), content=wrapped.to_payload())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: anything that escaped the translators is a 500 carrying only its message."""
    logger.exception("Unhandled exception for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


# Helper to register all handlers on an app (called from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(BusinessRuleError, business_rule_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(UnexpectedError, unexpected_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
