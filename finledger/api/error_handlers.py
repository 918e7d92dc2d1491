"""Error Handlers: every failure leaves the API in the same {"error": {...}} envelope.

Invariants:
    - FinLedgerError -> its own http_status and to_response() body
    - RequestValidationError -> 400 VALIDATION_ERROR with one detail per offending field
    - Framework HTTP errors (unknown route, wrong method) -> their status, enveloped
    - Anything else -> 500 INTERNAL_ERROR; the exception text is logged, never returned

Design Decisions:
    - Client errors (4xx) log at WARNING, server errors at ERROR with traceback
    - Validation field paths drop the leading "body"/"query" segment: clients see "amount",
      not "body.amount"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finledger.core.errors import ErrorCategory, ErrorSeverity, FinLedgerError

logger = logging.getLogger(__name__)

_REQUEST_PARTS = {"body", "query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FinLedgerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **more,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **more,
        },
    }


async def handle_domain_error(request: Request, exc: FinLedgerError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            "%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message,
            extra={"error_code": exc.code, "user_id": exc.context.user_id},
        )
    else:
        logger.warning(
            "%s on %s %s", exc.code, request.method, request.url.path,
            extra={"error_code": exc.code, "user_id": exc.context.user_id},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts)


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {"field": _field_name(err["loc"]), "message": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    logger.warning(
        "Rejected %s %s: %s", request.method, request.url.path,
        ", ".join(d["field"] for d in details),
        extra={"error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_http_error(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code, category = "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND
    else:
        code, category = f"HTTP_{exc.status_code}", ErrorCategory.VALIDATION
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(code, str(exc.detail), category, ErrorSeverity.WARNING),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
