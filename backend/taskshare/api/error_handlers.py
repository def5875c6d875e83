"""Error Handlers — every failure leaves the API as one TaskShareError envelope.

Invariants:
    - TaskShareError → its own status and to_response() body
    - A body that is not an {operation, arguments} envelope → MalformedRequestError
      (400 VALIDATION_ERROR with field details), same shape as bad arguments
    - Anything else → 500 INTERNAL_ERROR; the exception text is logged, never sent
    - Log records carry the error's operation, user and task list when known

Design Decisions:
    - Client errors (< 500) logged at warning, store and internal errors at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskshare.core.errors import (
    ErrorSeverity, MalformedRequestError, TaskShareError, validation_details,
)
from taskshare.infrastructure.observability import log_fields

logger = logging.getLogger(__name__)

_INTERNAL_ERROR_BODY = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def _respond(request: Request, exc: TaskShareError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code}: {exc.message}",
        extra=log_fields(
            error_code=exc.code,
            path=request.url.path,
            operation=exc.context.operation,
            user_id=exc.context.user_id,
            task_list_id=exc.context.task_list_id,
        ),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskShareError)
    async def taskshare_error_handler(request: Request, exc: TaskShareError):
        return _respond(request, exc)

    @app.exception_handler(RequestValidationError)
    async def envelope_error_handler(request: Request, exc: RequestValidationError):
        return _respond(request, MalformedRequestError(validation_details(exc.errors())))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__}: {exc}",
            exc_info=True,
            extra=log_fields(error_code="INTERNAL_ERROR", path=request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_INTERNAL_ERROR_BODY,
        )
