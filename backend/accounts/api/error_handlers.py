"""Error Handlers: global exception handlers for the Accounts API.

Invariants:
    - AccountsError → its own http_status with {"error": message}
    - RequestValidationError → 400 with {"error": message}
    - Starlette HTTPException (404/405) → same {"error": ...} envelope
    - Unhandled exceptions are RecovererMiddleware's job, not registered here

Design Decisions:
    - Extracted from router.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.api.codec import encode_error
from accounts.core.errors import AccountsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_accounts_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)


def _register_accounts_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AccountsError)
    async def accounts_error_handler(request: Request, exc: AccountsError):
        logger.warning(
            f"AccountsError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return encode_error(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_error_message(exc)},
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request data"
    first = errors[0]
    field = ".".join(str(loc) for loc in first["loc"])
    return f"{field}: {first['msg']}"
