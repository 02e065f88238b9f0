"""Error Handlers — global exception handlers for the VoteCerto API.

Invariants:
    - VoteCertoError -> {"error": message} with the error's http_status
    - RequestValidationError -> 400 with every field message joined by ", "
    - HTTPException (unknown route, wrong method) -> {"error": detail}
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Layered handlers: domain (VoteCertoError), validation (Pydantic), HTTP, catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from votecerto.core.errors import VoteCertoError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "
INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(VoteCertoError)
    async def domain_error_handler(request: Request, exc: VoteCertoError):
        """Handle all VoteCerto domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"VoteCertoError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


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
            content={"error": format_validation_errors(exc.errors())},
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )


def _format_one(error: dict) -> str:
    if error["type"] == "missing":
        return f"Campo obrigatório: {error['loc'][-1]}"
    if error["type"] == "json_invalid":
        return "JSON inválido"
    message = error["msg"]
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    return message


def format_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic errors into one user-facing string."""
    return ", ".join(_format_one(e) for e in errors)
