"""
Exception handlers — render every error as ``{statusCode, error, message}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import config
from utils.errors import AppError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)


def _render(exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.debug("%s %s → %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _render(ValidationError.from_pydantic(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        message = "Internal server error" if config.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content={"statusCode": 500, "error": "InternalServerError", "message": message},
        )
