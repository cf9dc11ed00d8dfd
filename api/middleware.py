"""
Global middleware: request log + timing, body size limit, security headers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import config

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def body_size_limit(request: Request, call_next):
        length = request.headers.get("content-length")
        if length is not None and length.isdigit() and int(length) > config.max_body_bytes:
            logger.warning(
                "Rejected %s %s: body of %s bytes exceeds %d",
                request.method, request.url.path, length, config.max_body_bytes,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "statusCode": 413,
                    "error": "PayloadTooLarge",
                    "message": f"Request body exceeds {config.max_body_bytes} bytes",
                },
            )
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # Registered last so it wraps the others and times the whole request.
    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "%s %s %d %.1fms",
            request.method, request.url.path, response.status_code, elapsed * 1000,
        )
        return response
