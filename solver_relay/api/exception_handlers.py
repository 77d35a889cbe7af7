from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from solver_relay.core.middleware.http_logging import get_request_id
from solver_relay.domain.exceptions import RelayError

logger = logging.getLogger("solver_relay.errors")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
        # Details were already logged where the error was raised; only metadata here.
        logger.info(
            "Request failed",
            extra={
                "request_id": get_request_id(request),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
