"""Reject oversized request bodies before they are read.

Only the declared Content-Length is checked here. Chunked bodies have no length up
front, so the solve route re-checks the bytes it actually reads.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from solver_relay.core.settings import get_settings

logger = logging.getLogger("solver_relay.body_limit")

PAYLOAD_TOO_LARGE_MESSAGE = "Request body is too large."


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limit = get_settings().max_request_body_bytes
        declared = _declared_length(request)
        if declared is not None and declared > limit:
            logger.info(
                "Request body rejected (too large)",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "http_method": request.method,
                    "status_code": 413,
                },
            )
            return JSONResponse(status_code=413, content={"error": PAYLOAD_TOO_LARGE_MESSAGE})
        return await call_next(request)
