from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any, Protocol

from solver_relay.core.llm.gemini_client import GeminiEmptyResponseError, GeminiUpstreamError
from solver_relay.core.middleware.body_limit import PAYLOAD_TOO_LARGE_MESSAGE
from solver_relay.domain.exceptions import (
    BadRequestError,
    EmptyUpstreamResponseError,
    PayloadTooLargeError,
    UpstreamFailedError,
)

logger = logging.getLogger("solver_relay.solve")

MISSING_CONTENTS_MESSAGE = 'Missing "contents" in request body.'
MALFORMED_JSON_MESSAGE = "Malformed JSON in request body."
EMPTY_RESPONSE_MESSAGE = "Received an empty or invalid response from the AI service."
UPSTREAM_FAILED_MESSAGE = "Failed to fetch response from the AI service."


class LLMClient(Protocol):
    async def generate_text(self, *, contents: Any) -> str: ...


def _is_missing(value: Any) -> bool:
    # Falsy scalars count as missing; empty lists/objects are forwarded as-is.
    if value is None or value == "":
        return True
    return isinstance(value, (bool, int, float)) and not value


async def read_limited_body(chunks: AsyncIterator[bytes], *, max_bytes: int) -> bytes:
    """Collect the request body, stopping as soon as it grows past `max_bytes`."""

    buffer = bytearray()
    async for chunk in chunks:
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            raise PayloadTooLargeError(PAYLOAD_TOO_LARGE_MESSAGE)
    return bytes(buffer)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"invalid JSON constant: {token}")


def parse_contents(*, body: bytes, max_bytes: int) -> Any:
    """Decode the raw request body and return its `contents` field.

    Raises BadRequestError/PayloadTooLargeError; never touches the upstream.
    """

    if len(body) > max_bytes:
        raise PayloadTooLargeError(PAYLOAD_TOO_LARGE_MESSAGE)
    if not body.strip():
        raise BadRequestError(MISSING_CONTENTS_MESSAGE)

    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError as exc:
        raise BadRequestError(MALFORMED_JSON_MESSAGE) from exc

    if not isinstance(data, dict):
        raise BadRequestError(MISSING_CONTENTS_MESSAGE)
    contents = data.get("contents")
    if _is_missing(contents):
        raise BadRequestError(MISSING_CONTENTS_MESSAGE)
    return contents


class SolveService:
    """Forward `contents` to the LLM and translate its failures into relay errors.

    Upstream diagnostics are logged here and nowhere else; callers only ever see
    the generic messages above.
    """

    def __init__(self, *, llm_client: LLMClient, request_id: str | None = None):
        self._llm = llm_client
        self._request_id = request_id

    async def solve(self, *, contents: Any) -> str:
        try:
            text = await self._llm.generate_text(contents=contents)
        except GeminiEmptyResponseError as exc:
            logger.warning(
                "AI service response was valid but contained no text",
                extra={
                    "request_id": self._request_id,
                    "upstream_payload": exc.payload,
                },
            )
            raise EmptyUpstreamResponseError(EMPTY_RESPONSE_MESSAGE) from None
        except GeminiUpstreamError as exc:
            logger.error(
                "Error calling AI service",
                extra={
                    "request_id": self._request_id,
                    "upstream_status": exc.status_code,
                    "error_type": type(exc).__name__,
                    "upstream_payload": exc.detail,
                },
            )
            raise UpstreamFailedError(UPSTREAM_FAILED_MESSAGE) from None
        except Exception:  # noqa: BLE001 - any client failure maps to the generic error
            logger.exception(
                "Unexpected error calling AI service",
                extra={"request_id": self._request_id},
            )
            raise UpstreamFailedError(UPSTREAM_FAILED_MESSAGE) from None

        if not text:
            logger.warning(
                "AI service response was valid but contained no text",
                extra={"request_id": self._request_id},
            )
            raise EmptyUpstreamResponseError(EMPTY_RESPONSE_MESSAGE)
        return text
