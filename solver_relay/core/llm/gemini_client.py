from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class GeminiError(Exception):
    """Base error for Gemini client failures (safe to map to a generic 500)."""


class GeminiUpstreamError(GeminiError):
    """Raised when the Gemini call fails at the transport level or returns non-2xx.

    `status_code` and `detail` are for server-side logs only. Neither ever contains
    the API key (the request URL is never included).
    """

    def __init__(self, message: str, *, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class GeminiEmptyResponseError(GeminiError):
    """Raised when Gemini answers 2xx but no text is reachable (e.g. safety blocks)."""

    def __init__(self, message: str, *, payload: Any):
        super().__init__(message)
        self.payload = payload


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float | None = None
    system_instruction: str | None = None


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def extract_text(payload: Any) -> str | None:
    """Return `candidates[0].content.parts[0].text`, or None if any hop is missing."""

    if not isinstance(payload, dict):
        return None
    candidate = _first(payload.get("candidates"))
    if not isinstance(candidate, dict):
        return None
    content = candidate.get("content")
    if not isinstance(content, dict):
        return None
    part = _first(content.get("parts"))
    if not isinstance(part, dict):
        return None
    text = part.get("text")
    if isinstance(text, str) and text:
        return text
    return None


def _error_detail(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class GeminiClient:
    """
    Minimal Gemini `generateContent` client.

    Design notes:
    - No logging in this module; callers decide what to log.
    - `contents` is forwarded untouched. The relay does not interpret it.
    - One request per call. No retries.
    """

    def __init__(self, *, config: GeminiConfig):
        self._config = config

    def build_payload(self, *, contents: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {"contents": contents}
        if self._config.system_instruction:
            payload["systemInstruction"] = {
                "role": "system",
                "parts": [{"text": self._config.system_instruction}],
            }
        return payload

    async def generate_text(self, *, contents: Any) -> str:
        url = f"{self._config.base_url.rstrip('/')}/models/{self._config.model}:generateContent"
        params = {"key": self._config.api_key}
        payload = self.build_payload(contents=contents)

        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                resp = await client.post(url, params=params, json=payload)
        except httpx.TimeoutException as exc:
            raise GeminiUpstreamError(
                "Gemini request timed out", detail=type(exc).__name__
            ) from exc
        except httpx.HTTPError as exc:
            raise GeminiUpstreamError("Gemini request failed", detail=type(exc).__name__) from exc

        if not resp.is_success:
            raise GeminiUpstreamError(
                "Gemini service returned an error",
                status_code=resp.status_code,
                detail=_error_detail(resp),
            )

        try:
            data = resp.json()
        except ValueError:
            # A non-JSON 2xx counts as a reply without text.
            raise GeminiEmptyResponseError(
                "Gemini response was not valid JSON", payload=resp.text
            ) from None

        text = extract_text(data)
        if text is None:
            raise GeminiEmptyResponseError("Gemini response contained no text", payload=data)
        return text
