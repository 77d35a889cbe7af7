from __future__ import annotations


class RelayError(Exception):
    """Base for errors that terminate a relay request with an `{error}` response."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(RelayError):
    """Raised when the client payload is malformed or lacks a required field."""

    status_code = 400


class PayloadTooLargeError(RelayError):
    """Raised when the request body exceeds the configured cap."""

    status_code = 413


class UpstreamFailedError(RelayError):
    """Raised when the AI service call fails (network error or non-2xx)."""


class EmptyUpstreamResponseError(RelayError):
    """Raised when the AI service answers but yields no usable text."""
