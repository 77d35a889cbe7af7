from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Error body shared by every failure path."""

    error: str = Field(
        description="Generic, caller-safe error message. Upstream details are never included.",
        examples=["Failed to fetch response from the AI service."],
    )
