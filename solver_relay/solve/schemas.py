from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SolveIn(BaseModel):
    """Documented request shape. The route parses the raw body itself so that every
    validation failure keeps the `{error}` response format."""

    contents: Any = Field(
        description=(
            "Provider-specific conversation payload, forwarded to Gemini untouched "
            "(e.g. `[{\"role\": \"user\", \"parts\": [{\"text\": \"...\"}]}]`)."
        ),
    )


class SolveOut(BaseModel):
    text: str = Field(min_length=1, description="Text of the first candidate's first part.")
