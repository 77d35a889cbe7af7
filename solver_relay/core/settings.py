from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are Solver.AI, an expert in Physics, Chemistry, and Mathematics for the IIT JEE exam. "
    "Provide a clear, step-by-step solution. Use LaTeX for all mathematical expressions. "
    "Be encouraging and helpful."
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "solver-relay"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # HTTP server
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Port the HTTP server listens on.",
    )
    max_request_body_mb: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("MAX_REQUEST_BODY_MB", "max_request_body_mb"),
        description="Maximum accepted request body size (MB). Inline images count toward it.",
    )
    static_dir: str = Field(
        default="./public",
        validation_alias=AliasChoices("STATIC_DIR", "static_dir"),
        description="Directory of public assets served at `/` (relative or absolute).",
    )

    # Generative-language API (Gemini)
    # The key travels in the upstream query string. Never log URLs built from it.
    gemini_api_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key"),
        description="Gemini API key (required; the process refuses to start without it).",
    )
    gemini_model: str = Field(
        default="gemini-2.5-pro",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
        description="Gemini model identifier used for generateContent.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias=AliasChoices("GEMINI_BASE_URL", "gemini_base_url"),
        description="Base URL for the Gemini API (override for proxies/emulators).",
    )
    gemini_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("GEMINI_TIMEOUT_SECONDS", "gemini_timeout_seconds"),
        description="Timeout for Gemini requests (seconds). Unset waits for the upstream.",
    )
    gemini_system_instruction_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "GEMINI_SYSTEM_INSTRUCTION_ENABLED",
            "gemini_system_instruction_enabled",
        ),
        description="If true, attach the system instruction to every upstream request.",
    )
    gemini_system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        validation_alias=AliasChoices("GEMINI_SYSTEM_INSTRUCTION", "gemini_system_instruction"),
        description="System instruction text sent when enabled.",
    )

    @property
    def max_request_body_bytes(self) -> int:
        return int(self.max_request_body_mb) * 1024 * 1024

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
