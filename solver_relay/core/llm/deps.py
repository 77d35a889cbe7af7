from __future__ import annotations

from solver_relay.core.llm.gemini_client import GeminiClient, GeminiConfig
from solver_relay.core.settings import get_settings


def get_gemini_client() -> GeminiClient:
    """Dependency provider for GeminiClient.

    Settings validation already guarantees an API key, so this never returns None.
    """

    settings = get_settings()
    system_instruction = (
        settings.gemini_system_instruction if settings.gemini_system_instruction_enabled else None
    )
    config = GeminiConfig(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        model=settings.gemini_model,
        timeout_seconds=settings.gemini_timeout_seconds,
        system_instruction=system_instruction,
    )
    return GeminiClient(config=config)
