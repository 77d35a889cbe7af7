from __future__ import annotations

import pytest

from tests._helpers import PUBLIC_DIR, TEST_API_KEY


@pytest.fixture(autouse=True)
def _set_test_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GEMINI_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("STATIC_DIR", str(PUBLIC_DIR))
    for name in (
        "HOST",
        "PORT",
        "APP_ENV",
        "GEMINI_MODEL",
        "GEMINI_BASE_URL",
        "GEMINI_TIMEOUT_SECONDS",
        "GEMINI_SYSTEM_INSTRUCTION_ENABLED",
        "GEMINI_SYSTEM_INSTRUCTION",
        "MAX_REQUEST_BODY_MB",
    ):
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from solver_relay.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from solver_relay.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
