"""End-to-end relay tests: real Gemini client, respx-mocked upstream."""

from __future__ import annotations

import json

import httpx
import respx
from fastapi.testclient import TestClient

from tests._helpers import TEST_API_KEY

GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-pro:generateContent"
)
CONTENTS = [{"role": "user", "parts": [{"text": "Derive v = u + at"}]}]


def test_relay_injects_key_and_returns_text(client: TestClient) -> None:
    with respx.mock(assert_all_called=True) as router:
        route = router.post(GEMINI_ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"candidates": [{"content": {"parts": [{"text": "$v = u + at$"}]}}]}
            )
        )
        res = client.post("/api/solve", json={"contents": CONTENTS})

    assert res.status_code == 200, res.text
    assert res.json() == {"text": "$v = u + at$"}

    upstream_request = route.calls.last.request
    assert upstream_request.url.params["key"] == TEST_API_KEY
    assert json.loads(upstream_request.content) == {"contents": CONTENTS}


def test_relay_maps_upstream_4xx_to_generic_500(client: TestClient) -> None:
    with respx.mock() as router:
        router.post(GEMINI_ENDPOINT).mock(
            return_value=httpx.Response(
                400, json={"error": {"message": "API key not valid. Please pass a valid API key."}}
            )
        )
        res = client.post("/api/solve", json={"contents": CONTENTS})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to fetch response from the AI service."}
    assert TEST_API_KEY not in res.text


def test_relay_maps_network_error_to_generic_500(client: TestClient) -> None:
    with respx.mock() as router:
        router.post(GEMINI_ENDPOINT).mock(side_effect=httpx.ConnectError("dns failure"))
        res = client.post("/api/solve", json={"contents": CONTENTS})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to fetch response from the AI service."}
    assert "dns failure" not in res.text


def test_relay_maps_safety_block_to_empty_response_error(client: TestClient) -> None:
    with respx.mock() as router:
        router.post(GEMINI_ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"candidates": [{"finishReason": "SAFETY", "safetyRatings": []}]}
            )
        )
        res = client.post("/api/solve", json={"contents": CONTENTS})

    assert res.status_code == 500
    assert res.json() == {"error": "Received an empty or invalid response from the AI service."}


def test_relay_maps_non_json_success_to_empty_response_error(client: TestClient) -> None:
    with respx.mock() as router:
        router.post(GEMINI_ENDPOINT).mock(return_value=httpx.Response(200, text="<html>ok</html>"))
        res = client.post("/api/solve", json={"contents": CONTENTS})

    assert res.status_code == 500
    assert res.json() == {"error": "Received an empty or invalid response from the AI service."}
