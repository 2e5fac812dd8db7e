"""Shared test fixtures for the response-handling suite."""

from __future__ import annotations

import json
import os

import pytest

from toon_response.config.settings import HandlerSettings


# ---------------------------------------------------------------------------
# Keep TOON_* env vars from leaking into settings under test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_toon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove TOON_ env vars so HandlerSettings sees only test defaults."""
    for key in list(os.environ):
        if key.startswith("TOON_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Settings and body fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> HandlerSettings:
    """Settings with the default 2xx success range."""
    return HandlerSettings()


@pytest.fixture
def success_body() -> bytes:
    return json.dumps({
        "success": True,
        "data": {"id": 1, "name": "test"},
        "meta": {"request_id": "req-123", "api_version": "v1"},
    }).encode()


@pytest.fixture
def error_body() -> bytes:
    return json.dumps({
        "success": False,
        "error": {
            "code": "INVALID_EMAIL",
            "message": "Email format is invalid",
            "details": "Must contain @ symbol",
            "field": "email",
        },
    }).encode()


@pytest.fixture
def rate_limited_body() -> bytes:
    return json.dumps({
        "success": True,
        "meta": {
            "rate_limit": {
                "limit": 1000,
                "remaining": 0,
                "reset": "2025-12-31T23:59:59Z",
            },
        },
    }).encode()

