"""Tests for environment-driven settings."""

from __future__ import annotations

import json

from core.config import AppSettings


def test_default_token_chain_order():
    settings = AppSettings()

    assert [e.name for e in settings.token_endpoints] == [
        "auth-logout",
        "auth-login",
        "groups-primary-membership",
    ]
    assert all(e.method == "POST" for e in settings.token_endpoints)
    assert all("x-csrf-token" in e.omit_headers for e in settings.token_endpoints)


def test_env_overrides(monkeypatch):
    chain = [{"name": "custom", "url": "https://auth.example.test/v1/logout"}]
    monkeypatch.setenv("OWNER_RELAY_TOKEN_ENDPOINTS", json.dumps(chain))
    monkeypatch.setenv("OWNER_RELAY_PLACEHOLDER_ENTITY_IDS", "[1, 123456]")
    monkeypatch.setenv("OWNER_RELAY_CREDENTIAL_MIN_LENGTH", "20")

    settings = AppSettings()

    assert [e.name for e in settings.token_endpoints] == ["custom"]
    assert settings.token_endpoints[0].url == "https://auth.example.test/v1/logout"
    assert settings.placeholder_entity_ids == {1, 123456}
    assert settings.credential_min_length == 20


def test_placeholder_ids_empty_by_default():
    settings = AppSettings()

    assert settings.placeholder_entity_ids == set()
    assert "0" in AppSettings.model_fields["placeholder_entity_ids"].description
