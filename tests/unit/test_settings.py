from __future__ import annotations

import re

from promptkitchen.service.app import origin_pattern
from promptkitchen.settings import Settings


def test_settings_defaults() -> None:
    s = Settings()
    assert s.deepseek_api_key is None
    assert s.allowed_origin == "https://prompt-kitchen.netlify.app"
    assert s.port == 3000
    assert s.deepseek_model == "deepseek-chat"
    assert s.temperature == 0.7
    assert s.max_tokens == 1500


def test_settings_reads_bare_deployment_env(monkeypatch) -> None:
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-bare")
    monkeypatch.setenv("ALLOWED_ORIGIN", "https://example.org/")
    monkeypatch.setenv("PORT", "8080")
    s = Settings()
    assert s.deepseek_api_key == "sk-bare"
    assert s.allowed_origin == "https://example.org/"
    assert s.port == 8080


def test_settings_reads_prefixed_env(monkeypatch) -> None:
    monkeypatch.setenv("PROMPTKITCHEN_DEEPSEEK_API_KEY", "sk-prefixed")
    monkeypatch.setenv("PROMPTKITCHEN_REQUEST_TIMEOUT_S", "5")
    s = Settings()
    assert s.deepseek_api_key == "sk-prefixed"
    assert s.request_timeout_s == 5.0


def test_origin_pattern_ignores_trailing_slash() -> None:
    pat = re.compile(origin_pattern("https://prompt-kitchen.netlify.app/"))
    assert pat.fullmatch("https://prompt-kitchen.netlify.app")
    assert pat.fullmatch("https://prompt-kitchen.netlify.app/")
    assert not pat.fullmatch("https://prompt-kitchen.netlify.app.evil.com")
    assert not pat.fullmatch("https://evil.com")
