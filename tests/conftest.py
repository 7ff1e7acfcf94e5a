from __future__ import annotations

import os

import pytest

_BARE_ENV = ("DEEPSEEK_API_KEY", "ALLOWED_ORIGIN", "PORT")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep tests deterministic and isolated from developer machine env.
    """
    for k in list(os.environ.keys()):
        if k.startswith("PROMPTKITCHEN_") or k.upper() in _BARE_ENV:
            monkeypatch.delenv(k, raising=False)
