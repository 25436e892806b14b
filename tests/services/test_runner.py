# tests/services/test_runner.py
from __future__ import annotations

import uvicorn

from roster.common import settings as s
from roster.services.api import __main__ as runner


def test_main_serves_app_with_settings(monkeypatch):
    s.get_settings.cache_clear()
    monkeypatch.setenv("API__PORT", "8123")
    monkeypatch.setenv("APP_ENV", "production")
    seen = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: seen.update(app=app, **kw))
    try:
        runner.main()
    finally:
        s.get_settings.cache_clear()

    assert seen["app"] == "roster.services.api.app:app"
    assert seen["port"] == 8123
    assert seen["reload"] is False
