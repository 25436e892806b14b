import pytest

from roster.common import settings as s
from roster.domain.enums import DeletePolicy, LinkPolicy


@pytest.fixture()
def fresh_settings(monkeypatch):
    # ensure a clean cache per test, and don't leak env-driven settings into later tests
    s.get_settings.cache_clear()
    yield monkeypatch
    s.get_settings.cache_clear()


def test_defaults(fresh_settings):
    fresh_settings.delenv("DATABASE_URL", raising=False)
    cfg = s.get_settings()
    assert cfg.app_name == "roster"
    assert cfg.api.prefix == "/api"
    assert cfg.associations.in_clause_chunk >= 1
    assert cfg.db_schema is None  # "public" -> no explicit schema
    assert cfg.database_url.startswith(cfg.db.driver)


def test_nested_env_overrides(fresh_settings):
    fresh_settings.delenv("DATABASE_URL", raising=False)
    fresh_settings.setenv("ASSOCIATIONS__LINK_POLICY", "reject")
    fresh_settings.setenv("ASSOCIATIONS__DELETE_POLICY", "reject")
    fresh_settings.setenv("DB__HOST", "db.internal")

    cfg = s.get_settings()
    assert cfg.associations.link_policy is LinkPolicy.reject
    assert cfg.associations.delete_policy is DeletePolicy.reject
    assert "@db.internal:" in cfg.database_url


def test_database_url_env_wins(fresh_settings):
    fresh_settings.setenv("DATABASE_URL", "sqlite:///./roster.db")
    assert s.get_settings().database_url == "sqlite:///./roster.db"


def test_cors_lists_accept_csv():
    cfg = s.APIConfig(cors_allow_origins="http://a.test, http://b.test", cors_allow_methods="GET,POST")
    assert cfg.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert cfg.cors_allow_methods == ["GET", "POST"]


def test_bool_helper():
    assert s._to_bool("yes") is True
    assert s._to_bool("0") is False
    assert s._to_bool(None, default=True) is True
