# tests/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from roster.common.settings import get_settings
from roster.database.core.main import build_engine
from roster.database.models import Base  # <-- imports every model onto the metadata


@pytest.fixture(scope="session")
def _database_url():
    """
    In-memory SQLite by default. USE_TESTCONTAINERS=1 runs the same suite
    against a throwaway Postgres instead.
    """
    cfg = get_settings()
    if not cfg.use_testcontainers:
        yield "sqlite://"
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(cfg.test_db_image, driver="psycopg") as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def db_engine(_database_url) -> Engine:
    if _database_url.startswith("sqlite"):
        # one shared connection so every session sees the same in-memory database
        engine = build_engine(
            _database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = build_engine(_database_url)

    # Skip Alembic here; just create tables from models
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
