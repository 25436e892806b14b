# tests/services/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from roster.services.api.app import create_app
from roster.services.api.deps import transactional_session


@pytest.fixture()
def api_client(db_engine):
    """
    A TestClient whose `transactional_session` dependency is overridden to
    yield one Session bound to the test connection. All requests in a test
    share it (so POST -> GET works) and everything is rolled back at the end.
    """
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, join_transaction_mode="create_savepoint")

    app = create_app()

    def _override():
        yield session

    app.dependency_overrides[transactional_session] = _override

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        session.close()
        trans.rollback()
        conn.close()
