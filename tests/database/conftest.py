# tests/database/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    The session works on SAVEPOINTs inside it, so code under test can commit,
    roll back or open nested transactions freely.
    """
    connection = db_engine.connect()
    trans = connection.begin()

    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()
