# roster/database/core/transaction.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transactional(db: Session) -> Iterator[Session]:
    """
    Commit-or-rollback scope around a unit of work.

    If the session already has a transaction (request scope, test fixture,
    an earlier query) this is a SAVEPOINT: on error only the work inside the
    block is undone and the outer transaction stays usable. Otherwise a
    top-level transaction is begun and committed on exit.
    """
    if db.in_transaction():
        with db.begin_nested():
            yield db
    else:
        with db.begin():
            yield db
