# roster/database/core/main.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from roster.common.settings import get_settings

_settings = get_settings()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated", "data_origin", "meta_data")


class Base(DeclarativeBase):
    metadata = MetaData(
        schema=_settings.db_schema,
        naming_convention=NAMING_CONVENTION,
    )

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        # Stable ordering: ServiceObject fields first, then everything else in their original order
        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


def install_sqlite_listeners(engine: Engine) -> None:
    """
    pysqlite needs two things before the association layer behaves:
      - foreign keys are off by default (ON DELETE CASCADE is ignored)
      - its own BEGIN handling breaks SAVEPOINT; take over transaction control
    """
    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn, _):
        dbapi_conn.isolation_level = None
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, **kw) -> Engine:
    """Create an Engine for `url`; pool tuning only applies to pooled server databases."""
    is_sqlite = url.startswith("sqlite")
    if not is_sqlite and "poolclass" not in kw:
        kw.update(
            pool_size=_settings.db.pool_size,
            max_overflow=_settings.db.max_overflow,
            pool_pre_ping=_settings.db.pool_pre_ping,
            pool_recycle=_settings.db.pool_recycle,
        )

    engine = create_engine(url, echo=_settings.db.echo, future=True, **kw)

    if is_sqlite:
        install_sqlite_listeners(engine)
    elif _settings.db_schema:
        # Ensure the app schema is first, then public (so extensions remain visible)
        @event.listens_for(engine, "connect")
        def _set_search_path(dbapi_conn, _):
            with dbapi_conn.cursor() as cur:
                cur.execute(f'SET search_path TO "{_settings.db_schema}", public')

    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return build_engine(_settings.database_url)


SessionLocal = sessionmaker(expire_on_commit=False, future=True, autoflush=False)


def new_session() -> Session:
    return SessionLocal(bind=get_engine())

