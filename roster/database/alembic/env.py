# roster/database/alembic/env.py
from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, text
from sqlalchemy.engine import Connection

# --- Load app settings --------------------------------------------------------
from roster.common.settings import get_settings

cfg = get_settings()

# --- Alembic Config -----------------------------------------------------------
alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

database_url = cfg.database_url

# Importing the models package registers every table on Base.metadata
from roster.database.models import Base  # noqa: E402

target_metadata = Base.metadata

include_schemas = cfg.db_schema is not None
version_table_schema = cfg.alembic_version_table_schema


def include_object(object, name, type_, reflected, compare_to):
    """Limit autogenerate to our schema (tables without a schema live on search_path)."""
    obj_schema = getattr(object, "schema", None)
    if type_ == "table":
        if obj_schema is None:
            return True
        return obj_schema in {cfg.db_schema, version_table_schema}
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no DB connection)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_schemas=include_schemas,
        include_object=include_object,
        version_table_schema=version_table_schema,
        render_as_batch=database_url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def _prepare_connection(conn: Connection) -> None:
    """Ensure the app schema exists and is first on search_path (Postgres only)."""
    if conn.dialect.name != "postgresql" or not cfg.db_schema:
        return
    conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{cfg.db_schema}"'))
    conn.execute(text(f'SET search_path TO "{cfg.db_schema}", public'))


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with an Engine/Connection)."""
    from roster.database.core.main import build_engine

    connectable = build_engine(database_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _prepare_connection(connection)

        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_schemas=include_schemas,
            include_object=include_object,
            version_table_schema=version_table_schema,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
