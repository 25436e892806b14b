# roster/database/core/service_object.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import JSON, DateTime, Text, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Timestamped:
    """
    Mixin for created/updated timestamps plus a free-form JSON bag.
    Association (link) records use this directly; entities get it via ServiceObject.
    """
    __abstract__ = True

    @declared_attr
    def date_created(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            default=utcnow,
            server_default=func.now(),
        )

    @declared_attr
    def last_updated(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            default=utcnow,
            server_default=func.now(),
            onupdate=utcnow,
        )

    @declared_attr
    def meta_data(cls) -> Mapped[Optional[dict]]:
        return mapped_column(JSONType, nullable=True)


class ServiceObject(Timestamped):
    """
    Mixin providing common columns for persisted entities.
    Use with multiple inheritance: `class MyModel(ServiceObject, Base): ...`
    """
    __abstract__ = True

    @declared_attr
    def id(cls) -> Mapped[PyUUID]:
        # generated client-side so the id is known before flush
        return mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    @declared_attr
    def data_origin(cls) -> Mapped[Optional[str]]:
        return mapped_column(Text, nullable=True)
