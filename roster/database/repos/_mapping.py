# roster/database/repos/_mapping.py
from __future__ import annotations

from typing import Any, Iterable

from roster.database.models.catalog import Course as DBCourse, Student as DBStudent
from roster.domain.entities.course import Course as DomainCourse
from roster.domain.entities.links.association_link import AssociationLink
from roster.domain.entities.student import Student as DomainStudent


def to_domain_student(row: DBStudent) -> DomainStudent:
    return DomainStudent(
        id=row.id,
        full_name=row.full_name,
        normalized_name=row.normalized_name,
        email=row.email,
        notes=row.notes,
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
        data_origin=getattr(row, "data_origin", None),
    )


def to_domain_course(row: DBCourse) -> DomainCourse:
    return DomainCourse(
        id=row.id,
        code=row.code,
        title=row.title,
        slug=row.slug,
        description=row.description,
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
        data_origin=getattr(row, "data_origin", None),
    )


def to_domain_link(row: Any, *, left_key: str, right_key: str, metadata_fields: Iterable[str]) -> AssociationLink:
    return AssociationLink(
        left_id=getattr(row, left_key),
        right_id=getattr(row, right_key),
        metadata={f: getattr(row, f, None) for f in metadata_fields},
        linked_at=getattr(row, "date_created", None),
        updated_at=getattr(row, "last_updated", None),
    )
