# roster/services/mappers/enrollment.py
from __future__ import annotations

from roster.domain.dataclasses.reports import SyncReport
from roster.domain.entities.links.association_link import AssociationLink
from roster.services.schemas.enrollments import EnrollmentRead, SyncReportRead


def link_to_read(link: AssociationLink) -> EnrollmentRead:
    md = link.metadata
    return EnrollmentRead(
        student_id=link.left_id,
        course_id=link.right_id,
        role=md.get("role"),
        note=md.get("note"),
        meta_data=md.get("meta_data"),
        date_created=link.linked_at,
        last_updated=link.updated_at,
    )


def report_to_read(report: SyncReport) -> SyncReportRead:
    # sorted for stable responses
    return SyncReportRead(
        student_id=report.left_id,
        to_add=sorted(report.to_add, key=str),
        to_remove=sorted(report.to_remove, key=str),
        unchanged=sorted(report.unchanged, key=str),
        changed=report.changed,
    )
