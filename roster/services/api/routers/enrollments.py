# roster/services/api/routers/enrollments.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response

from roster.common.settings import get_settings
from roster.database.repos.association_repo import AssociationManager
from roster.database.repos._mapping import to_domain_link
from roster.domain.enums import Side
from roster.services.api.deps import get_enrollments
from roster.services.mappers.enrollment import link_to_read, report_to_read
from roster.services.schemas.enrollments import (
    EnrollmentMeta,
    EnrollmentRead,
    EnrollmentSync,
    EnrollmentToggle,
    SyncReportRead,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/students", tags=["enrollments"])


def _row_to_read(mgr: AssociationManager, row) -> EnrollmentRead:
    spec = mgr.spec
    return link_to_read(
        to_domain_link(row, left_key=spec.left_key, right_key=spec.right_key, metadata_fields=spec.metadata_fields)
    )


@router.get("/{student_id}/courses", response_model=List[EnrollmentRead])
def list_student_enrollments(
    student_id: UUID,
    mgr: AssociationManager = Depends(get_enrollments),
) -> List[EnrollmentRead]:
    mgr.require_entity(Side.left, student_id)
    return [link_to_read(link) for link in mgr.list_links(left_id=student_id)]


@router.put("/{student_id}/courses", response_model=SyncReportRead)
def sync_student_courses(
    student_id: UUID,
    payload: EnrollmentSync,
    mgr: AssociationManager = Depends(get_enrollments),
) -> SyncReportRead:
    meta = payload.model_dump(include={"role", "note", "meta_data"}, exclude_none=True)
    report = mgr.synchronize(student_id, payload.course_ids, detaching=payload.detaching, metadata=meta)
    return report_to_read(report)


# registered before "/{student_id}/courses/{course_id}" so "toggle" is not read as an id
@router.post("/{student_id}/courses/toggle", response_model=SyncReportRead)
def toggle_student_courses(
    student_id: UUID,
    payload: EnrollmentToggle,
    mgr: AssociationManager = Depends(get_enrollments),
) -> SyncReportRead:
    meta = payload.model_dump(include={"role", "note", "meta_data"}, exclude_none=True)
    return report_to_read(mgr.toggle(student_id, payload.course_ids, **meta))


@router.post("/{student_id}/courses/{course_id}", response_model=EnrollmentRead, status_code=HTTPStatus.CREATED)
def enroll(
    student_id: UUID,
    course_id: UUID,
    response: Response,
    payload: Optional[EnrollmentMeta] = Body(None),
    mgr: AssociationManager = Depends(get_enrollments),
) -> EnrollmentRead:
    meta = payload.model_dump(exclude_none=True) if payload else {}
    row, created = mgr.get_or_link(student_id, course_id, **meta)
    if not created:
        response.status_code = HTTPStatus.OK
    return _row_to_read(mgr, row)


@router.patch("/{student_id}/courses/{course_id}", response_model=EnrollmentRead)
def update_enrollment(
    student_id: UUID,
    course_id: UUID,
    payload: EnrollmentMeta,
    mgr: AssociationManager = Depends(get_enrollments),
) -> EnrollmentRead:
    row = mgr.update_metadata(student_id, course_id, **payload.model_dump(exclude_none=True))
    return _row_to_read(mgr, row)


@router.delete("/{student_id}/courses/{course_id}", status_code=HTTPStatus.NO_CONTENT)
def unenroll(
    student_id: UUID,
    course_id: UUID,
    mgr: AssociationManager = Depends(get_enrollments),
) -> None:
    # idempotent: 204 whether or not the link existed
    mgr.unlink(student_id, course_id)
    return None
