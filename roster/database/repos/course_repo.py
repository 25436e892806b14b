from __future__ import annotations
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from roster.common.logging import get_logger
from roster.common.naming.normalize import slugify
from roster.database.models.catalog import Course as DBCourse
from roster.database.models.enrollment import Enrollment as DBEnrollment
from roster.database.repos._mapping import to_domain_course
from roster.database.repos.association_repo import AssociationManager
from roster.domain.entities.course import Course as DomainCourse
from roster.domain.enums import DeletePolicy, Side
from roster.domain.errors import ConflictError, NotFoundError

logger = get_logger(__name__)


def _norm_code(code: str) -> str:
    return code.strip().upper()


class SqlAlchemyCourseRepo:
    def __init__(self, session: Session, enrollments: Optional[AssociationManager] = None) -> None:
        self.db = session
        self.enrollments = enrollments or AssociationManager(session)

    def get(self, course_id: UUID) -> Optional[DBCourse]:
        return self.db.get(DBCourse, course_id)

    def require(self, course_id: UUID) -> DBCourse:
        obj = self.get(course_id)
        if obj is None:
            raise NotFoundError("Course", course_id)
        return obj

    def get_domain(self, course_id: UUID) -> DomainCourse:
        return to_domain_course(self.require(course_id))

    def get_by_code(self, code: str) -> Optional[DBCourse]:
        stmt = select(DBCourse).where(DBCourse.code == _norm_code(code)).limit(1)
        return self.db.execute(stmt).scalars().first()

    def _ensure_code_free(self, code: str, *, exclude: UUID | None = None) -> None:
        other = self.get_by_code(code)
        if other is not None and other.id != exclude:
            raise ConflictError("Course", _norm_code(code), f"course code {_norm_code(code)} is already in use")

    def search(self, q: str, limit: int = 25) -> List[DBCourse]:
        q = (q or "").strip().lower()
        stmt = select(DBCourse)
        if q:
            stmt = stmt.where(
                or_(
                    func.lower(DBCourse.title).like(f"%{q}%"),
                    func.lower(DBCourse.code).like(f"%{q}%"),
                )
            )
        stmt = stmt.order_by(DBCourse.code.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, *, code: str, title: str, description: str | None = None) -> DBCourse:
        DomainCourse(code=code, title=title)
        self._ensure_code_free(code)
        obj = DBCourse(
            code=_norm_code(code),
            title=title.strip(),
            slug=slugify(title),
            description=description,
        )
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(
        self,
        course_id: UUID,
        *,
        code: str | None = None,
        title: str | None = None,
        description: str | None = None,
    ) -> DBCourse:
        obj = self.require(course_id)
        if title is not None and not title.strip():
            raise ValueError("title is required")
        if code is not None:
            if not code.strip():
                raise ValueError("code is required")
            self._ensure_code_free(code, exclude=obj.id)
            obj.code = _norm_code(code)
        if title is not None:
            obj.title = title.strip()
            obj.slug = slugify(title)
        if description is not None:
            obj.description = description
        self.db.flush()
        return obj

    def delete(self, course_id: UUID, *, policy: DeletePolicy | str | None = None) -> int:
        obj = self.require(course_id)
        removed = self.enrollments.prepare_delete(Side.right, course_id, policy)
        self.db.delete(obj)
        self.db.flush()
        logger.info("course %s deleted (%d enrollment(s) removed)", course_id, removed)
        return removed

    # -------- Course <- Student links --------

    def list_for_student(self, student_id: UUID) -> List[DBCourse]:
        stmt = (
            select(DBCourse)
            .join(DBEnrollment, DBEnrollment.course_id == DBCourse.id)
            .where(DBEnrollment.student_id == student_id)
            .order_by(DBCourse.code.asc())
        )
        return list(self.db.execute(stmt).scalars().all())
