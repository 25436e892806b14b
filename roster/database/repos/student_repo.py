from __future__ import annotations
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from roster.common.logging import get_logger
from roster.common.naming.normalize import normalize_name
from roster.database.models.catalog import Student as DBStudent
from roster.database.repos._mapping import to_domain_student
from roster.database.repos.association_repo import AssociationManager
from roster.domain.entities.student import Student as DomainStudent
from roster.domain.enums import DeletePolicy, Side
from roster.domain.errors import ConflictError, NotFoundError

logger = get_logger(__name__)


def _norm_email(email: str) -> str:
    return email.strip().lower()


class SqlAlchemyStudentRepo:
    def __init__(self, session: Session, enrollments: Optional[AssociationManager] = None) -> None:
        self.db = session
        self.enrollments = enrollments or AssociationManager(session)

    # -------- Students (CRUD) --------

    def get(self, student_id: UUID) -> Optional[DBStudent]:
        return self.db.get(DBStudent, student_id)

    def require(self, student_id: UUID) -> DBStudent:
        obj = self.get(student_id)
        if obj is None:
            raise NotFoundError("Student", student_id)
        return obj

    def get_domain(self, student_id: UUID) -> DomainStudent:
        return to_domain_student(self.require(student_id))

    def get_by_email(self, email: str) -> Optional[DBStudent]:
        stmt = select(DBStudent).where(DBStudent.email == _norm_email(email)).limit(1)
        return self.db.execute(stmt).scalars().first()

    def _ensure_email_free(self, email: str, *, exclude: UUID | None = None) -> None:
        other = self.get_by_email(email)
        if other is not None and other.id != exclude:
            raise ConflictError("Student", _norm_email(email), f"email {_norm_email(email)} is already in use")

    def search(self, q: str, limit: int = 25) -> List[DBStudent]:
        q = normalize_name(q)
        stmt = select(DBStudent)
        if q:
            stmt = stmt.where(
                or_(
                    func.lower(DBStudent.full_name).like(f"%{q}%"),
                    func.lower(DBStudent.email).like(f"%{q}%"),
                )
            )
        stmt = stmt.order_by(DBStudent.full_name.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        *,
        full_name: str,
        email: str | None = None,
        notes: str | None = None,
        normalized_name: str | None = None,
    ) -> DBStudent:
        # validate through the domain entity before touching the session
        DomainStudent(full_name=full_name, email=email)
        if email:
            self._ensure_email_free(email)
        obj = DBStudent(
            full_name=full_name.strip(),
            normalized_name=normalized_name or normalize_name(full_name),
            email=_norm_email(email) if email else None,
            notes=notes,
        )
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(
        self,
        student_id: UUID,
        *,
        full_name: str | None = None,
        email: str | None = None,
        notes: str | None = None,
    ) -> DBStudent:
        obj = self.require(student_id)
        if full_name is not None and not full_name.strip():
            raise ValueError("full_name is required")
        if email is not None:
            if "@" not in email:
                raise ValueError("email must contain '@'")
            self._ensure_email_free(email, exclude=obj.id)

        if full_name is not None:
            obj.full_name = full_name.strip()
            obj.normalized_name = normalize_name(full_name)
        if email is not None:
            obj.email = _norm_email(email)
        if notes is not None:
            obj.notes = notes
        self.db.flush()
        return obj

    def delete(self, student_id: UUID, *, policy: DeletePolicy | str | None = None) -> int:
        """Delete a student; returns how many enrollments the delete policy removed."""
        obj = self.require(student_id)
        removed = self.enrollments.prepare_delete(Side.left, student_id, policy)
        self.db.delete(obj)
        self.db.flush()
        logger.info("student %s deleted (%d enrollment(s) removed)", student_id, removed)
        return removed

    # -------- Student -> Course links --------

    def list_for_course(self, course_id: UUID) -> List[DBStudent]:
        ids = self.enrollments.left_ids_for(course_id)
        if not ids:
            return []
        stmt = select(DBStudent).where(DBStudent.id.in_(ids)).order_by(DBStudent.full_name.asc())
        return list(self.db.execute(stmt).scalars().all())
