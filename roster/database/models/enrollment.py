# roster/database/models/enrollment.py
from __future__ import annotations

from typing import Optional, TYPE_CHECKING
from uuid import UUID as UUID_t

from sqlalchemy import ForeignKey, Text, UniqueConstraint, Index, Enum as SAEnum, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.database.core.main import Base
from roster.database.core.service_object import Timestamped
from roster.domain.enums import EnrollmentRole

if TYPE_CHECKING:
    from .catalog import Student, Course


class Enrollment(Timestamped, Base):
    """
    Association record for Student <-> Course (M:M) with its own metadata.
    date_created is when the link was formed.
    """
    __tablename__ = "enrollment"
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
        Index("ix_enrollment_course_id", "course_id"),
    )

    student_id: Mapped[UUID_t] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("student.id", ondelete="CASCADE"),
        primary_key=True,
    )
    course_id: Mapped[UUID_t] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("course.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[EnrollmentRole] = mapped_column(
        SAEnum(EnrollmentRole, name="enrollment_role"),
        nullable=False,
        default=EnrollmentRole.student,
        server_default=text("'student'"),
    )
    note: Mapped[Optional[str]] = mapped_column(Text)

    student: Mapped["Student"] = relationship("Student", back_populates="enrollments", viewonly=True)
    course: Mapped["Course"] = relationship("Course", back_populates="enrollments", viewonly=True)

    def __repr__(self) -> str:
        return f"<Enrollment student={self.student_id} course={self.course_id} role={self.role}>"
