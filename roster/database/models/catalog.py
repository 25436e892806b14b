# roster/database/models/catalog.py
from __future__ import annotations

from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.database.core.main import Base
from roster.database.core.service_object import ServiceObject

if TYPE_CHECKING:
    from .enrollment import Enrollment


def _t(name: str):
    """Return Table object from metadata, honoring schema on Base.metadata."""
    schema = Base.metadata.schema
    key = f"{schema}.{name}" if schema else name
    return Base.metadata.tables[key]


# =======================
# Students (left side)
# =======================
class Student(ServiceObject, Base):
    __tablename__ = "student"
    __table_args__ = (
        UniqueConstraint("email", name="uq_student_email"),
        Index("ix_student_normalized_name", "normalized_name"),
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    normalized_name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(320))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Read-only view through the association table; writes go through the
    # association manager so policies and checks are applied.
    courses: Mapped[List["Course"]] = relationship(
        "Course",
        secondary=lambda: _t("enrollment"),
        back_populates="students",
        viewonly=True,
    )
    enrollments: Mapped[List["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="student",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Student id={self.id} name={self.full_name!r}>"


# =======================
# Courses (right side)
# =======================
class Course(ServiceObject, Base):
    __tablename__ = "course"
    __table_args__ = (
        UniqueConstraint("code", name="uq_course_code"),
        Index("ix_course_slug", "slug"),
    )

    code: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[Optional[str]] = mapped_column(Text)

    students: Mapped[List["Student"]] = relationship(
        "Student",
        secondary=lambda: _t("enrollment"),
        back_populates="courses",
        viewonly=True,
    )
    enrollments: Mapped[List["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="course",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Course id={self.id} code={self.code!r}>"
