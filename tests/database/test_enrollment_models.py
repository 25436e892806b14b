# tests/database/test_enrollment_models.py
from __future__ import annotations

import pytest
from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from roster.database.models import Course, Enrollment, Student
from roster.domain.enums import EnrollmentRole


def _mk_student(session, name="Ada Lovelace", email=None):
    s = Student(full_name=name, normalized_name=name.lower(), email=email)
    session.add(s)
    session.flush()
    return s


def _mk_course(session, code="CS-101", title="Intro to Computing"):
    c = Course(code=code, title=title, slug=title.lower().replace(" ", "-"))
    session.add(c)
    session.flush()
    return c


def test_enrollment_defaults_and_view_relationships(db):
    s = _mk_student(db)
    c = _mk_course(db)

    db.add(Enrollment(student_id=s.id, course_id=c.id))
    db.flush()
    db.expire_all()

    row = db.execute(select(Enrollment)).scalars().one()
    assert row.role == EnrollmentRole.student
    assert row.date_created is not None

    student = db.get(Student, s.id)
    assert [x.code for x in student.courses] == ["CS-101"]
    assert [x.full_name for x in db.get(Course, c.id).students] == ["Ada Lovelace"]


def test_enrollment_unique_pair(db):
    s = _mk_student(db)
    c = _mk_course(db)
    db.execute(insert(Enrollment).values(student_id=s.id, course_id=c.id))

    # duplicate pair -> relies on DB constraint
    with pytest.raises(IntegrityError):
        db.execute(insert(Enrollment).values(student_id=s.id, course_id=c.id))


def test_enrollment_requires_existing_entities(db):
    s = _mk_student(db)
    c = _mk_course(db)
    db.execute(delete(Course).where(Course.id == c.id))

    with pytest.raises(IntegrityError):
        db.execute(insert(Enrollment).values(student_id=s.id, course_id=c.id))


def test_fk_cascade_is_the_backstop(db):
    s = _mk_student(db)
    c1 = _mk_course(db, "CS-101")
    c2 = _mk_course(db, "CS-102")
    db.execute(insert(Enrollment), [
        {"student_id": s.id, "course_id": c1.id},
        {"student_id": s.id, "course_id": c2.id},
    ])

    # bypass the ORM entirely: ON DELETE CASCADE removes the links
    db.execute(delete(Student).where(Student.id == s.id))
    assert db.execute(select(Enrollment)).scalars().all() == []


def test_student_email_unique(db):
    _mk_student(db, "A", email="same@example.org")
    with pytest.raises(IntegrityError):
        _mk_student(db, "B", email="same@example.org")
