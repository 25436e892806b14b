from __future__ import annotations

from uuid import uuid4

import pytest

from roster.domain.entities.course import Course
from roster.domain.entities.links.association_link import AssociationLink
from roster.domain.entities.student import Student


def test_student_requires_name():
    with pytest.raises(ValueError):
        Student(full_name="   ")
    with pytest.raises(ValueError):
        Student(full_name="Ada", email="not-an-email")
    assert Student(full_name="Ada", email="ada@example.org").email == "ada@example.org"


def test_course_requires_code_and_title():
    with pytest.raises(ValueError):
        Course(code="", title="Algebra")
    with pytest.raises(ValueError):
        Course(code="MATH-1", title="")
    assert Course(code="MATH-1", title="Algebra").code == "MATH-1"


def test_association_link_is_frozen():
    a, b = uuid4(), uuid4()
    link = AssociationLink(left_id=a, right_id=b, metadata={"role": "student"})
    assert link.pair == (a, b)
    with pytest.raises(Exception):
        link.left_id = uuid4()  # type: ignore[misc]
