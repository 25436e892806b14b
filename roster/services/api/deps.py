# roster/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from roster.database.core.main import new_session
from roster.database.repos.association_repo import AssociationManager
from roster.database.repos.course_repo import SqlAlchemyCourseRepo
from roster.database.repos.student_repo import SqlAlchemyStudentRepo


def get_db() -> Generator[Session, None, None]:
    db = new_session()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo/service using this session
    participates in the same transaction.

    Usage in routers:
      def endpoint(session: Session = Depends(transactional_session)):
          ...
    """
    # Session.begin() commits on normal exit and rolls back if an exception bubbles out.
    with db.begin():
        yield db


def get_enrollments(db: Session = Depends(transactional_session)) -> AssociationManager:
    return AssociationManager(db)


def get_student_repo(
    db: Session = Depends(transactional_session),
    enrollments: AssociationManager = Depends(get_enrollments),
) -> SqlAlchemyStudentRepo:
    return SqlAlchemyStudentRepo(db, enrollments)


def get_course_repo(
    db: Session = Depends(transactional_session),
    enrollments: AssociationManager = Depends(get_enrollments),
) -> SqlAlchemyCourseRepo:
    return SqlAlchemyCourseRepo(db, enrollments)
