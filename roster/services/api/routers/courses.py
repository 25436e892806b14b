# roster/services/api/routers/courses.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Path

from roster.common.settings import get_settings
from roster.database.repos.course_repo import SqlAlchemyCourseRepo
from roster.database.repos.student_repo import SqlAlchemyStudentRepo
from roster.domain.enums import DeletePolicy
from roster.services.api.deps import get_course_repo, get_student_repo
from roster.services.schemas.courses import CourseCreate, CourseUpdate, CourseRead
from roster.services.schemas.students import StudentRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/courses", tags=["courses"])


@router.get("", response_model=List[CourseRead])
def search_courses(
    q: str = Query("", description="Case-insensitive substring of code or title"),
    limit: int = Query(25, ge=1, le=200),
    repo: SqlAlchemyCourseRepo = Depends(get_course_repo),
) -> List[CourseRead]:
    return [CourseRead.model_validate(c) for c in repo.search(q, limit=limit)]


@router.post("", response_model=CourseRead, status_code=HTTPStatus.CREATED)
def create_course(
    payload: CourseCreate,
    repo: SqlAlchemyCourseRepo = Depends(get_course_repo),
) -> CourseRead:
    obj = repo.create(code=payload.code, title=payload.title, description=payload.description)
    return CourseRead.model_validate(obj)


@router.get("/{course_id}", response_model=CourseRead)
def get_course(
    course_id: UUID = Path(...),
    repo: SqlAlchemyCourseRepo = Depends(get_course_repo),
) -> CourseRead:
    return CourseRead.model_validate(repo.require(course_id))


@router.patch("/{course_id}", response_model=CourseRead)
def update_course(
    course_id: UUID,
    payload: CourseUpdate,
    repo: SqlAlchemyCourseRepo = Depends(get_course_repo),
) -> CourseRead:
    obj = repo.update(course_id, code=payload.code, title=payload.title, description=payload.description)
    return CourseRead.model_validate(obj)


@router.delete("/{course_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_course(
    course_id: UUID,
    policy: Optional[DeletePolicy] = Query(None, description="cascade|reject; defaults to settings"),
    repo: SqlAlchemyCourseRepo = Depends(get_course_repo),
) -> None:
    repo.delete(course_id, policy=policy)
    return None


@router.get("/{course_id}/students", response_model=List[StudentRead])
def list_course_students(
    course_id: UUID,
    courses: SqlAlchemyCourseRepo = Depends(get_course_repo),
    students: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> List[StudentRead]:
    courses.require(course_id)
    return [StudentRead.model_validate(s) for s in students.list_for_course(course_id)]
