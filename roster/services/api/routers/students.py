# roster/services/api/routers/students.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Path

from roster.common.settings import get_settings
from roster.database.repos.student_repo import SqlAlchemyStudentRepo
from roster.domain.enums import DeletePolicy
from roster.services.api.deps import get_student_repo
from roster.services.schemas.students import StudentCreate, StudentUpdate, StudentRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/students", tags=["students"])


@router.get("", response_model=List[StudentRead])
def search_students(
    q: str = Query("", description="Case-insensitive substring of name or email"),
    limit: int = Query(25, ge=1, le=200),
    repo: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> List[StudentRead]:
    return [StudentRead.model_validate(s) for s in repo.search(q, limit=limit)]


@router.post("", response_model=StudentRead, status_code=HTTPStatus.CREATED)
def create_student(
    payload: StudentCreate,
    repo: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> StudentRead:
    obj = repo.create(full_name=payload.full_name, email=payload.email, notes=payload.notes)
    return StudentRead.model_validate(obj)


@router.get("/{student_id}", response_model=StudentRead)
def get_student(
    student_id: UUID = Path(...),
    repo: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> StudentRead:
    return StudentRead.model_validate(repo.require(student_id))


@router.patch("/{student_id}", response_model=StudentRead)
def update_student(
    student_id: UUID,
    payload: StudentUpdate,
    repo: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> StudentRead:
    obj = repo.update(
        student_id,
        full_name=payload.full_name,
        email=payload.email,
        notes=payload.notes,
    )
    return StudentRead.model_validate(obj)


@router.delete("/{student_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_student(
    student_id: UUID,
    policy: Optional[DeletePolicy] = Query(None, description="cascade|reject; defaults to settings"),
    repo: SqlAlchemyStudentRepo = Depends(get_student_repo),
) -> None:
    repo.delete(student_id, policy=policy)
    return None
