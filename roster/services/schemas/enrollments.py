# roster/services/schemas/enrollments.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from roster.domain.enums import EnrollmentRole


class EnrollmentMeta(BaseModel):
    """Metadata carried by the link itself. Omitted fields are left as they are."""
    role: Optional[EnrollmentRole] = None
    note: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = None


class EnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: UUID
    course_id: UUID
    role: EnrollmentRole
    note: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = None
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class EnrollmentSync(EnrollmentMeta):
    """Desired course set for a student. Metadata applies to newly added links."""
    course_ids: List[UUID] = Field(default_factory=list)
    detaching: bool = True


class EnrollmentToggle(EnrollmentMeta):
    course_ids: List[UUID] = Field(..., min_length=1)


class SyncReportRead(BaseModel):
    student_id: UUID
    to_add: List[UUID]
    to_remove: List[UUID]
    unchanged: List[UUID]
    changed: bool
