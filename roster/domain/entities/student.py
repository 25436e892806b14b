# roster/domain/entities/student.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Student:
    """
    Left-hand entity of the enrollment association.
    Email, when present, is unique across students.
    """
    id: Optional[UUID] = None
    full_name: str = ""          # required (non-empty)
    normalized_name: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None

    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    data_origin: Optional[str] = None

    def __post_init__(self):
        if not self.full_name or not self.full_name.strip():
            raise ValueError("full_name is required")
        if self.email is not None and "@" not in self.email:
            raise ValueError("email must contain '@'")
