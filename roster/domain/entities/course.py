# roster/domain/entities/course.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Course:
    id: Optional[UUID] = None
    code: str = ""               # required, unique (e.g. "CS-101")
    title: str = ""              # required
    slug: Optional[str] = None
    description: Optional[str] = None

    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    data_origin: Optional[str] = None

    def __post_init__(self):
        if not self.code or not self.code.strip():
            raise ValueError("code is required")
        if not self.title or not self.title.strip():
            raise ValueError("title is required")
