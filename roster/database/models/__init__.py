# roster/database/models/__init__.py

from roster.database.core.main import Base
from roster.database.models.catalog import (
    Student,
    Course,
)
from roster.database.models.enrollment import Enrollment

__all__ = [
    "Base",
    "Student",
    "Course",
    "Enrollment",
]
