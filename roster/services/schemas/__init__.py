from roster.services.schemas.students import (
    StudentRead,
    StudentCreate,
    StudentUpdate,
)
from roster.services.schemas.courses import (
    CourseRead,
    CourseCreate,
    CourseUpdate,
)
from roster.services.schemas.enrollments import (
    EnrollmentMeta,
    EnrollmentRead,
    EnrollmentSync,
    EnrollmentToggle,
    SyncReportRead,
)
__all__ = [
    "StudentRead",
    "StudentCreate",
    "StudentUpdate",
    "CourseRead",
    "CourseCreate",
    "CourseUpdate",
    "EnrollmentMeta",
    "EnrollmentRead",
    "EnrollmentSync",
    "EnrollmentToggle",
    "SyncReportRead",
]
