from roster.domain.enums.delete_policy import DeletePolicy
from roster.domain.enums.enrollment_role import EnrollmentRole
from roster.domain.enums.link_policy import LinkPolicy
from roster.domain.enums.side import Side

__all__ = [
    "DeletePolicy",
    "EnrollmentRole",
    "LinkPolicy",
    "Side",
]
