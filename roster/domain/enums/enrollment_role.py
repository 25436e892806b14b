from __future__ import annotations
from enum import StrEnum


class EnrollmentRole(StrEnum):
    student = "student"
    auditor = "auditor"
    assistant = "assistant"
