from __future__ import annotations
from enum import StrEnum


class DeletePolicy(StrEnum):
    """What happens to associations when one of their entities is deleted."""
    cascade = "cascade"
    reject = "reject"
