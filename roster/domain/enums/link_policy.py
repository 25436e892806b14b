from __future__ import annotations
from enum import StrEnum


class LinkPolicy(StrEnum):
    """What `link` does when the pair is already associated."""
    update = "update"   # overwrite provided metadata on the existing record
    keep = "keep"       # leave the existing record untouched
    reject = "reject"   # raise ConflictError
