# roster/domain/errors.py
from __future__ import annotations

from typing import Any


class RosterError(Exception):
    """Base for errors raised by the association layer."""


class NotFoundError(RosterError):
    """An operation referenced an entity (or link) that does not exist."""

    def __init__(self, kind: str, ident: Any, message: str | None = None) -> None:
        self.kind = kind
        self.ident = ident
        super().__init__(message or f"{kind} {ident} not found")


class ConflictError(RosterError):
    """
    A record with the same natural key already exists: a link for the pair
    under the `reject` link policy, or a duplicate course code / student email.
    """

    def __init__(self, kind: str, ident: Any, message: str | None = None) -> None:
        self.kind = kind
        self.ident = ident
        super().__init__(message or f"{kind} {ident} already exists")


class IntegrityError(RosterError):
    """
    Deleting an entity was refused because associations still reference it
    and the delete policy is `reject`.
    (Not to be confused with sqlalchemy.exc.IntegrityError.)
    """

    def __init__(self, kind: str, ident: Any, active: int) -> None:
        self.kind = kind
        self.ident = ident
        self.active = active
        super().__init__(f"{kind} {ident} still has {active} active association(s)")
