# roster/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Tuple
from uuid import UUID


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject/id, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Synchronize / toggle report
# ---------------------------------------------------------------------------
@dataclass
class SyncReport(BaseReport):
    """What a synchronize (or toggle) actually applied for one left entity."""
    left_id: Optional[UUID] = None
    to_add: FrozenSet[UUID] = frozenset()
    to_remove: FrozenSet[UUID] = frozenset()
    unchanged: FrozenSet[UUID] = frozenset()

    @property
    def changed(self) -> bool:
        return bool(self.to_add or self.to_remove)

    @property
    def final_ids(self) -> FrozenSet[UUID]:
        return self.unchanged | self.to_add

    @property
    def initial_ids(self) -> FrozenSet[UUID]:
        return self.unchanged | self.to_remove

    def merge(self, other: "SyncReport") -> "SyncReport":
        """Fold a later pass on the same left entity into this one (net effect)."""
        if self.left_id is not None and other.left_id is not None and other.left_id != self.left_id:
            raise ValueError("cannot merge reports for different left entities")
        before = self.initial_ids
        after = other.final_ids
        self.to_add = frozenset(after - before)
        self.to_remove = frozenset(before - after)
        self.unchanged = frozenset(before & after)
        self.left_id = self.left_id or other.left_id
        self.error_details.extend(other.error_details)
        if self.started_at is None or (other.started_at and other.started_at < self.started_at):
            self.started_at = other.started_at
        if other.finished_at and (self.finished_at is None or other.finished_at > self.finished_at):
            self.finished_at = other.finished_at
        return self
