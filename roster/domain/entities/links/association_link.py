# roster/domain/entities/links/association_link.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID


@dataclass(frozen=True)
class AssociationLink:
    """
    Join entity connecting one left record and one right record.
    (left_id, right_id) is unique; `metadata` holds the attributes of the
    relationship itself (for enrollments: role, note, meta_data).
    """
    left_id: UUID
    right_id: UUID
    metadata: Dict[str, Any] = field(default_factory=dict)
    linked_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def pair(self) -> tuple[UUID, UUID]:
        return self.left_id, self.right_id
