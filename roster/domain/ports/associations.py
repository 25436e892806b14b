from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Protocol, Set
from uuid import UUID

from roster.domain.dataclasses.reports import SyncReport
from roster.domain.entities.links.association_link import AssociationLink


class AssociationPort(Protocol):
    def link(self, left_id: UUID, right_id: UUID, **metadata: Any) -> Any: ...

    def unlink(self, left_id: UUID, right_id: UUID) -> bool: ...

    def synchronize(
        self,
        left_id: UUID,
        target_ids: Iterable[UUID],
        *,
        detaching: bool = True,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> SyncReport: ...

    def toggle(self, left_id: UUID, ids: Iterable[UUID], **metadata: Any) -> SyncReport: ...

    def update_metadata(self, left_id: UUID, right_id: UUID, **metadata: Any) -> Any: ...

    def current_ids(self, left_id: UUID) -> Set[UUID]: ...

    def left_ids_for(self, right_id: UUID) -> Set[UUID]: ...

    def list_links(
        self,
        *,
        left_id: Optional[UUID] = None,
        right_id: Optional[UUID] = None,
    ) -> List[AssociationLink]: ...
