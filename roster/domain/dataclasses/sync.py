# roster/domain/dataclasses/sync.py
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Hashable


@dataclass(frozen=True)
class SyncPlan:
    """
    Minimal set of changes that takes `current` to the desired state.
    `unchanged` holds the links that survive untouched.
    """
    to_add: FrozenSet[Hashable] = frozenset()
    to_remove: FrozenSet[Hashable] = frozenset()
    unchanged: FrozenSet[Hashable] = frozenset()

    @property
    def is_noop(self) -> bool:
        return not self.to_add and not self.to_remove

    @property
    def operations(self) -> int:
        return len(self.to_add) + len(self.to_remove)
