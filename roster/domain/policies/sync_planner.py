# roster/domain/policies/sync_planner.py
from __future__ import annotations

from typing import Hashable, Iterable

from roster.domain.dataclasses.sync import SyncPlan


def plan_sync(
    current: Iterable[Hashable],
    target: Iterable[Hashable],
    *,
    detaching: bool = True,
) -> SyncPlan:
    """
    to_add    = target - current
    to_remove = current - target   (empty when detaching=False)

    Nothing in `current & target` is touched, so the plan is the minimal
    number of link/unlink operations.
    """
    cur = frozenset(current)
    tgt = frozenset(target)

    to_add = tgt - cur
    to_remove = (cur - tgt) if detaching else frozenset()
    return SyncPlan(to_add=to_add, to_remove=to_remove, unchanged=cur - to_remove)


def plan_toggle(current: Iterable[Hashable], ids: Iterable[Hashable]) -> SyncPlan:
    """Flip membership of every id in `ids`; leave everything else alone."""
    cur = frozenset(current)
    flip = frozenset(ids)

    to_remove = cur & flip
    to_add = flip - cur
    return SyncPlan(to_add=to_add, to_remove=to_remove, unchanged=cur - to_remove)
