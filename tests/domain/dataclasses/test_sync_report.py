from __future__ import annotations

from uuid import uuid4

import pytest

from roster.domain.dataclasses.reports import SyncReport


def test_report_timing_and_flags():
    r = SyncReport(left_id=uuid4(), to_add=frozenset({1}), unchanged=frozenset({2}))
    r.start()
    r.stop()
    assert r.started_at is not None and r.finished_at >= r.started_at
    assert r.changed
    assert r.final_ids == {1, 2}
    assert r.initial_ids == {2}
    assert SyncReport().changed is False


def test_merge_gives_net_effect():
    lid = uuid4()
    # {1, 2} -> {2, 3}
    first = SyncReport(left_id=lid, to_add=frozenset({3}), to_remove=frozenset({1}), unchanged=frozenset({2}))
    # {2, 3} -> {1, 3}
    second = SyncReport(left_id=lid, to_add=frozenset({1}), to_remove=frozenset({2}), unchanged=frozenset({3}))

    merged = first.merge(second)
    assert merged.to_add == {3}
    assert merged.to_remove == {2}
    assert merged.unchanged == {1}


def test_merge_rejects_other_entity():
    with pytest.raises(ValueError):
        SyncReport(left_id=uuid4()).merge(SyncReport(left_id=uuid4()))


def test_as_dict():
    r = SyncReport(to_add=frozenset({"a"}))
    r.add_error("a", "boom")
    d = r.as_dict()
    assert d["to_add"] == frozenset({"a"})
    assert d["error_details"] == [("a", "boom")]
