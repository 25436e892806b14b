from __future__ import annotations

from roster.domain.policies.sync_planner import plan_sync, plan_toggle


def test_plan_sync_example_scenario():
    # A1 linked to {B101, B102}; target {B101, B103}
    plan = plan_sync({"B101", "B102"}, {"B101", "B103"})
    assert plan.to_remove == {"B102"}
    assert plan.to_add == {"B103"}
    assert plan.unchanged == {"B101"}
    assert plan.operations == 2


def test_plan_sync_reaches_target_from_any_state():
    cases = [
        (set(), {1, 2, 3}),
        ({1, 2, 3}, set()),
        ({1, 2}, {1, 2}),
        ({1, 2, 3}, {3, 4, 5}),
    ]
    for current, target in cases:
        plan = plan_sync(current, target)
        final = (set(current) - plan.to_remove) | plan.to_add
        assert final == target
        assert plan.unchanged | plan.to_add == target


def test_plan_sync_is_minimal():
    plan = plan_sync({1, 2, 3}, {2, 3, 4})
    # nothing in the intersection is touched
    assert not (plan.to_add & {2, 3})
    assert not (plan.to_remove & {2, 3})
    assert plan.operations == 2


def test_plan_sync_without_detaching_only_adds():
    plan = plan_sync({1, 2}, {2, 3}, detaching=False)
    assert plan.to_add == {3}
    assert plan.to_remove == frozenset()
    assert plan.unchanged == {1, 2}


def test_plan_sync_noop():
    plan = plan_sync({"x"}, ["x", "x"])
    assert plan.is_noop


def test_plan_toggle():
    plan = plan_toggle({1, 2, 3}, [3, 4])
    assert plan.to_remove == {3}
    assert plan.to_add == {4}
    assert plan.unchanged == {1, 2}
