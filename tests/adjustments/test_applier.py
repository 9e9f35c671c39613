"""Tests for the plan adjustment applier.

Tests cover:
- Append-only log across repeated calls
- Revision bump and optimistic conflict detection
- Empty batches leave the plan untouched
- Concurrent appends to one plan
"""

import threading

import pytest
from pydantic import ValidationError

from periodization.adjustments.applier import PlanAdjustmentApplier
from periodization.adjustments.generator import generate_global_adjustments
from periodization.errors import ConcurrentMutationConflictError
from periodization.schemas.assessment import AdjustmentType, TrainingAdjustment
from periodization.schemas.plan import WorkoutPlan
from tests.conftest import NOW


def _weight_adjustment(new_value: float = 105.0) -> TrainingAdjustment:
    return TrainingAdjustment(
        exercise_name="Back Squat",
        adjustment_type=AdjustmentType.WEIGHT,
        previous_value=100.0,
        new_value=new_value,
        adjustment_percentage=5.0,
        reason="test",
        confidence=0.88,
        periodization_phase="progression",
    )


@pytest.fixture
def applier(clock):
    return PlanAdjustmentApplier(clock=clock)


def test_apply_appends_timestamped_entries(applier):
    plan = WorkoutPlan(plan_id="p1")

    applier.apply(plan, [_weight_adjustment(), *generate_global_adjustments(50)])

    assert plan.adjustment_count == 2
    assert len(plan.adjustments) == 2
    assert all(entry.applied_at == NOW for entry in plan.adjustments)
    assert plan.last_adjusted == NOW
    assert plan.revision == 1


def test_repeated_applies_never_rewrite_history(applier):
    plan = WorkoutPlan(plan_id="p1")
    batches = 3
    per_batch = 2

    snapshots = []
    for i in range(batches):
        applier.apply(plan, [_weight_adjustment(100 + i), _weight_adjustment(200 + i)])
        snapshots.append([entry.model_dump() for entry in plan.adjustments])

    assert plan.adjustment_count == batches * per_batch
    assert len(plan.adjustments) == batches * per_batch
    assert plan.revision == batches
    for earlier in snapshots:
        current = [entry.model_dump() for entry in plan.adjustments[: len(earlier)]]
        assert current == earlier


def test_applied_entries_are_frozen(applier):
    plan = WorkoutPlan(plan_id="p1")
    applier.apply(plan, [_weight_adjustment()])

    with pytest.raises(ValidationError):
        plan.adjustments[0].new_value = 1


def test_empty_batch_is_a_noop(applier):
    plan = WorkoutPlan(plan_id="p1")

    result = applier.apply(plan, [])

    assert result is plan
    assert plan.adjustment_count == 0
    assert plan.revision == 0
    assert plan.last_adjusted is None


def test_stale_revision_rejected(applier):
    plan = WorkoutPlan(plan_id="p1")
    applier.apply(plan, [_weight_adjustment()], expected_revision=0)

    with pytest.raises(ConcurrentMutationConflictError) as exc_info:
        applier.apply(plan, [_weight_adjustment()], expected_revision=0)

    assert exc_info.value.actual_revision == 1
    assert plan.adjustment_count == 1


def test_extra_plan_fields_are_preserved(applier):
    plan = WorkoutPlan(plan_id="p1", name="Strength block", weeks=8)

    applier.apply(plan, [_weight_adjustment()])

    assert plan.name == "Strength block"
    assert plan.weeks == 8


def test_concurrent_applies_are_serialized(applier):
    plan = WorkoutPlan(plan_id="p1")
    workers = 8

    threads = [threading.Thread(target=applier.apply, args=(plan, [_weight_adjustment()])) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert plan.adjustment_count == workers
    assert len(plan.adjustments) == workers
    assert plan.revision == workers


def test_accepts_assessment_tuple(applier):
    plan = WorkoutPlan(plan_id="p1")

    applier.apply(plan, (_weight_adjustment(), _weight_adjustment(110.0)))

    assert [entry.new_value for entry in plan.adjustments] == [105.0, 110.0]


def test_plan_locks_released_after_apply(applier):
    plans = [WorkoutPlan(plan_id=f"p{i}") for i in range(50)]

    for plan in plans:
        applier.apply(plan, [_weight_adjustment()])

    assert applier._plan_locks == {}


def test_plan_lock_released_after_conflict(applier):
    plan = WorkoutPlan(plan_id="p1")
    applier.apply(plan, [_weight_adjustment()])

    with pytest.raises(ConcurrentMutationConflictError):
        applier.apply(plan, [_weight_adjustment()], expected_revision=0)

    assert applier._plan_locks == {}


def test_plan_locks_released_after_concurrent_applies(applier):
    plans = [WorkoutPlan(plan_id=f"p{i % 3}") for i in range(3)]
    workers_per_plan = 6

    threads = [
        threading.Thread(target=applier.apply, args=(plan, [_weight_adjustment()]))
        for plan in plans
        for _ in range(workers_per_plan)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert [plan.revision for plan in plans] == [workers_per_plan] * len(plans)
    assert applier._plan_locks == {}
