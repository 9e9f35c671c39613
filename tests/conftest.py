"""Root conftest for all tests.

Shared builders for session metrics and wearable snapshots, plus a fixed
analysis clock so assessments are reproducible.
"""

from datetime import datetime, timedelta, timezone

import pytest

from periodization.core.clock import fixed_clock, sequential_ids
from periodization.engine import AdaptiveTrainingEngine
from periodization.history.store import InMemoryMetricsHistory
from periodization.schemas.metrics import ExercisePerformance, HeartRateSnapshot, SessionMetrics
from periodization.schemas.overload import RecoveryReading, SleepReading, WearableSnapshot

NOW = datetime(2024, 3, 8, 12, 0, tzinfo=timezone.utc)


def make_exercise(
    name: str = "Back Squat",
    weight: float = 100.0,
    planned_weight: float | None = None,
    planned_sets: int = 4,
    completed_sets: int = 4,
    reps: int = 8,
    rpe: float = 7.5,
    rir: float = 2.0,
    form_quality: float = 8.0,
) -> ExercisePerformance:
    """Build an exercise record; every completed set gets ``reps`` reps."""
    return ExercisePerformance(
        exercise_name=name,
        planned_weight=weight if planned_weight is None else planned_weight,
        actual_weight=weight,
        planned_sets=planned_sets,
        completed_sets=completed_sets,
        planned_reps=reps,
        actual_reps=tuple([reps] * completed_sets),
        rest_seconds=tuple([120] * completed_sets),
        rpe=rpe,
        rir=rir,
        form_quality=form_quality,
    )


def make_session(
    session_id: str = "s1",
    days_ago: float = 1.0,
    rpe: float = 7.0,
    rir: float = 2.0,
    adherence: float = 90.0,
    sleep: float = 7.0,
    stress: float = 4.0,
    soreness: float = 3.0,
    motivation: float = 7.0,
    hrv: float = 50.0,
    exercises: list[ExercisePerformance] | None = None,
) -> SessionMetrics:
    """Build a session dated ``days_ago`` days before NOW."""
    return SessionMetrics(
        session_id=session_id,
        date=NOW - timedelta(days=days_ago),
        rpe=rpe,
        rir=rir,
        adherence=adherence,
        sleep_quality=sleep,
        stress_level=stress,
        muscle_soreness=soreness,
        motivation=motivation,
        heart_rate=HeartRateSnapshot(avg_hr=135, max_hr=175, hrv=hrv, recovery_hr=110),
        exercises=tuple(exercises if exercises is not None else [make_exercise()]),
    )


def make_wearable(recovery_score: float = 80.0, hrv: float = 60.0, sleep_quality: float = 85.0) -> WearableSnapshot:
    return WearableSnapshot(
        recovery=RecoveryReading(hrv=hrv, recovery_score=recovery_score),
        sleep=SleepReading(quality=sleep_quality),
    )


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def engine(clock):
    """Engine with a fresh in-memory history, a fixed clock and sequential ids."""
    return AdaptiveTrainingEngine(
        repository=InMemoryMetricsHistory(),
        clock=clock,
        id_generator=sequential_ids(),
    )
