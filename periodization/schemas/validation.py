"""Session metrics range validation.

Called by the engine before anything is stored, and by the CLI on overload
fixtures that never pass through the history. Values are never clamped:
an out-of-range RPE would otherwise leak into the baselines.
"""

import math

from periodization.errors import InvalidMetricRangeError
from periodization.schemas.metrics import ExercisePerformance, SessionMetrics

INVALID_SESSION_METRICS = "INVALID_SESSION_METRICS"

RPE_RANGE = (1.0, 10.0)
RIR_RANGE = (0.0, 5.0)
SCALE_RANGE = (1.0, 10.0)
ADHERENCE_RANGE = (0.0, 100.0)


def _check_range(errors: list[str], field: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if math.isnan(value) or value < low or value > high:
        errors.append(f"{field}={value} outside [{low:g}, {high:g}]")


def _check_non_negative(errors: list[str], field: str, value: float) -> None:
    if math.isnan(value) or value < 0:
        errors.append(f"{field}={value} must be >= 0")


def _validate_exercise(errors: list[str], index: int, exercise: ExercisePerformance) -> None:
    prefix = f"exercises[{index}]({exercise.exercise_name})"
    _check_range(errors, f"{prefix}.rpe", exercise.rpe, RPE_RANGE)
    _check_range(errors, f"{prefix}.rir", exercise.rir, RIR_RANGE)
    _check_range(errors, f"{prefix}.form_quality", exercise.form_quality, SCALE_RANGE)
    _check_non_negative(errors, f"{prefix}.planned_weight", exercise.planned_weight)
    _check_non_negative(errors, f"{prefix}.actual_weight", exercise.actual_weight)

    if exercise.planned_sets < 1:
        errors.append(f"{prefix}.planned_sets={exercise.planned_sets} must be >= 1")
    if exercise.completed_sets < 0:
        errors.append(f"{prefix}.completed_sets={exercise.completed_sets} must be >= 0")
    if any(reps < 0 for reps in exercise.actual_reps):
        errors.append(f"{prefix}.actual_reps contains negative values")
    if any(rest < 0 for rest in exercise.rest_seconds):
        errors.append(f"{prefix}.rest_seconds contains negative values")


def validate_session_metrics(metrics: SessionMetrics) -> None:
    """Validate every documented domain on a session and its exercises.

    Args:
        metrics: Session to validate

    Raises:
        InvalidMetricRangeError: If any field is out of range; ``details`` lists all of them
    """
    errors: list[str] = []

    # ---- Session self-reports ----
    _check_range(errors, "rpe", metrics.rpe, RPE_RANGE)
    _check_range(errors, "rir", metrics.rir, RIR_RANGE)
    _check_range(errors, "adherence", metrics.adherence, ADHERENCE_RANGE)
    _check_range(errors, "sleep_quality", metrics.sleep_quality, SCALE_RANGE)
    _check_range(errors, "stress_level", metrics.stress_level, SCALE_RANGE)
    _check_range(errors, "muscle_soreness", metrics.muscle_soreness, SCALE_RANGE)
    _check_range(errors, "motivation", metrics.motivation, SCALE_RANGE)

    # ---- Heart rate ----
    hr = metrics.heart_rate
    _check_non_negative(errors, "heart_rate.avg_hr", hr.avg_hr)
    _check_non_negative(errors, "heart_rate.max_hr", hr.max_hr)
    _check_non_negative(errors, "heart_rate.hrv", hr.hrv)
    _check_non_negative(errors, "heart_rate.recovery_hr", hr.recovery_hr)

    # ---- Exercises ----
    for index, exercise in enumerate(metrics.exercises):
        _validate_exercise(errors, index, exercise)

    if errors:
        raise InvalidMetricRangeError(INVALID_SESSION_METRICS, errors)


def validate_exercise_history(records: list[ExercisePerformance]) -> None:
    """Validate standalone exercise records with the same rules as session exercises.

    Raises:
        InvalidMetricRangeError: If any record is out of range; ``details`` lists all of them
    """
    errors: list[str] = []
    for index, exercise in enumerate(records):
        _validate_exercise(errors, index, exercise)

    if errors:
        raise InvalidMetricRangeError(INVALID_SESSION_METRICS, errors)
