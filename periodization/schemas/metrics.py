"""Session telemetry schema.

A SessionMetrics record is immutable once recorded and owned by the history
store. Range checks live in ``periodization.schemas.validation`` so that bad
values surface as InvalidMetricRangeError at ingestion instead of a
construction-time ValidationError.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from periodization.core.clock import as_utc


class HeartRateSnapshot(BaseModel):
    """Cardiovascular readings for one session."""

    model_config = ConfigDict(frozen=True)

    avg_hr: float = Field(description="Average heart rate (bpm)")
    max_hr: float = Field(description="Maximum heart rate (bpm)")
    hrv: float = Field(description="Heart-rate variability (ms)")
    recovery_hr: float = Field(description="Heart rate one minute after the session (bpm)")


class ExercisePerformance(BaseModel):
    """Planned vs. performed work for one exercise inside one session."""

    model_config = ConfigDict(frozen=True)

    exercise_name: str = Field(min_length=1)
    planned_weight: float
    actual_weight: float
    planned_sets: int
    completed_sets: int
    planned_reps: int | str = Field(description="Rep target, e.g. 8 or '8-12'")
    actual_reps: tuple[int, ...] = Field(default_factory=tuple, description="Reps achieved per set")
    rest_seconds: tuple[int, ...] = Field(default_factory=tuple, description="Rest taken after each set")
    rpe: float = Field(description="Rate of perceived exertion (1-10)")
    rir: float = Field(description="Reps in reserve (0-5)")
    form_quality: float = Field(description="Technique rating (1-10)")
    notes: str | None = None

    @property
    def volume(self) -> float:
        """Load x total reps performed."""
        return self.actual_weight * sum(self.actual_reps)

    @property
    def set_load(self) -> float:
        """Load x completed sets, the tonnage proxy used for overload detection."""
        return self.actual_weight * self.completed_sets

    @property
    def completion_ratio(self) -> float:
        """Completed sets over planned sets."""
        if self.planned_sets <= 0:
            return 0.0
        return self.completed_sets / self.planned_sets


class SessionMetrics(BaseModel):
    """Telemetry for one completed training session."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(min_length=1)
    date: datetime
    rpe: float = Field(description="Session RPE (1-10)")
    rir: float = Field(description="Session reps in reserve (0-5)")
    adherence: float = Field(description="Share of the planned session completed (0-100)")
    sleep_quality: float = Field(description="Self-reported sleep quality (1-10)")
    stress_level: float = Field(description="Self-reported stress (1-10)")
    muscle_soreness: float = Field(description="1 = no soreness, 10 = extreme")
    motivation: float = Field(description="Self-reported motivation (1-10)")
    heart_rate: HeartRateSnapshot
    exercises: tuple[ExercisePerformance, ...] = Field(default_factory=tuple)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        """Store all session dates in UTC; naive dates are taken as UTC."""
        return as_utc(value)

    @property
    def volume(self) -> float:
        """Sum of exercise volumes for the session."""
        return sum(exercise.volume for exercise in self.exercises)

    @property
    def mean_load(self) -> float:
        """Average actual load across the session's exercises (0.0 when none)."""
        if not self.exercises:
            return 0.0
        return sum(exercise.actual_weight for exercise in self.exercises) / len(self.exercises)


class MetricBaselines(BaseModel):
    """Slow-moving per-user baselines (exponential moving averages)."""

    model_config = ConfigDict(frozen=True)

    rpe: float = 7.0
    rir: float = 2.0
    adherence: float = 85.0
    sleep: float = 7.0
    hrv: float = 45.0
    sessions_seen: int = 0

    def updated(self, metrics: SessionMetrics, weight: float) -> "MetricBaselines":
        """Return baselines moved ``weight`` of the way toward this session."""

        def _ema(current: float, value: float) -> float:
            return current * (1 - weight) + value * weight

        return MetricBaselines(
            rpe=_ema(self.rpe, metrics.rpe),
            rir=_ema(self.rir, metrics.rir),
            adherence=_ema(self.adherence, metrics.adherence),
            sleep=_ema(self.sleep, metrics.sleep_quality),
            hrv=_ema(self.hrv, metrics.heart_rate.hrv),
            sessions_seen=self.sessions_seen + 1,
        )
