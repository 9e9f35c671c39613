"""Weekly assessment and training adjustment schemas.

Adjustments are recommendations. They only change a plan when a caller hands
them to the PlanAdjustmentApplier.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

GLOBAL_EXERCISE = "GLOBAL"


class AdjustmentType(StrEnum):
    """What a training adjustment changes."""

    WEIGHT = "weight"
    SETS = "sets"
    REPS = "reps"
    REST = "rest"
    INTENSITY = "intensity"
    VOLUME = "volume"


class PeriodizationPhase(StrEnum):
    """Closed set of training-cycle phases."""

    DELOAD = "deload"
    ADAPTATION = "adaptation"
    RECOVERY = "recovery"
    VOLUME = "volume"
    INTENSIFICATION = "intensification"
    MAINTENANCE = "maintenance"


class TrainingAdjustment(BaseModel):
    """A single recommended change to the plan."""

    model_config = ConfigDict(frozen=True)

    exercise_name: str = Field(description=f"Exercise the change targets, or '{GLOBAL_EXERCISE}'")
    adjustment_type: AdjustmentType
    previous_value: int | float | str
    new_value: int | float | str
    adjustment_percentage: float = Field(description="Relative change in percent (negative = reduction)")
    reason: str
    confidence: float = Field(ge=0.0, le=1.0)
    periodization_phase: str = Field(description="Phase tag, e.g. 'progression', 'deload', 'recovery'")

    @property
    def is_global(self) -> bool:
        return self.exercise_name == GLOBAL_EXERCISE


class AppliedAdjustment(TrainingAdjustment):
    """An adjustment as stored in a plan's append-only log."""

    applied_at: datetime


class PeriodizationAction(BaseModel):
    """Phase recommendation for the next block."""

    model_config = ConfigDict(frozen=True)

    current_phase: str
    recommended_phase: PeriodizationPhase
    transition_reason: str
    transition_timeline: str
    expected_outcomes: tuple[str, ...]


class WeeklyAssessment(BaseModel):
    """Result of one weekly analysis run. Superseded, never mutated."""

    model_config = ConfigDict(frozen=True)

    assessment_id: str
    generated_at: datetime
    user_id: str
    week_number: int = Field(ge=0)
    overall_readiness: int = Field(ge=0, le=100)
    fatigue_index: float = Field(ge=0.0, le=100.0)
    performance_index: float = Field(ge=0.0, le=100.0)
    adherence_rate: float = Field(ge=0.0, le=100.0)
    progress_rate: float = Field(ge=0.0, le=100.0)
    session_count: int = Field(ge=0, description="Sessions in the analysis window")
    recommended_adjustments: tuple[TrainingAdjustment, ...] = Field(default_factory=tuple)
    periodization_recommendation: PeriodizationAction
    deload_recommended: bool
    intensification_ready: bool
