"""Data model for the periodization engine."""

from periodization.schemas.assessment import (
    GLOBAL_EXERCISE,
    AdjustmentType,
    AppliedAdjustment,
    PeriodizationAction,
    PeriodizationPhase,
    TrainingAdjustment,
    WeeklyAssessment,
)
from periodization.schemas.metrics import ExercisePerformance, HeartRateSnapshot, MetricBaselines, SessionMetrics
from periodization.schemas.overload import (
    AdaptationStatus,
    CorrectiveExercise,
    CorrectiveProtocol,
    ExerciseDosage,
    LoadManagementStrategy,
    LoadPhase,
    OverloadReport,
    OverloadRisk,
    ProtocolPriority,
    ProtocolType,
    RecoveryReading,
    RiskLevel,
    SleepReading,
    WearableSnapshot,
)
from periodization.schemas.plan import UserData, WorkoutPlan

__all__ = [
    "GLOBAL_EXERCISE",
    "AdaptationStatus",
    "AdjustmentType",
    "AppliedAdjustment",
    "CorrectiveExercise",
    "CorrectiveProtocol",
    "ExerciseDosage",
    "ExercisePerformance",
    "HeartRateSnapshot",
    "LoadManagementStrategy",
    "LoadPhase",
    "MetricBaselines",
    "OverloadReport",
    "OverloadRisk",
    "PeriodizationAction",
    "PeriodizationPhase",
    "ProtocolPriority",
    "ProtocolType",
    "RecoveryReading",
    "RiskLevel",
    "SessionMetrics",
    "SleepReading",
    "TrainingAdjustment",
    "UserData",
    "WearableSnapshot",
    "WeeklyAssessment",
    "WorkoutPlan",
]
