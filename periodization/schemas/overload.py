"""Overload risk, corrective protocol and load management schemas."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(StrEnum):
    """Categorical overload risk, ordered low < moderate < high < critical."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MODERATE: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


class AdaptationStatus(StrEnum):
    ADAPTING = "adapting"
    PLATEAUED = "plateaued"
    OVERLOADED = "overloaded"
    RECOVERING = "recovering"


class ProtocolPriority(StrEnum):
    IMMEDIATE = "immediate"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProtocolType(StrEnum):
    MOBILITY = "mobility"
    STABILITY = "stability"
    STRENGTH = "strength"
    MOTOR_CONTROL = "motor_control"
    RECOVERY = "recovery"


class LoadPhase(StrEnum):
    DELOAD = "deload"
    ADAPTATION = "adaptation"
    PROGRESSION = "progression"
    MAINTENANCE = "maintenance"


class RecoveryReading(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hrv: float
    recovery_score: float = Field(alias="recoveryScore")


class SleepReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    quality: float


class WearableSnapshot(BaseModel):
    """Read-only snapshot supplied by the wearable integration."""

    model_config = ConfigDict(frozen=True)

    recovery: RecoveryReading
    sleep: SleepReading


class OverloadRisk(BaseModel):
    """Overload risk for one body region."""

    model_config = ConfigDict(frozen=True)

    body_part: str
    risk_level: RiskLevel
    risk_score: float = Field(ge=0.0, le=100.0)
    primary_cause: str
    secondary_causes: tuple[str, ...] = Field(default_factory=tuple)
    adaptation_status: AdaptationStatus
    time_to_injury_days: int = Field(ge=0, description="Coarse estimate, not a calibrated survival model")
    confidence: float = Field(ge=0.0, le=1.0)


class ExerciseDosage(BaseModel):
    model_config = ConfigDict(frozen=True)

    sets: int
    reps: int | str
    hold_seconds: int | None = None
    rest_seconds: int
    frequency: str


class CorrectiveExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: Literal["activation", "mobilization", "stabilization", "strengthening", "integration"]
    description: str
    purpose: str
    target_tissues: tuple[str, ...]
    dosage: ExerciseDosage
    equipment: str


class CorrectiveProtocol(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: ProtocolPriority
    protocol_type: ProtocolType
    target_structure: str
    exercises: tuple[CorrectiveExercise, ...]
    expected_timeline: str
    biomechanical_goals: tuple[str, ...]


class LoadManagementStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: LoadPhase
    duration_weeks: int = Field(ge=1)
    load_reduction_pct: float = Field(ge=0.0, le=100.0)
    recovery_enhancement: tuple[str, ...]
    monitoring_markers: tuple[str, ...]


class OverloadReport(BaseModel):
    """Combined output of an overload analysis."""

    model_config = ConfigDict(frozen=True)

    overload_risks: tuple[OverloadRisk, ...]
    corrective_protocols: tuple[CorrectiveProtocol, ...]
    load_management: LoadManagementStrategy
