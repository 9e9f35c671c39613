"""Engine settings and tunable scoring policy.

The scoring weights and thresholds below are heuristics, not physiologically
validated constants. They live here so deployments can tune them through
environment variables (``PERIODIZATION_OVERLOAD__RISK_CONFIDENCE=0.7``) and
tests can pass explicit policies.
"""

from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from periodization.schemas.overload import LoadPhase


class TrendPolicy(BaseModel):
    """Weights for the performance trend score."""

    volume_weight: float = 0.4
    intensity_weight: float = 0.3
    rpe_weight: float = 5.0
    rir_weight: float = 5.0
    intensity_trend_cap: float = Field(default=20.0, gt=0)
    progress_rate_multiplier: float = 10.0
    improving_threshold: float = 60.0


class FatiguePolicy(BaseModel):
    """Weights for the fatigue index.

    HRV is weighted far below the subjective signals: those are reported every
    session while HRV may be sparse or device-dependent.
    """

    stress_weight: float = 8.0
    soreness_weight: float = 6.0
    sleep_weight: float = 6.0
    sleep_reference: float = 10.0
    hrv_weight: float = 0.8
    hrv_reference: float = 50.0


class ReadinessWeights(BaseModel):
    """Blend of the three analyzers into overall readiness."""

    performance: float = Field(default=0.35, ge=0.0, le=1.0)
    recovery: float = Field(default=0.40, ge=0.0, le=1.0)
    adherence: float = Field(default=0.25, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_sum(self) -> "ReadinessWeights":
        """Weights must sum to 1 so readiness stays on the 0-100 scale."""
        total = self.performance + self.recovery + self.adherence
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Readiness weights must sum to 1.0, got {total:.3f}")
        return self


class ScoringBand(BaseModel):
    """Two-step threshold: crossing ``severe`` scores more than crossing ``elevated``."""

    severe: float
    severe_points: int
    elevated: float
    elevated_points: int


class OverloadPolicy(BaseModel):
    """Thresholds and points for regional overload risk scoring."""

    rpe: ScoringBand = ScoringBand(severe=8.5, severe_points=25, elevated=7.5, elevated_points=15)
    rir: ScoringBand = ScoringBand(severe=1.0, severe_points=25, elevated=2.0, elevated_points=15)
    form_quality: ScoringBand = ScoringBand(severe=6.0, severe_points=20, elevated=7.0, elevated_points=10)
    volume_increase_pct: ScoringBand = ScoringBand(severe=20.0, severe_points=20, elevated=10.0, elevated_points=10)
    recovery_score: ScoringBand = ScoringBand(severe=60.0, severe_points=20, elevated=70.0, elevated_points=10)
    hrv: ScoringBand = ScoringBand(severe=45.0, severe_points=15, elevated=55.0, elevated_points=8)
    sleep_quality: ScoringBand = ScoringBand(severe=70.0, severe_points=15, elevated=80.0, elevated_points=8)

    report_threshold: float = Field(default=30.0, description="Scores at or below this are not reported")
    critical_threshold: float = 80.0
    high_threshold: float = 60.0
    moderate_threshold: float = 40.0

    # (minimum score, days) checked in order; first match wins
    time_to_injury_steps: list[tuple[float, int]] = Field(
        default_factory=lambda: [(90.0, 7), (80.0, 14), (70.0, 21), (60.0, 35)],
    )
    default_time_to_injury_days: int = 56
    risk_confidence: float = Field(default=0.85, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_thresholds(self) -> "OverloadPolicy":
        """Risk-level thresholds must be strictly decreasing."""
        if not self.critical_threshold > self.high_threshold > self.moderate_threshold:
            raise ValueError(
                "Risk thresholds must satisfy critical > high > moderate, got "
                f"{self.critical_threshold}/{self.high_threshold}/{self.moderate_threshold}"
            )
        return self


class PhasePolicy(BaseModel):
    """Thresholds for phase resolution and the deload and intensification flags."""

    high_fatigue: float = 70.0
    elevated_fatigue: float = 60.0
    good_recovery: float = 75.0
    stagnation_trend: float = 50.0
    poor_trend: float = 40.0
    min_progress_rate: float = 5.0

    @model_validator(mode="after")
    def validate_fatigue_order(self) -> "PhasePolicy":
        if self.elevated_fatigue > self.high_fatigue:
            raise ValueError(
                f"elevated_fatigue ({self.elevated_fatigue}) must not exceed high_fatigue ({self.high_fatigue})"
            )
        return self


class LoadStep(BaseModel):
    """Load phase chosen when the worst regional risk is strictly above ``above``."""

    above: float
    phase: LoadPhase
    reduction_pct: float = Field(ge=0.0, le=100.0)
    duration_weeks: int = Field(ge=1)


class LoadManagementPolicy(BaseModel):
    """Risk-to-load-phase steps for macro load management."""

    # checked in order; first match wins
    steps: list[LoadStep] = Field(
        default_factory=lambda: [
            LoadStep(above=80.0, phase=LoadPhase.DELOAD, reduction_pct=40.0, duration_weeks=4),
            LoadStep(above=60.0, phase=LoadPhase.ADAPTATION, reduction_pct=20.0, duration_weeks=6),
            LoadStep(above=40.0, phase=LoadPhase.MAINTENANCE, reduction_pct=10.0, duration_weeks=8),
        ],
    )
    fallback_phase: LoadPhase = LoadPhase.PROGRESSION
    fallback_reduction_pct: float = Field(default=0.0, ge=0.0, le=100.0)
    fallback_duration_weeks: int = Field(default=4, ge=1)
    poor_session_sleep: float = Field(default=6.0, description="Mean session sleep below this adds sleep extension")

    @model_validator(mode="after")
    def validate_step_order(self) -> "LoadManagementPolicy":
        """Steps must be ordered by strictly decreasing score."""
        bounds = [step.above for step in self.steps]
        if any(later >= earlier for earlier, later in zip(bounds, bounds[1:])):
            raise ValueError(f"Load steps must be ordered by decreasing score, got {bounds}")
        return self


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="PERIODIZATION_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="PERIODIZATION_LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="PERIODIZATION_LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="PERIODIZATION_LOG_RETENTION")
    history_window_days: int = Field(
        default=7,
        ge=1,
        validation_alias="PERIODIZATION_HISTORY_WINDOW_DAYS",
        description="Length of the analysis window in days",
    )
    baseline_ema_weight: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        validation_alias="PERIODIZATION_BASELINE_EMA_WEIGHT",
        description="Weight of a new session in the baseline moving averages",
    )
    recent_session_count: int = Field(
        default=3,
        ge=1,
        validation_alias="PERIODIZATION_RECENT_SESSION_COUNT",
        description="Sessions considered for next-session recommendations",
    )
    trend: TrendPolicy = Field(default_factory=TrendPolicy)
    fatigue: FatiguePolicy = Field(default_factory=FatiguePolicy)
    readiness: ReadinessWeights = Field(default_factory=ReadinessWeights)
    overload: OverloadPolicy = Field(default_factory=OverloadPolicy)
    phase: PhasePolicy = Field(default_factory=PhasePolicy)
    load_management: LoadManagementPolicy = Field(default_factory=LoadManagementPolicy)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PERIODIZATION_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value


settings = Settings()
