"""Training adjustment generation.

Translates readiness and per-exercise performance into concrete load, set,
rest and global volume/intensity changes.

Rules are independent and additive: every matching rule fires, there is no
priority ordering between them. The generator never touches a plan; its
output goes to the PlanAdjustmentApplier when the caller decides to apply it.
"""

from dataclasses import dataclass, field

from loguru import logger

from periodization.core.numbers import mean, pct_change, round_half_up
from periodization.schemas.assessment import GLOBAL_EXERCISE, AdjustmentType, TrainingAdjustment
from periodization.schemas.metrics import ExercisePerformance, SessionMetrics

# ---- Per-exercise rule thresholds ----
HEADROOM_MAX_RPE = 7.0
HEADROOM_MIN_RIR = 3.0
OVERREACH_MIN_RPE = 9.0
OVERREACH_MAX_RIR = 1.0
LOW_COMPLETION_PCT = 80.0
LONG_REST_MIN_RPE = 8.0

LOAD_STEP_PCT = 5.0
BASE_REST = "120s"
EXTENDED_REST = "150s"
REST_EXTENSION_PCT = 25.0

# ---- Global rule thresholds ----
LOW_READINESS = 70
HIGH_READINESS = 85


@dataclass
class ExerciseAnalysis:
    """Aggregate of one exercise across every session in the window."""

    exercise_name: str
    records: list[ExercisePerformance] = field(default_factory=list)

    @property
    def avg_rpe(self) -> float:
        return mean([r.rpe for r in self.records])

    @property
    def avg_rir(self) -> float:
        return mean([r.rir for r in self.records])

    @property
    def avg_form_quality(self) -> float:
        return mean([r.form_quality for r in self.records])

    @property
    def completion_rate(self) -> float:
        """Mean completed/planned sets, as a percentage."""
        return mean([r.completion_ratio for r in self.records]) * 100

    @property
    def weight_progression(self) -> float:
        """Percentage change in actual load from the first to the last record."""
        if len(self.records) < 2:
            return 0.0
        return pct_change(self.records[0].actual_weight, self.records[-1].actual_weight)

    @property
    def last_weight(self) -> float:
        return self.records[-1].actual_weight

    @property
    def first_planned_sets(self) -> int:
        return self.records[0].planned_sets


def analyze_exercises(sessions: list[SessionMetrics]) -> dict[str, ExerciseAnalysis]:
    """Group exercise records by name, in first-seen order."""
    analyses: dict[str, ExerciseAnalysis] = {}
    for session in sessions:
        for record in session.exercises:
            analysis = analyses.setdefault(record.exercise_name, ExerciseAnalysis(record.exercise_name))
            analysis.records.append(record)
    return analyses


def _scaled_weight(weight: float, factor: float) -> int:
    # ties round up, so 10 kg +5% becomes 11
    return round_half_up(weight * factor)


def generate_exercise_adjustments(analysis: ExerciseAnalysis) -> list[TrainingAdjustment]:
    """Apply the per-exercise rules to one exercise.

    Rules:
    - avg RPE < 7 and avg RIR > 3 → +5% load (capacity headroom)
    - avg RPE > 9 or avg RIR < 1 → -5% load (overreaching)
    - completion < 80% → one set fewer (minimum 1)
    - avg RPE > 8 → rest 120s → 150s
    """
    adjustments: list[TrainingAdjustment] = []
    name = analysis.exercise_name
    avg_rpe = analysis.avg_rpe
    avg_rir = analysis.avg_rir

    if avg_rpe < HEADROOM_MAX_RPE and avg_rir > HEADROOM_MIN_RIR:
        adjustments.append(
            TrainingAdjustment(
                exercise_name=name,
                adjustment_type=AdjustmentType.WEIGHT,
                previous_value=analysis.last_weight,
                new_value=_scaled_weight(analysis.last_weight, 1 + LOAD_STEP_PCT / 100),
                adjustment_percentage=LOAD_STEP_PCT,
                reason="Low RPE and high RIR show capacity for more load",
                confidence=0.88,
                periodization_phase="progression",
            )
        )
        logger.debug(f"{name}: headroom rule fired (RPE={avg_rpe:.1f}, RIR={avg_rir:.1f})")

    if avg_rpe > OVERREACH_MIN_RPE or avg_rir < OVERREACH_MAX_RIR:
        adjustments.append(
            TrainingAdjustment(
                exercise_name=name,
                adjustment_type=AdjustmentType.WEIGHT,
                previous_value=analysis.last_weight,
                new_value=_scaled_weight(analysis.last_weight, 1 - LOAD_STEP_PCT / 100),
                adjustment_percentage=-LOAD_STEP_PCT,
                reason="High RPE or low RIR indicate overreaching",
                confidence=0.92,
                periodization_phase="deload",
            )
        )
        logger.debug(f"{name}: overreach rule fired (RPE={avg_rpe:.1f}, RIR={avg_rir:.1f})")

    completion_rate = analysis.completion_rate
    if completion_rate < LOW_COMPLETION_PCT:
        previous_sets = analysis.first_planned_sets
        new_sets = max(1, previous_sets - 1)
        adjustments.append(
            TrainingAdjustment(
                exercise_name=name,
                adjustment_type=AdjustmentType.SETS,
                previous_value=previous_sets,
                new_value=new_sets,
                adjustment_percentage=round(pct_change(previous_sets, new_sets), 1),
                reason=f"Low set completion rate ({completion_rate:.0f}%)",
                confidence=0.75,
                periodization_phase="adjustment",
            )
        )
        logger.debug(f"{name}: completion rule fired ({completion_rate:.0f}%)")

    if avg_rpe > LONG_REST_MIN_RPE:
        adjustments.append(
            TrainingAdjustment(
                exercise_name=name,
                adjustment_type=AdjustmentType.REST,
                previous_value=BASE_REST,
                new_value=EXTENDED_REST,
                adjustment_percentage=REST_EXTENSION_PCT,
                reason="High RPE needs longer recovery between sets",
                confidence=0.82,
                periodization_phase="recovery",
            )
        )
        logger.debug(f"{name}: rest rule fired (RPE={avg_rpe:.1f})")

    return adjustments


def generate_global_adjustments(readiness: int) -> list[TrainingAdjustment]:
    """Readiness-driven volume or intensity change for the whole plan."""
    adjustments: list[TrainingAdjustment] = []

    if readiness < LOW_READINESS:
        adjustments.append(
            TrainingAdjustment(
                exercise_name=GLOBAL_EXERCISE,
                adjustment_type=AdjustmentType.VOLUME,
                previous_value="100%",
                new_value="85%",
                adjustment_percentage=-15.0,
                reason="Volume reduced for low readiness",
                confidence=0.85,
                periodization_phase="recovery",
            )
        )
    if readiness > HIGH_READINESS:
        adjustments.append(
            TrainingAdjustment(
                exercise_name=GLOBAL_EXERCISE,
                adjustment_type=AdjustmentType.INTENSITY,
                previous_value="100%",
                new_value="105%",
                adjustment_percentage=5.0,
                reason="Intensity increased for high readiness",
                confidence=0.78,
                periodization_phase="intensification",
            )
        )

    return adjustments


def generate_adjustments(sessions: list[SessionMetrics], readiness: int) -> list[TrainingAdjustment]:
    """All adjustments for a window: per-exercise rules first, then global rules.

    Args:
        sessions: Sessions in the analysis window
        readiness: Overall readiness (0-100)

    Returns:
        Ordered list of adjustments; empty for an empty window
    """
    if not sessions:
        return []

    adjustments: list[TrainingAdjustment] = []
    for analysis in analyze_exercises(sessions).values():
        adjustments.extend(generate_exercise_adjustments(analysis))

    adjustments.extend(generate_global_adjustments(readiness))

    logger.info(f"Generated {len(adjustments)} adjustments (readiness={readiness})")
    return adjustments
