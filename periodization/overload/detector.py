"""Regional overload risk detection.

Scores each monitored body region from its exercise history and the latest
wearable snapshot. The score is an additive heuristic, and so is the
time-to-injury step function; both are tunable through OverloadPolicy.

Regions scoring at or below the report threshold are omitted, not reported
as low risk.
"""

from loguru import logger

from periodization.config.settings import OverloadPolicy, ScoringBand, settings
from periodization.core.numbers import mean, pct_change
from periodization.overload.regions import BODY_REGIONS, BodyRegion, exercises_for_region
from periodization.schemas.metrics import ExercisePerformance
from periodization.schemas.overload import AdaptationStatus, OverloadRisk, RiskLevel, WearableSnapshot

CAUSE_INTENSITY_FATIGUE = "Excessive intensity and accumulated fatigue"
CAUSE_TECHNIQUE = "Technique breakdown under load"
CAUSE_RECOVERY_DEFICIT = "Systemic recovery deficit"
CAUSE_VOLUME_SPIKE = "Volume progression too rapid"
CAUSE_MULTIFACTORIAL = "Multifactorial overload"

SECONDARY_VARIABILITY = "Excessive performance variability"
SECONDARY_LOAD_REDUCTIONS = "Frequent need to reduce loads"
RPE_SWING = 2.0
BELOW_PLAN_SHARE = 0.3


def _points_above(value: float, band: ScoringBand) -> int:
    if value > band.severe:
        return band.severe_points
    if value > band.elevated:
        return band.elevated_points
    return 0


def _points_below(value: float, band: ScoringBand) -> int:
    if value < band.severe:
        return band.severe_points
    if value < band.elevated:
        return band.elevated_points
    return 0


def calculate_volume_increase(records: list[ExercisePerformance]) -> float:
    """Percentage change in load x completed sets, second half vs. first half.

    The split point is floor(n/2); the halves do not overlap.
    """
    if len(records) < 2:
        return 0.0
    split = len(records) // 2
    first_volume = sum(r.set_load for r in records[:split])
    second_volume = sum(r.set_load for r in records[split:])
    return pct_change(first_volume, second_volume)


def calculate_regional_risk_score(
    records: list[ExercisePerformance],
    wearable: WearableSnapshot,
    policy: OverloadPolicy | None = None,
) -> float:
    """Additive 0-100 risk score for one region's exercise records."""
    policy = policy or settings.overload

    score = 0
    score += _points_above(mean([r.rpe for r in records]), policy.rpe)
    score += _points_below(mean([r.rir for r in records]), policy.rir)
    score += _points_below(mean([r.form_quality for r in records]), policy.form_quality)
    score += _points_above(calculate_volume_increase(records), policy.volume_increase_pct)
    score += _points_below(wearable.recovery.recovery_score, policy.recovery_score)
    score += _points_below(wearable.recovery.hrv, policy.hrv)
    score += _points_below(wearable.sleep.quality, policy.sleep_quality)

    return float(min(100, score))


def categorize_risk_level(score: float, policy: OverloadPolicy | None = None) -> RiskLevel:
    policy = policy or settings.overload
    if score >= policy.critical_threshold:
        return RiskLevel.CRITICAL
    if score >= policy.high_threshold:
        return RiskLevel.HIGH
    if score >= policy.moderate_threshold:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def estimate_time_to_injury(score: float, policy: OverloadPolicy | None = None) -> int:
    """Coarse days-to-injury estimate from the configured step function."""
    policy = policy or settings.overload
    for minimum_score, days in policy.time_to_injury_steps:
        if score >= minimum_score:
            return days
    return policy.default_time_to_injury_days


def identify_primary_cause(
    records: list[ExercisePerformance],
    wearable: WearableSnapshot,
    policy: OverloadPolicy | None = None,
) -> str:
    """First matching cause, in fixed priority order."""
    policy = policy or settings.overload
    avg_rpe = mean([r.rpe for r in records])
    avg_rir = mean([r.rir for r in records])
    avg_form = mean([r.form_quality for r in records])

    if avg_rpe > policy.rpe.severe and avg_rir < policy.rir.severe:
        return CAUSE_INTENSITY_FATIGUE
    if avg_form < policy.form_quality.severe:
        return CAUSE_TECHNIQUE
    if wearable.recovery.recovery_score < policy.recovery_score.severe:
        return CAUSE_RECOVERY_DEFICIT
    if calculate_volume_increase(records) > policy.volume_increase_pct.severe:
        return CAUSE_VOLUME_SPIKE
    return CAUSE_MULTIFACTORIAL


def identify_secondary_causes(records: list[ExercisePerformance]) -> list[str]:
    causes: list[str] = []

    swings = any(abs(current.rpe - previous.rpe) > RPE_SWING for previous, current in zip(records, records[1:]))
    if swings:
        causes.append(SECONDARY_VARIABILITY)

    below_plan = sum(1 for r in records if r.actual_weight < r.planned_weight)
    if below_plan > len(records) * BELOW_PLAN_SHARE:
        causes.append(SECONDARY_LOAD_REDUCTIONS)

    return causes


def assess_adaptation_status(wearable: WearableSnapshot) -> AdaptationStatus:
    recovery_score = wearable.recovery.recovery_score
    hrv = wearable.recovery.hrv

    if recovery_score < 60 and hrv < 45:
        return AdaptationStatus.OVERLOADED
    if recovery_score > 85 and hrv > 65:
        return AdaptationStatus.ADAPTING
    if 70 <= recovery_score <= 85:
        return AdaptationStatus.RECOVERING
    return AdaptationStatus.PLATEAUED


def assess_region(
    region: BodyRegion,
    exercise_history: list[ExercisePerformance],
    wearable: WearableSnapshot,
    policy: OverloadPolicy | None = None,
) -> OverloadRisk | None:
    """Risk for one region, or None if it has no matching exercises or scores too low."""
    policy = policy or settings.overload
    records = exercises_for_region(region, exercise_history)
    if not records:
        return None

    score = calculate_regional_risk_score(records, wearable, policy)
    logger.debug(f"Region {region.name}: {len(records)} records, risk score {score:.0f}")
    if score <= policy.report_threshold:
        return None

    return OverloadRisk(
        body_part=region.name,
        risk_level=categorize_risk_level(score, policy),
        risk_score=score,
        primary_cause=identify_primary_cause(records, wearable, policy),
        secondary_causes=identify_secondary_causes(records),
        adaptation_status=assess_adaptation_status(wearable),
        time_to_injury_days=estimate_time_to_injury(score, policy),
        confidence=policy.risk_confidence,
    )


def detect_overload_risks(
    exercise_history: list[ExercisePerformance],
    wearable: WearableSnapshot,
    policy: OverloadPolicy | None = None,
    regions: tuple[BodyRegion, ...] = BODY_REGIONS,
) -> list[OverloadRisk]:
    """Reportable risks for every monitored region, highest score first.

    Args:
        exercise_history: Exercise records, chronological
        wearable: Latest wearable snapshot
        policy: Scoring policy (defaults to settings.overload)
        regions: Regions to assess

    Returns:
        Risks sorted by descending score; ties keep region order
    """
    risks = [
        risk
        for region in regions
        if (risk := assess_region(region, exercise_history, wearable, policy)) is not None
    ]
    return sorted(risks, key=lambda risk: risk.risk_score, reverse=True)
