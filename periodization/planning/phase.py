"""Deterministic periodization phase resolution.

The next phase is computed fresh from the current window's signals, never from
the previous phase, so evaluating twice on the same inputs gives the same
answer and has no side effects.

The deload and intensification flags use their own thresholds and can
disagree with the phase recommendation. Callers should treat the flags as the
stricter gate.
"""

from periodization.analysis.performance import PerformanceAnalysis
from periodization.analysis.recovery import RecoveryAnalysis
from periodization.config.settings import PhasePolicy, settings
from periodization.schemas.assessment import PeriodizationAction, PeriodizationPhase

DEFAULT_CURRENT_PHASE = "current"
TRANSITION_TIMELINE = "1-2 weeks"

PHASE_OUTCOMES: dict[PeriodizationPhase, tuple[str, ...]] = {
    PeriodizationPhase.DELOAD: (
        "Reduced accumulated fatigue",
        "Improved recovery markers",
        "Readiness for the next progression block",
    ),
    PeriodizationPhase.INTENSIFICATION: (
        "Higher maximal strength",
        "Better sport-specific performance",
        "Advanced neural adaptations",
    ),
    PeriodizationPhase.VOLUME: (
        "Greater work capacity",
        "Muscle hypertrophy",
        "Improved aerobic base",
    ),
    PeriodizationPhase.MAINTENANCE: (
        "Current adaptations preserved",
        "Stable performance",
        "Preparation for the next cycle",
    ),
}


def resolve_phase(
    performance: PerformanceAnalysis,
    recovery: RecoveryAnalysis,
    policy: PhasePolicy | None = None,
) -> tuple[PeriodizationPhase, str]:
    """Resolve the recommended phase and its reason.

    Phase determination logic (first match wins, default thresholds shown):
    - fatigue_index > 70: deload
    - improving and recovery_quality > 75: intensification
    - trend_score < 50: volume
    - otherwise: maintenance
    """
    policy = policy or settings.phase

    if recovery.fatigue_index > policy.high_fatigue:
        return PeriodizationPhase.DELOAD, "High accumulated fatigue requires active recovery"

    if performance.is_improving and recovery.recovery_quality > policy.good_recovery:
        return PeriodizationPhase.INTENSIFICATION, "Good recovery and progress allow intensification"

    if performance.trend_score < policy.stagnation_trend:
        return PeriodizationPhase.VOLUME, "Stagnation calls for more training volume"

    return PeriodizationPhase.MAINTENANCE, "Signals are stable; hold the current load"


def should_deload(
    recovery: RecoveryAnalysis,
    performance: PerformanceAnalysis,
    policy: PhasePolicy | None = None,
) -> bool:
    """Deload when fatigue is high, or elevated while performance is poor."""
    policy = policy or settings.phase
    return recovery.fatigue_index > policy.high_fatigue or (
        recovery.fatigue_index > policy.elevated_fatigue and performance.trend_score < policy.poor_trend
    )


def can_intensify(
    performance: PerformanceAnalysis,
    recovery: RecoveryAnalysis,
    policy: PhasePolicy | None = None,
) -> bool:
    policy = policy or settings.phase
    return (
        performance.is_improving
        and recovery.recovery_quality > policy.good_recovery
        and performance.progress_rate > policy.min_progress_rate
    )


def evaluate_periodization(
    performance: PerformanceAnalysis,
    recovery: RecoveryAnalysis,
    current_phase: str | None = None,
    policy: PhasePolicy | None = None,
) -> PeriodizationAction:
    """Build the phase recommendation for the next block.

    Args:
        performance: Performance trend analysis of the window
        recovery: Recovery analysis of the window
        current_phase: Phase label from the plan, if the plan tracks one
        policy: Phase thresholds; defaults to the configured policy

    Returns:
        PeriodizationAction with reason, timeline and expected outcomes
    """
    phase, reason = resolve_phase(performance, recovery, policy)
    return PeriodizationAction(
        current_phase=current_phase or DEFAULT_CURRENT_PHASE,
        recommended_phase=phase,
        transition_reason=reason,
        transition_timeline=TRANSITION_TIMELINE,
        expected_outcomes=PHASE_OUTCOMES.get(phase, PHASE_OUTCOMES[PeriodizationPhase.MAINTENANCE]),
    )
