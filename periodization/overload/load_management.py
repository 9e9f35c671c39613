"""Macro-level load management from the worst detected risk."""

from periodization.config.settings import LoadManagementPolicy, settings
from periodization.core.numbers import mean
from periodization.schemas.metrics import SessionMetrics
from periodization.schemas.overload import LoadManagementStrategy, LoadPhase, OverloadRisk, RiskLevel

BASE_RECOVERY_TACTICS = (
    "Sleep optimization (7-9 hours)",
    "Stress management techniques",
    "Anti-inflammatory nutrition",
    "Adequate hydration",
)
HIGH_RISK_TACTICS = (
    "Cold/heat therapy",
    "Therapeutic massage",
    "Myofascial release",
)
SLEEP_EXTENSION_TACTIC = "Sleep extension: target 9 hours in bed during this phase"

MONITORING_MARKERS = (
    "Pain levels (1-10 scale)",
    "Sleep quality",
    "Heart-rate variability",
    "Exercise RPE",
    "Joint range of motion",
    "Functional muscle strength",
)


def _phase_for(max_risk: float, policy: LoadManagementPolicy) -> tuple[LoadPhase, float, int]:
    for step in policy.steps:
        if max_risk > step.above:
            return step.phase, step.reduction_pct, step.duration_weeks
    return policy.fallback_phase, policy.fallback_reduction_pct, policy.fallback_duration_weeks


def _recovery_tactics(
    risks: list[OverloadRisk],
    sessions: list[SessionMetrics],
    policy: LoadManagementPolicy,
) -> tuple[str, ...]:
    tactics = list(BASE_RECOVERY_TACTICS)
    if any(risk.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL) for risk in risks):
        tactics.extend(HIGH_RISK_TACTICS)
    if sessions and mean([s.sleep_quality for s in sessions]) < policy.poor_session_sleep:
        tactics.append(SLEEP_EXTENSION_TACTIC)
    return tuple(tactics)


def create_load_management_strategy(
    risks: list[OverloadRisk],
    sessions: list[SessionMetrics] | None = None,
    policy: LoadManagementPolicy | None = None,
) -> LoadManagementStrategy:
    """Pick phase, reduction and duration from the highest regional risk.

    Args:
        risks: Detected regional risks (may be empty)
        sessions: Recent session history, used for recovery tactics
        policy: Risk-to-phase steps; defaults to the configured policy

    Returns:
        LoadManagementStrategy; the fallback phase (progression with no
        reduction by default) when nothing was detected
    """
    policy = policy or settings.load_management
    max_risk = max((risk.risk_score for risk in risks), default=0.0)
    phase, reduction, weeks = _phase_for(max_risk, policy)

    return LoadManagementStrategy(
        phase=phase,
        duration_weeks=weeks,
        load_reduction_pct=reduction,
        recovery_enhancement=_recovery_tactics(risks, sessions or [], policy),
        monitoring_markers=MONITORING_MARKERS,
    )
