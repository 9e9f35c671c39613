"""Recovery and fatigue analysis."""

from dataclasses import dataclass

from periodization.config.settings import FatiguePolicy, settings
from periodization.core.numbers import clamp, mean
from periodization.schemas.metrics import SessionMetrics

EMPTY_FATIGUE_INDEX = 50.0
EMPTY_RECOVERY_QUALITY = 50.0


@dataclass(frozen=True)
class RecoveryAnalysis:
    """Fatigue index (0-100, higher = more fatigued) and its inverse."""

    fatigue_index: float
    recovery_quality: float
    avg_sleep: float | None = None
    avg_stress: float | None = None
    avg_soreness: float | None = None
    avg_hrv: float | None = None


def compute_fatigue_index(
    avg_stress: float,
    avg_soreness: float,
    avg_sleep: float,
    avg_hrv: float,
    policy: FatiguePolicy | None = None,
) -> float:
    """Weighted fatigue index clamped to [0, 100]."""
    policy = policy or settings.fatigue
    return clamp(
        avg_stress * policy.stress_weight
        + avg_soreness * policy.soreness_weight
        + (policy.sleep_reference - avg_sleep) * policy.sleep_weight
        + (policy.hrv_reference - avg_hrv) * policy.hrv_weight
    )


def analyze_recovery(
    sessions: list[SessionMetrics],
    policy: FatiguePolicy | None = None,
) -> RecoveryAnalysis:
    """Combine sleep, stress, soreness and HRV into a fatigue index."""
    if not sessions:
        return RecoveryAnalysis(fatigue_index=EMPTY_FATIGUE_INDEX, recovery_quality=EMPTY_RECOVERY_QUALITY)

    avg_sleep = mean([s.sleep_quality for s in sessions])
    avg_stress = mean([s.stress_level for s in sessions])
    avg_soreness = mean([s.muscle_soreness for s in sessions])
    avg_hrv = mean([s.heart_rate.hrv for s in sessions])

    fatigue_index = compute_fatigue_index(avg_stress, avg_soreness, avg_sleep, avg_hrv, policy)

    return RecoveryAnalysis(
        fatigue_index=fatigue_index,
        recovery_quality=100 - fatigue_index,
        avg_sleep=avg_sleep,
        avg_stress=avg_stress,
        avg_soreness=avg_soreness,
        avg_hrv=avg_hrv,
    )
