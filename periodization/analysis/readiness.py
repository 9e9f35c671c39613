"""Readiness aggregation.

Recovery carries the largest weight: under-recovery drives both injury and
stalled progress.
"""

from periodization.analysis.adherence import AdherenceAnalysis
from periodization.analysis.performance import PerformanceAnalysis
from periodization.analysis.recovery import RecoveryAnalysis
from periodization.config.settings import ReadinessWeights, settings
from periodization.core.numbers import clamp, round_half_up


def calculate_readiness(
    performance: PerformanceAnalysis,
    recovery: RecoveryAnalysis,
    adherence: AdherenceAnalysis,
    weights: ReadinessWeights | None = None,
) -> int:
    """Blend the three analyses into a 0-100 readiness score."""
    weights = weights or settings.readiness
    raw = (
        performance.trend_score * weights.performance
        + recovery.recovery_quality * weights.recovery
        + adherence.consistency_score * weights.adherence
    )
    return round_half_up(clamp(raw))
