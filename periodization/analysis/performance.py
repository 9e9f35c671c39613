"""Performance trend analysis over the analysis window.

The trend score rewards capacity headroom (low RPE with high RIR) more than raw
volume growth: headroom predicts sustainable progression better than a
short-window volume spike.
"""

from dataclasses import dataclass

from periodization.analysis.trends import compute_trend, half_split_change
from periodization.config.settings import TrendPolicy, settings
from periodization.core.numbers import clamp, mean, pct_change
from periodization.schemas.metrics import SessionMetrics

EMPTY_TREND_SCORE = 50.0
EMPTY_PROGRESS_RATE = 0.0


@dataclass(frozen=True)
class PerformanceAnalysis:
    """Output of the performance trend analyzer."""

    trend_score: float
    progress_rate: float
    is_improving: bool
    avg_rpe: float | None = None
    avg_rir: float | None = None
    volume_trend: float = 0.0
    intensity_trend: float = 0.0
    volume_direction: str = "unknown"


def compute_volume_trend(sessions: list[SessionMetrics]) -> float:
    """Percentage change in per-session volume, second half vs. first half."""
    return half_split_change([session.volume for session in sessions])


def compute_intensity_trend(sessions: list[SessionMetrics], cap: float = 20.0) -> float:
    """Percentage change in mean session load, first vs. last session, capped at +/- cap."""
    if len(sessions) < 2:
        return 0.0
    trend = pct_change(sessions[0].mean_load, sessions[-1].mean_load)
    return clamp(trend, -cap, cap)


def analyze_performance(
    sessions: list[SessionMetrics],
    policy: TrendPolicy | None = None,
) -> PerformanceAnalysis:
    """Score the performance trend of a window of sessions.

    Args:
        sessions: Sessions in recording order
        policy: Trend weights (defaults to settings.trend)

    Returns:
        PerformanceAnalysis; the neutral midpoint for an empty window
    """
    policy = policy or settings.trend

    if not sessions:
        return PerformanceAnalysis(
            trend_score=EMPTY_TREND_SCORE,
            progress_rate=EMPTY_PROGRESS_RATE,
            is_improving=False,
        )

    avg_rpe = mean([s.rpe for s in sessions])
    avg_rir = mean([s.rir for s in sessions])
    volume_trend = compute_volume_trend(sessions)
    intensity_trend = compute_intensity_trend(sessions, cap=policy.intensity_trend_cap)

    trend_score = clamp(
        volume_trend * policy.volume_weight
        + intensity_trend * policy.intensity_weight
        + (10 - avg_rpe) * policy.rpe_weight
        + avg_rir * policy.rir_weight
    )
    progress_rate = clamp(volume_trend * policy.progress_rate_multiplier) if volume_trend > 0 else 0.0

    return PerformanceAnalysis(
        trend_score=trend_score,
        progress_rate=progress_rate,
        is_improving=trend_score > policy.improving_threshold,
        avg_rpe=avg_rpe,
        avg_rir=avg_rir,
        volume_trend=volume_trend,
        intensity_trend=intensity_trend,
        volume_direction=compute_trend([s.volume for s in sessions]).direction,
    )
