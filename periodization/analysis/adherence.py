"""Adherence and consistency analysis.

An empty window scores full adherence: a new user is not penalised before the
first session exists.
"""

from dataclasses import dataclass

from periodization.core.numbers import clamp, mean
from periodization.schemas.metrics import SessionMetrics

EMPTY_ADHERENCE_RATE = 100.0
EMPTY_CONSISTENCY_SCORE = 100.0
MOTIVATION_TREND_SCALE = 5.0


@dataclass(frozen=True)
class AdherenceAnalysis:
    adherence_rate: float
    consistency_score: float
    motivation_trend: float = 0.0


def compute_motivation_trend(sessions: list[SessionMetrics]) -> float:
    """Last minus first motivation, scaled to percentage points."""
    if len(sessions) < 2:
        return 0.0
    return (sessions[-1].motivation - sessions[0].motivation) * MOTIVATION_TREND_SCALE


def analyze_adherence(sessions: list[SessionMetrics]) -> AdherenceAnalysis:
    if not sessions:
        return AdherenceAnalysis(adherence_rate=EMPTY_ADHERENCE_RATE, consistency_score=EMPTY_CONSISTENCY_SCORE)

    adherence_rate = clamp(mean([s.adherence for s in sessions]))
    motivation_trend = compute_motivation_trend(sessions)

    return AdherenceAnalysis(
        adherence_rate=adherence_rate,
        consistency_score=clamp(adherence_rate + motivation_trend),
        motivation_trend=motivation_trend,
    )
