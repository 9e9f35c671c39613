"""Short, human-readable suggestions for the next session."""

from periodization.core.numbers import mean
from periodization.schemas.metrics import MetricBaselines, SessionMetrics

NO_HISTORY_MESSAGE = "Record metrics for your sessions to get personalized recommendations"

HIGH_RECENT_RPE = 8.5
POOR_RECENT_SLEEP = 6.0
STRONG_ADHERENCE = 90.0
RPE_ABOVE_BASELINE = 1.0


def _exercise_recommendations(exercise_name: str, sessions: list[SessionMetrics]) -> list[str]:
    wanted = exercise_name.lower()
    records = [r for s in sessions for r in s.exercises if r.exercise_name.lower() == wanted]
    if not records:
        return [f"No recent data for {exercise_name}; keep the planned load"]

    avg_rpe = mean([r.rpe for r in records])
    avg_rir = mean([r.rir for r in records])
    if avg_rpe < 7 and avg_rir > 3:
        return [f"{exercise_name}: try about 5% more load"]
    if avg_rpe > 9 or avg_rir < 1:
        return [f"{exercise_name}: reduce the load by about 5%"]
    return [f"{exercise_name}: keep the current load"]


def build_next_session_recommendations(
    recent: list[SessionMetrics],
    baselines: MetricBaselines | None = None,
    exercise_name: str | None = None,
) -> list[str]:
    """Recommendations from the most recent sessions.

    Args:
        recent: Most recent sessions, oldest first
        baselines: User baselines, used to flag effort creeping above normal
        exercise_name: Optional exercise to add a load suggestion for

    Returns:
        Recommendation strings; a placeholder message when there is no history
    """
    if not recent:
        return [NO_HISTORY_MESSAGE]

    recommendations: list[str] = []
    avg_rpe = mean([s.rpe for s in recent])
    avg_sleep = mean([s.sleep_quality for s in recent])

    if avg_rpe > HIGH_RECENT_RPE:
        recommendations.append("Consider reducing intensity by 5-10% next session")

    if avg_sleep < POOR_RECENT_SLEEP:
        recommendations.append("Prioritize rest; consider an active recovery session")

    if all(s.adherence > STRONG_ADHERENCE for s in recent):
        recommendations.append("Excellent adherence! You could try a small volume increase")

    if baselines is not None and baselines.sessions_seen > len(recent) and avg_rpe > baselines.rpe + RPE_ABOVE_BASELINE:
        recommendations.append(
            f"Recent effort (RPE {avg_rpe:.1f}) is above your usual {baselines.rpe:.1f}; watch for accumulating fatigue"
        )

    if exercise_name:
        recommendations.extend(_exercise_recommendations(exercise_name, recent))

    return recommendations
