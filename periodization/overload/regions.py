"""Body regions monitored for overload and the exercises that load them.

Matching is a case-insensitive substring test on the exercise name. Exercises
that match no region are ignored rather than guessed at.
"""

from dataclasses import dataclass

from periodization.schemas.metrics import ExercisePerformance


@dataclass(frozen=True)
class BodyRegion:
    name: str
    exercise_keywords: tuple[str, ...]

    def matches(self, exercise_name: str) -> bool:
        lowered = exercise_name.lower()
        return any(keyword in lowered for keyword in self.exercise_keywords)


SHOULDERS = BodyRegion("shoulders", ("overhead press", "bench press", "lateral raise"))
LUMBAR_SPINE = BodyRegion("lumbar_spine", ("deadlift", "squat", "row"))
HIPS = BodyRegion("hips", ("squat", "deadlift", "lunge"))
KNEES = BodyRegion("knees", ("squat", "lunge", "leg press"))

BODY_REGIONS: tuple[BodyRegion, ...] = (SHOULDERS, LUMBAR_SPINE, HIPS, KNEES)


def exercises_for_region(region: BodyRegion, history: list[ExercisePerformance]) -> list[ExercisePerformance]:
    """Records in ``history`` that load ``region``, order preserved."""
    return [record for record in history if region.matches(record.exercise_name)]
