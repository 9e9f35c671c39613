"""Training adjustments: generation from analysis, application to plans."""

from periodization.adjustments.applier import PlanAdjustmentApplier
from periodization.adjustments.generator import (
    ExerciseAnalysis,
    analyze_exercises,
    generate_adjustments,
    generate_exercise_adjustments,
    generate_global_adjustments,
)

__all__ = [
    "ExerciseAnalysis",
    "PlanAdjustmentApplier",
    "analyze_exercises",
    "generate_adjustments",
    "generate_exercise_adjustments",
    "generate_global_adjustments",
]
