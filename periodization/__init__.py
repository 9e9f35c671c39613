"""Adaptive training periodization and biomechanical overload engine.

This package provides:
- Session metrics history with per-user baselines
- Weekly readiness assessment with automatic training adjustments
- Periodization phase recommendations
- Regional overload risk detection with corrective protocols
"""

from periodization.engine import AdaptiveTrainingEngine
from periodization.errors import (
    ConcurrentMutationConflictError,
    DuplicateSessionError,
    EngineError,
    InvalidMetricRangeError,
)

__all__ = [
    "AdaptiveTrainingEngine",
    "ConcurrentMutationConflictError",
    "DuplicateSessionError",
    "EngineError",
    "InvalidMetricRangeError",
]
