"""Window analyzers: performance trend, recovery, adherence, readiness."""

from periodization.analysis.adherence import AdherenceAnalysis, analyze_adherence
from periodization.analysis.performance import PerformanceAnalysis, analyze_performance
from periodization.analysis.readiness import calculate_readiness
from periodization.analysis.recovery import RecoveryAnalysis, analyze_recovery

__all__ = [
    "AdherenceAnalysis",
    "PerformanceAnalysis",
    "RecoveryAnalysis",
    "analyze_adherence",
    "analyze_performance",
    "analyze_recovery",
    "calculate_readiness",
]
