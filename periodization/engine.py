"""Adaptive training engine.

Public contract used by the rest of the system. The engine holds no user
state of its own: history lives in the injected repository, and time and
identifiers come from the injected clock and id generator, so a weekly
analysis can be replayed exactly.

Flow for a weekly analysis:

1. Pull the last ``history_window_days`` of sessions from the repository
   ↓
2. Performance, recovery and adherence analyzers (independent)
   ↓
3. Readiness aggregation
   ↓
4. Adjustment generation + periodization evaluation
   ↓
5. WeeklyAssessment (the caller decides whether to apply the adjustments)

The overload analysis is independent of the weekly flow and takes all of its
inputs as arguments.
"""

import math
from collections.abc import Sequence
from datetime import timedelta

from loguru import logger

from periodization.adjustments.applier import PlanAdjustmentApplier
from periodization.adjustments.generator import generate_adjustments
from periodization.analysis.adherence import analyze_adherence
from periodization.analysis.performance import analyze_performance
from periodization.analysis.readiness import calculate_readiness
from periodization.analysis.recovery import analyze_recovery
from periodization.config.settings import Settings, settings as default_settings
from periodization.core.clock import Clock, IdGenerator, generate_assessment_id, utc_now
from periodization.history.store import InMemoryMetricsHistory, MetricsHistoryRepository
from periodization.overload.detector import detect_overload_risks
from periodization.overload.load_management import create_load_management_strategy
from periodization.overload.protocols import generate_corrective_protocols
from periodization.planning.phase import can_intensify, evaluate_periodization, should_deload
from periodization.recommendations import build_next_session_recommendations
from periodization.schemas.assessment import TrainingAdjustment, WeeklyAssessment
from periodization.schemas.metrics import ExercisePerformance, MetricBaselines, SessionMetrics
from periodization.schemas.overload import OverloadReport, WearableSnapshot
from periodization.schemas.plan import UserData, WorkoutPlan
from periodization.schemas.validation import validate_session_metrics

DAYS_PER_WEEK = 7


class AdaptiveTrainingEngine:
    """Entry point for session recording, weekly analysis and overload analysis."""

    def __init__(
        self,
        repository: MetricsHistoryRepository | None = None,
        clock: Clock = utc_now,
        id_generator: IdGenerator = generate_assessment_id,
        config: Settings | None = None,
        applier: PlanAdjustmentApplier | None = None,
    ) -> None:
        self.config = config or default_settings
        self.repository = repository or InMemoryMetricsHistory(ema_weight=self.config.baseline_ema_weight)
        self.clock = clock
        self.id_generator = id_generator
        self.applier = applier or PlanAdjustmentApplier(clock=clock)

    # ------------------------------------------------------------------
    # Session ingestion
    # ------------------------------------------------------------------

    def record_session_metrics(self, user_id: str, metrics: SessionMetrics) -> None:
        """Validate and store one session.

        Raises:
            InvalidMetricRangeError: If any field is outside its documented range
            DuplicateSessionError: If the session id was already recorded
        """
        try:
            validate_session_metrics(metrics)
        except ValueError as e:
            logger.warning(f"Rejected session {metrics.session_id} for user {user_id}: {e}")
            raise

        self.repository.append(user_id, metrics)
        logger.info(f"Recorded metrics for session {metrics.session_id} (user={user_id})")

    def get_baselines(self, user_id: str) -> MetricBaselines:
        return self.repository.baselines(user_id)

    def last_week(self, user_id: str) -> list[SessionMetrics]:
        """Sessions inside the analysis window ending now."""
        since = self.clock() - timedelta(days=self.config.history_window_days)
        return self.repository.window(user_id, since)

    # ------------------------------------------------------------------
    # Weekly analysis
    # ------------------------------------------------------------------

    def perform_weekly_analysis(
        self,
        user_id: str,
        plan: WorkoutPlan | None = None,
        user_data: UserData | None = None,
    ) -> WeeklyAssessment:
        """Analyze the last week and recommend adjustments and a phase.

        Args:
            user_id: User whose history is analyzed
            plan: Current plan; only its phase label is read
            user_data: Profile labels, logged for traceability

        Returns:
            A fresh WeeklyAssessment. The plan is not modified.
        """
        generated_at = self.clock()
        sessions = self.last_week(user_id)
        fitness_level = user_data.fitness_level if user_data else "unknown"
        logger.info(f"Starting weekly analysis for {user_id}: {len(sessions)} sessions, fitness level {fitness_level}")

        performance = analyze_performance(sessions, self.config.trend)
        recovery = analyze_recovery(sessions, self.config.fatigue)
        adherence = analyze_adherence(sessions)

        readiness = calculate_readiness(performance, recovery, adherence, self.config.readiness)
        adjustments = generate_adjustments(sessions, readiness)
        action = evaluate_periodization(performance, recovery, plan.phase if plan else None, self.config.phase)

        assessment = WeeklyAssessment(
            assessment_id=self.id_generator(),
            generated_at=generated_at,
            user_id=user_id,
            week_number=math.ceil(self.repository.count(user_id) / DAYS_PER_WEEK),
            overall_readiness=readiness,
            fatigue_index=recovery.fatigue_index,
            performance_index=performance.trend_score,
            adherence_rate=adherence.adherence_rate,
            progress_rate=performance.progress_rate,
            session_count=len(sessions),
            recommended_adjustments=adjustments,
            periodization_recommendation=action,
            deload_recommended=should_deload(recovery, performance, self.config.phase),
            intensification_ready=can_intensify(performance, recovery, self.config.phase),
        )

        logger.info(
            f"Weekly analysis complete for {user_id}: readiness={readiness}, "
            f"fatigue={recovery.fatigue_index:.1f}, phase={action.recommended_phase}, "
            f"adjustments={len(adjustments)}"
        )
        return assessment

    def apply_automatic_adjustments(
        self,
        plan: WorkoutPlan,
        adjustments: Sequence[TrainingAdjustment],
        expected_revision: int | None = None,
    ) -> WorkoutPlan:
        """Append adjustments to the plan's log (see PlanAdjustmentApplier.apply)."""
        return self.applier.apply(plan, adjustments, expected_revision=expected_revision)

    # ------------------------------------------------------------------
    # Overload analysis
    # ------------------------------------------------------------------

    def analyze_overload_risk(
        self,
        session_history: list[SessionMetrics],
        wearable_snapshot: WearableSnapshot,
        exercise_history: list[ExercisePerformance],
    ) -> OverloadReport:
        """Regional overload risks, corrective protocols and a load strategy.

        Args:
            session_history: Recent sessions, used for recovery tactics
            wearable_snapshot: Latest wearable readings
            exercise_history: Exercise records to score, chronological

        Returns:
            OverloadReport; empty risk and protocol lists when nothing crosses the threshold
        """
        logger.info(f"Starting overload analysis over {len(exercise_history)} exercise records")

        risks = detect_overload_risks(exercise_history, wearable_snapshot, self.config.overload)
        protocols = generate_corrective_protocols(risks)
        strategy = create_load_management_strategy(risks, session_history, self.config.load_management)

        logger.info(
            f"Overload analysis complete: {len(risks)} regions at risk, "
            f"load phase={strategy.phase}, reduction={strategy.load_reduction_pct:.0f}%"
        )
        return OverloadReport(
            overload_risks=risks,
            corrective_protocols=protocols,
            load_management=strategy,
        )

    # ------------------------------------------------------------------
    # Next session
    # ------------------------------------------------------------------

    def get_next_session_recommendations(self, user_id: str, exercise_name: str | None = None) -> list[str]:
        recent = self.repository.recent(user_id, self.config.recent_session_count)
        return build_next_session_recommendations(
            recent,
            baselines=self.repository.baselines(user_id),
            exercise_name=exercise_name,
        )
