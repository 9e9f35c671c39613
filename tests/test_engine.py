"""End-to-end tests for the AdaptiveTrainingEngine.

Tests cover:
- Steady low-effort week: load increase, volume-focused block
- High readiness week: global intensity increase
- Overreached week: load reduction and deload
- Empty history and analysis window
- Idempotence with a fixed clock
- Ingestion validation and duplicates
- Applying recommended adjustments
- Overload analysis through the engine
- Next-session recommendations
"""

import pytest

from periodization.config.settings import LoadManagementPolicy, PhasePolicy, settings
from periodization.engine import AdaptiveTrainingEngine
from periodization.errors import ConcurrentMutationConflictError, DuplicateSessionError, InvalidMetricRangeError
from periodization.overload.detector import CAUSE_INTENSITY_FATIGUE
from periodization.recommendations import NO_HISTORY_MESSAGE
from periodization.schemas.assessment import GLOBAL_EXERCISE, AdjustmentType, PeriodizationPhase
from periodization.schemas.overload import LoadPhase, ProtocolPriority, RiskLevel
from periodization.schemas.plan import UserData, WorkoutPlan
from tests.conftest import NOW, make_exercise, make_session, make_wearable

USER = "athlete-1"

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _record(engine: AdaptiveTrainingEngine, sessions: list) -> None:
    for session in sessions:
        engine.record_session_metrics(USER, session)


def _steady_week() -> list:
    return [
        make_session(
            f"s{i}",
            days_ago=3 - i,
            rpe=6,
            rir=4,
            adherence=100,
            sleep=8,
            stress=3,
            soreness=2,
            hrv=60,
            exercises=[make_exercise(rpe=6, rir=4)],
        )
        for i in range(3)
    ]


def _rising_week() -> list:
    return [
        make_session(
            f"s{i}",
            days_ago=3 - i,
            rpe=5,
            rir=4,
            adherence=100,
            sleep=10,
            stress=1,
            soreness=1,
            hrv=80,
            exercises=[make_exercise(weight=w, rpe=5, rir=4)],
        )
        for i, w in enumerate((100, 150, 200))
    ]


def _overreached_week() -> list:
    return [
        make_session(
            f"s{i}",
            days_ago=3 - i,
            rpe=9.5,
            rir=0,
            sleep=4,
            stress=9,
            soreness=9,
            hrv=30,
            exercises=[make_exercise(rpe=9.5, rir=0)],
        )
        for i in range(3)
    ]


# ============================================================================
# WEEKLY ANALYSIS
# ============================================================================


def test_steady_week_adds_load(engine):
    _record(engine, _steady_week())

    assessment = engine.perform_weekly_analysis(USER, WorkoutPlan(plan_id="p1"), UserData(fitness_level="advanced"))

    weight = assessment.recommended_adjustments[0]
    assert weight.exercise_name == "Back Squat"
    assert weight.adjustment_type == AdjustmentType.WEIGHT
    assert weight.adjustment_percentage == 5.0
    assert weight.confidence == 0.88
    assert weight.periodization_phase == "progression"

    assert assessment.fatigue_index == pytest.approx(40.0)
    assert assessment.performance_index == pytest.approx(40.0)
    assert assessment.overall_readiness == 63
    assert assessment.session_count == 3
    assert assessment.week_number == 1
    assert assessment.periodization_recommendation.recommended_phase == PeriodizationPhase.VOLUME
    assert assessment.deload_recommended is False
    assert assessment.intensification_ready is False


def test_high_readiness_increases_global_intensity(engine):
    _record(engine, _rising_week())

    assessment = engine.perform_weekly_analysis(USER)

    assert assessment.overall_readiness > 85
    types = [(a.exercise_name, a.adjustment_type) for a in assessment.recommended_adjustments]
    assert types == [("Back Squat", AdjustmentType.WEIGHT), (GLOBAL_EXERCISE, AdjustmentType.INTENSITY)]
    assert assessment.recommended_adjustments[0].new_value == 210
    assert assessment.recommended_adjustments[1].adjustment_percentage == 5.0
    assert assessment.periodization_recommendation.recommended_phase == PeriodizationPhase.INTENSIFICATION
    assert assessment.intensification_ready is True


def test_overreached_week_deloads(engine):
    _record(engine, _overreached_week())

    assessment = engine.perform_weekly_analysis(USER)

    weight = assessment.recommended_adjustments[0]
    assert weight.adjustment_type == AdjustmentType.WEIGHT
    assert weight.adjustment_percentage == -5.0
    assert weight.confidence == 0.92
    assert assessment.fatigue_index > 70
    assert assessment.deload_recommended is True
    assert assessment.periodization_recommendation.recommended_phase == PeriodizationPhase.DELOAD


def test_empty_history_uses_neutral_defaults(engine):
    assessment = engine.perform_weekly_analysis(USER)

    assert assessment.overall_readiness == 63
    assert assessment.recommended_adjustments == ()
    assert assessment.session_count == 0
    assert assessment.week_number == 0
    assert assessment.fatigue_index == 50.0
    assert assessment.adherence_rate == 100.0
    assert assessment.periodization_recommendation.current_phase == "current"


def test_assessment_collections_are_immutable(engine):
    _record(engine, _steady_week())

    assessment = engine.perform_weekly_analysis(USER)

    assert isinstance(assessment.recommended_adjustments, tuple)
    assert isinstance(assessment.periodization_recommendation.expected_outcomes, tuple)
    with pytest.raises(AttributeError):
        assessment.recommended_adjustments.append(assessment.recommended_adjustments[0])


def test_sessions_outside_window_are_ignored(engine):
    _record(engine, [make_session("old", days_ago=10, rpe=9.5, rir=0)])

    assessment = engine.perform_weekly_analysis(USER)

    assert assessment.session_count == 0
    assert assessment.recommended_adjustments == ()
    assert assessment.week_number == 1


def test_longer_window_from_config(clock):
    config = settings.model_copy(update={"history_window_days": 14})
    engine = AdaptiveTrainingEngine(clock=clock, config=config)
    _record(engine, [make_session("old", days_ago=10)])

    assert engine.perform_weekly_analysis(USER).session_count == 1


def test_phase_policy_from_config(clock):
    config = settings.model_copy(update={"phase": PhasePolicy(high_fatigue=100.0, elevated_fatigue=100.0)})
    engine = AdaptiveTrainingEngine(clock=clock, config=config)
    _record(engine, _overreached_week())

    assessment = engine.perform_weekly_analysis(USER)

    assert assessment.fatigue_index > 70
    assert assessment.deload_recommended is False
    assert assessment.periodization_recommendation.recommended_phase != PeriodizationPhase.DELOAD


def test_analysis_is_repeatable_with_fixed_clock(engine):
    _record(engine, _steady_week())
    plan = WorkoutPlan(plan_id="p1", phase="volume")

    first = engine.perform_weekly_analysis(USER, plan)
    second = engine.perform_weekly_analysis(USER, plan)

    assert first.assessment_id != second.assessment_id
    assert first.generated_at == second.generated_at == NOW
    assert first.model_dump(exclude={"assessment_id"}) == second.model_dump(exclude={"assessment_id"})
    assert plan.adjustment_count == 0


# ============================================================================
# INGESTION
# ============================================================================


def test_out_of_range_metrics_rejected(engine):
    bad = make_session("bad", rpe=11, exercises=[make_exercise(rir=6)])

    with pytest.raises(InvalidMetricRangeError) as exc_info:
        engine.record_session_metrics(USER, bad)

    assert exc_info.value.code == "INVALID_SESSION_METRICS"
    assert len(exc_info.value.details) == 2
    assert engine.repository.count(USER) == 0


def test_duplicate_session_rejected(engine):
    engine.record_session_metrics(USER, make_session("s1"))

    with pytest.raises(DuplicateSessionError):
        engine.record_session_metrics(USER, make_session("s1"))


def test_baselines_follow_recorded_sessions(engine):
    _record(engine, _steady_week())

    baselines = engine.get_baselines(USER)

    assert baselines.sessions_seen == 3
    assert baselines.rpe < 7.0


# ============================================================================
# APPLYING ADJUSTMENTS
# ============================================================================


def test_apply_recommended_adjustments(engine):
    _record(engine, _steady_week())
    plan = WorkoutPlan(plan_id="p1")
    assessment = engine.perform_weekly_analysis(USER, plan)

    updated = engine.apply_automatic_adjustments(plan, assessment.recommended_adjustments, expected_revision=0)

    assert updated.adjustment_count == len(assessment.recommended_adjustments)
    assert updated.last_adjusted == NOW
    with pytest.raises(ConcurrentMutationConflictError):
        engine.apply_automatic_adjustments(plan, assessment.recommended_adjustments, expected_revision=0)


# ============================================================================
# OVERLOAD
# ============================================================================


def test_knee_overload_report(engine):
    history = [
        make_exercise(name="Leg Press", weight=w, rpe=9, rir=0.5, form_quality=5)
        for w in (100, 100, 125, 125)
    ]
    wearable = make_wearable(recovery_score=55, hrv=40, sleep_quality=65)

    report = engine.analyze_overload_risk([], wearable, history)

    (risk,) = report.overload_risks
    assert risk.risk_level == RiskLevel.CRITICAL
    assert risk.time_to_injury_days == 7
    assert report.corrective_protocols[0].priority == ProtocolPriority.IMMEDIATE
    assert report.load_management.phase == LoadPhase.DELOAD
    assert report.load_management.load_reduction_pct == 40.0


def test_squat_overload_flags_every_loaded_region(engine):
    history = [make_exercise(weight=w, rpe=9, rir=0.5, form_quality=5) for w in (100, 100, 125, 125)]

    report = engine.analyze_overload_risk([], make_wearable(), history)

    assert [r.body_part for r in report.overload_risks] == ["lumbar_spine", "hips", "knees"]
    assert all(r.primary_cause == CAUSE_INTENSITY_FATIGUE for r in report.overload_risks)
    assert len(report.corrective_protocols) == 3


def test_no_overload_report_is_empty(engine):
    report = engine.analyze_overload_risk([], make_wearable(), [make_exercise()])

    assert report.overload_risks == ()
    assert report.corrective_protocols == ()
    assert report.load_management.phase == LoadPhase.PROGRESSION


# ============================================================================
# NEXT SESSION
# ============================================================================


def test_recommendations_without_history(engine):
    assert engine.get_next_session_recommendations(USER) == [NO_HISTORY_MESSAGE]


def test_recommendations_for_hard_poorly_slept_week(engine):
    _record(engine, [make_session(f"s{i}", days_ago=3 - i, rpe=9, sleep=5) for i in range(3)])

    recommendations = engine.get_next_session_recommendations(USER)

    assert any("reducing intensity" in r for r in recommendations)
    assert any("Prioritize rest" in r for r in recommendations)
    assert not any("usual" in r for r in recommendations)


def test_recommendations_praise_adherence(engine):
    _record(engine, [make_session(f"s{i}", days_ago=3 - i, adherence=95) for i in range(3)])

    assert engine.get_next_session_recommendations(USER) == [
        "Excellent adherence! You could try a small volume increase"
    ]


def test_recommendations_only_use_recent_sessions(engine):
    old = [make_session(f"old{i}", days_ago=10 - i, sleep=3) for i in range(3)]
    recent = [make_session(f"s{i}", days_ago=3 - i, sleep=8) for i in range(3)]
    _record(engine, old + recent)

    assert engine.get_next_session_recommendations(USER) == []


def test_recommendations_flag_effort_above_baseline(engine):
    usual = [make_session(f"u{i}", days_ago=20 - i, rpe=7) for i in range(10)]
    hard = [make_session(f"h{i}", days_ago=3 - i, rpe=9) for i in range(3)]
    _record(engine, usual + hard)

    recommendations = engine.get_next_session_recommendations(USER)

    assert any("above your usual" in r for r in recommendations)


@pytest.mark.parametrize(
    ("rpe", "rir", "expected"),
    [
        (6, 4, "back squat: try about 5% more load"),
        (9.5, 0, "back squat: reduce the load by about 5%"),
        (8, 2, "back squat: keep the current load"),
    ],
)
def test_exercise_load_suggestion(engine, rpe, rir, expected):
    _record(engine, [make_session("s1", exercises=[make_exercise(rpe=rpe, rir=rir)])])

    recommendations = engine.get_next_session_recommendations(USER, exercise_name="back squat")

    assert recommendations[-1] == expected


def test_exercise_without_recent_data(engine):
    _record(engine, [make_session("s1")])

    recommendations = engine.get_next_session_recommendations(USER, exercise_name="Deadlift")

    assert recommendations == ["No recent data for Deadlift; keep the planned load"]


def test_load_management_policy_from_config(clock):
    policy = LoadManagementPolicy(steps=[], fallback_phase=LoadPhase.MAINTENANCE, fallback_reduction_pct=15.0)
    engine = AdaptiveTrainingEngine(clock=clock, config=settings.model_copy(update={"load_management": policy}))
    history = [make_exercise(name="Leg Press", weight=w, rpe=9, rir=0.5, form_quality=5) for w in (100, 100, 125, 125)]

    report = engine.analyze_overload_risk([], make_wearable(recovery_score=55, hrv=40, sleep_quality=65), history)

    assert report.overload_risks
    assert report.load_management.phase == LoadPhase.MAINTENANCE
    assert report.load_management.load_reduction_pct == 15.0
