"""Corrective protocol library and generation.

Each detected risk maps to one protocol built from a fixed, hand-curated
exercise list for its region. Nothing is generated outside this library.
"""

from periodization.schemas.overload import (
    CorrectiveExercise,
    CorrectiveProtocol,
    ExerciseDosage,
    OverloadRisk,
    ProtocolPriority,
    ProtocolType,
    RiskLevel,
)

CORRECTIVE_LIBRARY: dict[str, tuple[CorrectiveExercise, ...]] = {
    "shoulders": (
        CorrectiveExercise(
            name="Posterior capsule mobilization",
            category="mobilization",
            description="Gentle stretch of the posterior shoulder capsule",
            purpose="Restore capsular flexibility and reduce tension",
            target_tissues=("joint capsule", "posterior deltoid"),
            dosage=ExerciseDosage(sets=3, reps="30 s", hold_seconds=30, rest_seconds=30, frequency="2x/day"),
            equipment="towel or band",
        ),
        CorrectiveExercise(
            name="Rotator cuff strengthening",
            category="strengthening",
            description="Resisted external rotation",
            purpose="Restore muscular balance and dynamic stability",
            target_tissues=("infraspinatus", "teres minor", "supraspinatus"),
            dosage=ExerciseDosage(sets=3, reps=15, rest_seconds=60, frequency="every other day"),
            equipment="resistance band",
        ),
    ),
    "lumbar_spine": (
        CorrectiveExercise(
            name="Deep core activation",
            category="activation",
            description="Diaphragmatic breathing with transversus abdominis bracing",
            purpose="Restore segmental lumbar stability",
            target_tissues=("transversus abdominis", "multifidus", "diaphragm"),
            dosage=ExerciseDosage(sets=3, reps=10, hold_seconds=10, rest_seconds=45, frequency="daily"),
            equipment="none",
        ),
        CorrectiveExercise(
            name="Hip mobilization",
            category="mobilization",
            description="Controlled hip flexion and extension",
            purpose="Reduce lumbar compensation for stiff hips",
            target_tissues=("hip flexors", "glutes", "hamstrings"),
            dosage=ExerciseDosage(sets=2, reps=15, rest_seconds=30, frequency="2x/day"),
            equipment="none",
        ),
    ),
    "hips": (
        CorrectiveExercise(
            name="Gluteus medius activation",
            category="activation",
            description="Resisted lateral abduction",
            purpose="Improve pelvic stability and hip control",
            target_tissues=("gluteus medius", "gluteus minimus"),
            dosage=ExerciseDosage(sets=3, reps=15, rest_seconds=45, frequency="every other day"),
            equipment="resistance band",
        ),
    ),
    "knees": (
        CorrectiveExercise(
            name="Gluteus maximus strengthening",
            category="strengthening",
            description="Progressive glute bridges",
            purpose="Prevent knee valgus and improve hip control",
            target_tissues=("gluteus maximus", "hamstrings"),
            dosage=ExerciseDosage(sets=3, reps=15, rest_seconds=45, frequency="every other day"),
            equipment="none",
        ),
        CorrectiveExercise(
            name="Quadriceps stretch",
            category="mobilization",
            description="Standing quadriceps stretch with support",
            purpose="Reduce anterior tension and improve flexibility",
            target_tissues=("rectus femoris", "vastus lateralis"),
            dosage=ExerciseDosage(sets=3, reps="30 s", hold_seconds=30, rest_seconds=30, frequency="2x/day"),
            equipment="none",
        ),
    ),
}

BIOMECHANICAL_GOALS: dict[str, tuple[str, ...]] = {
    "shoulders": (
        "Restore full range of motion",
        "Improve scapular stability",
        "Balance rotational strength",
    ),
    "lumbar_spine": (
        "Optimize core activation",
        "Improve hip mobility",
        "Reduce postural compensations",
    ),
    "hips": (
        "Restore mobility in all planes",
        "Strengthen pelvic stabilizers",
        "Improve neuromuscular control",
    ),
    "knees": (
        "Optimize alignment during movement",
        "Strengthen the posterior chain",
        "Improve eccentric control",
    ),
}
DEFAULT_GOALS = ("Optimize biomechanical function",)

PRIORITY_BY_LEVEL = {
    RiskLevel.CRITICAL: ProtocolPriority.IMMEDIATE,
    RiskLevel.HIGH: ProtocolPriority.HIGH,
    RiskLevel.MODERATE: ProtocolPriority.MEDIUM,
    RiskLevel.LOW: ProtocolPriority.LOW,
}

TIMELINE_BY_LEVEL = {
    RiskLevel.CRITICAL: "2-4 weeks for initial improvement",
    RiskLevel.HIGH: "3-6 weeks for resolution",
    RiskLevel.MODERATE: "4-8 weeks for normalization",
    RiskLevel.LOW: "2-4 weeks for prevention",
}

# (keywords, type) checked in order against the lower-cased primary cause
PROTOCOL_TYPE_KEYWORDS: list[tuple[tuple[str, ...], ProtocolType]] = [
    (("technique", "form"), ProtocolType.MOTOR_CONTROL),
    (("recovery", "fatigue"), ProtocolType.RECOVERY),
    (("intensity",), ProtocolType.STABILITY),
]


def determine_protocol_type(primary_cause: str) -> ProtocolType:
    cause = primary_cause.lower()
    for keywords, protocol_type in PROTOCOL_TYPE_KEYWORDS:
        if any(keyword in cause for keyword in keywords):
            return protocol_type
    return ProtocolType.MOBILITY


def create_protocol(risk: OverloadRisk) -> CorrectiveProtocol:
    return CorrectiveProtocol(
        priority=PRIORITY_BY_LEVEL[risk.risk_level],
        protocol_type=determine_protocol_type(risk.primary_cause),
        target_structure=risk.body_part,
        exercises=CORRECTIVE_LIBRARY.get(risk.body_part, ()),
        expected_timeline=TIMELINE_BY_LEVEL[risk.risk_level],
        biomechanical_goals=BIOMECHANICAL_GOALS.get(risk.body_part, DEFAULT_GOALS),
    )


def generate_corrective_protocols(risks: list[OverloadRisk]) -> list[CorrectiveProtocol]:
    """One protocol per risk, in the same order as the risks."""
    return [create_protocol(risk) for risk in risks]
