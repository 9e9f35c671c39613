"""Developer CLI for the periodization engine.

Runs the engine offline against JSON fixtures so analyses can be inspected
without the rest of the system:

    periodization analyze fixtures/week.json --now 2024-03-08T12:00:00
    periodization overload fixtures/week.json
    periodization recommend fixtures/week.json --exercise "Back Squat"

analyze and recommend record the fixture's sessions into a fresh in-memory
history first, through the same validation path used in production. overload
keeps no history, so it runs the same range checks on its sessions and
exercise records directly.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.text import Text

from periodization.core.clock import fixed_clock, utc_now
from periodization.core.logger import setup_logger
from periodization.engine import AdaptiveTrainingEngine
from periodization.errors import EngineError
from periodization.schemas.metrics import ExercisePerformance, SessionMetrics
from periodization.schemas.overload import WearableSnapshot
from periodization.schemas.plan import UserData, WorkoutPlan
from periodization.schemas.validation import validate_exercise_history, validate_session_metrics

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="periodization",
    help="Adaptive periodization engine - offline analysis of session fixtures",
    add_completion=False,
)

DEFAULT_USER_ID = "cli-user"


def _setup_logging(debug: bool = False) -> None:
    setup_logger(level="DEBUG" if debug else None)


def _fail(title: str, error: Exception) -> typer.Exit:
    # error text may contain brackets, so it must not go through markup parsing
    console.print(
        Panel(
            Text.assemble((title, "bold red"), "\n", str(error)),
            border_style="red",
        )
    )
    logger.error(f"{title}: {error}")
    return typer.Exit(code=1)


def _load_fixture(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise _fail(f"Could not read fixture {path}", e) from e
    if not isinstance(data, dict):
        raise _fail(f"Invalid fixture {path}", ValueError("top-level JSON value must be an object"))
    return data


def _parse_sessions(data: dict[str, Any]) -> list[SessionMetrics]:
    try:
        return [SessionMetrics.model_validate(raw) for raw in data.get("sessions", [])]
    except ValidationError as e:
        raise _fail("Invalid session data", e) from e


def _record_all(engine: AdaptiveTrainingEngine, user_id: str, sessions: list[SessionMetrics]) -> None:
    try:
        for session in sessions:
            engine.record_session_metrics(user_id, session)
    except EngineError as e:
        raise _fail("Session rejected", e) from e


def _parse_now(now: str | None) -> datetime | None:
    if now is None:
        return None
    try:
        return datetime.fromisoformat(now)
    except ValueError as e:
        raise _fail(f"Invalid --now value '{now}'", e) from e


def _print_model(title: str, model: BaseModel) -> None:
    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    console.print(JSON(model.model_dump_json(indent=2)))


@app.command()
def analyze(
    fixture: Path = typer.Argument(..., help="JSON file with user_id, sessions, optional plan and user"),
    apply: bool = typer.Option(False, "--apply", help="Apply the recommended adjustments to the plan"),
    now: str | None = typer.Option(None, "--now", help="Analysis time (ISO 8601); defaults to the current time"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Record the fixture's sessions and run the weekly analysis."""
    _setup_logging(debug=debug)

    data = _load_fixture(fixture)
    moment = _parse_now(now)
    user_id = data.get("user_id", DEFAULT_USER_ID)
    sessions = _parse_sessions(data)

    try:
        plan = WorkoutPlan.model_validate(data["plan"]) if data.get("plan") else None
        user_data = UserData.model_validate(data["user"]) if data.get("user") else None
    except ValidationError as e:
        raise _fail("Invalid plan or user data", e) from e

    engine = AdaptiveTrainingEngine(clock=fixed_clock(moment) if moment else utc_now)
    _record_all(engine, user_id, sessions)

    assessment = engine.perform_weekly_analysis(user_id, plan, user_data)
    _print_model("Weekly assessment", assessment)

    if apply:
        plan = plan or WorkoutPlan(plan_id=f"{user_id}-plan")
        try:
            updated = engine.apply_automatic_adjustments(
                plan,
                assessment.recommended_adjustments,
                expected_revision=plan.revision,
            )
        except EngineError as e:
            raise _fail("Could not apply adjustments", e) from e
        _print_model("Updated plan", updated)

    console.print(
        f"\n[green]✓ Readiness {assessment.overall_readiness}, "
        f"{len(assessment.recommended_adjustments)} adjustments, "
        f"next phase: {assessment.periodization_recommendation.recommended_phase}[/green]"
    )


@app.command()
def overload(
    fixture: Path = typer.Argument(..., help="JSON file with sessions, wearable and optional exercise_history"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run the biomechanical overload analysis on the fixture."""
    _setup_logging(debug=debug)

    data = _load_fixture(fixture)
    sessions = _parse_sessions(data)

    try:
        wearable = WearableSnapshot.model_validate(data.get("wearable"))
        if "exercise_history" in data:
            exercise_history = [ExercisePerformance.model_validate(raw) for raw in data["exercise_history"]]
        else:
            exercise_history = [record for session in sessions for record in session.exercises]
    except ValidationError as e:
        raise _fail("Invalid wearable or exercise data", e) from e

    try:
        for session in sessions:
            validate_session_metrics(session)
        validate_exercise_history(exercise_history)
    except EngineError as e:
        raise _fail("Overload input rejected", e) from e

    engine = AdaptiveTrainingEngine()
    report = engine.analyze_overload_risk(sessions, wearable, exercise_history)
    _print_model("Overload report", report)

    if report.overload_risks:
        worst = report.overload_risks[0]
        console.print(
            f"\n[bold red]Highest risk: {worst.body_part} ({worst.risk_level}, score {worst.risk_score:.0f})[/bold red]"
        )
    else:
        console.print("\n[green]✓ No regional overload detected[/green]")


@app.command()
def recommend(
    fixture: Path = typer.Argument(..., help="JSON file with user_id and sessions"),
    exercise: str | None = typer.Option(None, "--exercise", "-e", help="Exercise to suggest a load for"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Print next-session recommendations for the fixture's user."""
    _setup_logging(debug=debug)

    data = _load_fixture(fixture)
    user_id = data.get("user_id", DEFAULT_USER_ID)
    sessions = _parse_sessions(data)

    engine = AdaptiveTrainingEngine()
    _record_all(engine, user_id, sessions)

    console.print("\n[bold cyan]Next session[/bold cyan]")
    for recommendation in engine.get_next_session_recommendations(user_id, exercise_name=exercise):
        console.print(f"  • {recommendation}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
