"""Plan and user profile schemas consumed from collaborators.

The engine treats a WorkoutPlan as opaque apart from its adjustment log:
any extra fields the plan-storage layer sends are kept untouched.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from periodization.schemas.assessment import AppliedAdjustment


class WorkoutPlan(BaseModel):
    """Long-lived training plan with an append-only adjustment log."""

    model_config = ConfigDict(extra="allow")

    plan_id: str
    phase: str | None = Field(default=None, description="Current periodization phase label, if tracked")
    adjustments: list[AppliedAdjustment] = Field(default_factory=list)
    adjustment_count: int = Field(default=0, ge=0)
    last_adjusted: datetime | None = None
    revision: int = Field(default=0, ge=0, description="Bumped on every applied batch")


class UserData(BaseModel):
    """Profile fields from the user-profile collaborator. Used as labels only."""

    model_config = ConfigDict(frozen=True)

    weight: float | None = None
    age: int | None = None
    goals: tuple[str, ...] = Field(default_factory=tuple)
    fitness_level: str = "intermediate"
