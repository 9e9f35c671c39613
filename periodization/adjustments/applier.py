"""Plan adjustment application.

Applies generated adjustments to a plan as an append-only, timestamped log.
The log is the plan's audit trail: entries are frozen and never removed or
rewritten, only superseded by later entries.

Appends to the same plan are serialized with a per-plan lock. A plan's lock
lives only while some caller holds or waits on it, so the registry stays as
small as the number of plans being written right now. Callers that read a
plan, decide, and write later can pass ``expected_revision`` to detect a write
that happened in between.
"""

import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from loguru import logger

from periodization.core.clock import Clock, utc_now
from periodization.errors import ConcurrentMutationConflictError
from periodization.schemas.assessment import AppliedAdjustment, TrainingAdjustment
from periodization.schemas.plan import WorkoutPlan


@dataclass
class _PlanLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class PlanAdjustmentApplier:
    """Single-writer appender for plan adjustment logs."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._registry_lock = threading.Lock()
        self._plan_locks: dict[str, _PlanLock] = {}

    @contextmanager
    def _locked(self, plan_id: str) -> Iterator[None]:
        """Hold the plan's lock; drop its registry entry once nobody needs it."""
        with self._registry_lock:
            entry = self._plan_locks.setdefault(plan_id, _PlanLock())
            entry.holders += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._plan_locks[plan_id]

    def apply(
        self,
        plan: WorkoutPlan,
        adjustments: Sequence[TrainingAdjustment],
        expected_revision: int | None = None,
    ) -> WorkoutPlan:
        """Append adjustments to the plan's log.

        Args:
            plan: Plan to update in place
            adjustments: Adjustments to record, in order
            expected_revision: Revision the caller read; checked before writing

        Returns:
            The same plan object, updated

        Raises:
            ConcurrentMutationConflictError: If expected_revision is stale
        """
        with self._locked(plan.plan_id):
            if expected_revision is not None and expected_revision != plan.revision:
                logger.warning(
                    f"Rejected adjustments for plan {plan.plan_id}: "
                    f"revision {plan.revision}, caller expected {expected_revision}"
                )
                raise ConcurrentMutationConflictError(plan.plan_id, expected_revision, plan.revision)

            if not adjustments:
                logger.debug(f"No adjustments to apply for plan {plan.plan_id}")
                return plan

            applied_at = self._clock()
            for adjustment in adjustments:
                entry = AppliedAdjustment(**adjustment.model_dump(exclude={"applied_at"}), applied_at=applied_at)
                plan.adjustments.append(entry)

            plan.adjustment_count += len(adjustments)
            plan.last_adjusted = applied_at
            plan.revision += 1

        logger.info(
            f"Applied {len(adjustments)} adjustments to plan {plan.plan_id} "
            f"(total={plan.adjustment_count}, revision={plan.revision})"
        )
        return plan
