"""Clock and identifier sources.

Business logic never calls ``datetime.now()`` or ``uuid.uuid4()`` directly.
Both are injected so an analysis run can be replayed exactly in tests.
"""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]
IdGenerator = Callable[[], str]


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def generate_assessment_id() -> str:
    """Generate a new assessment ID.

    Returns:
        Assessment ID string in format: wa_<UUID>
    """
    return f"wa_{uuid.uuid4()}"


def fixed_clock(moment: datetime) -> Clock:
    """Build a clock that always returns ``moment`` (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    def _now() -> datetime:
        return moment

    return _now


def sequential_ids(prefix: str = "wa") -> IdGenerator:
    """Build a deterministic id generator: ``wa_1``, ``wa_2``, ..."""
    counter = 0

    def _next() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}_{counter}"

    return _next


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
