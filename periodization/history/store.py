"""Metrics history repository.

Append-only per-user timeline of session metrics plus slow-moving baselines.
The engine depends on the MetricsHistoryRepository protocol; the in-memory
implementation below is what tests and the CLI use. A persistent backend only
has to honour the same five methods.

Reads return copies taken under the store lock, so an analysis never sees a
session that is halfway through being appended.
"""

import threading
from collections import defaultdict
from datetime import datetime
from typing import Protocol

from loguru import logger

from periodization.errors import DuplicateSessionError
from periodization.schemas.metrics import MetricBaselines, SessionMetrics


class MetricsHistoryRepository(Protocol):
    """Per-user session history, keyed by user id."""

    def append(self, user_id: str, metrics: SessionMetrics) -> None: ...

    def window(self, user_id: str, since: datetime) -> list[SessionMetrics]: ...

    def recent(self, user_id: str, limit: int) -> list[SessionMetrics]: ...

    def count(self, user_id: str) -> int: ...

    def baselines(self, user_id: str) -> MetricBaselines: ...


class InMemoryMetricsHistory:
    """Thread-safe in-memory MetricsHistoryRepository."""

    def __init__(self, ema_weight: float = 0.1) -> None:
        if not 0.0 < ema_weight <= 1.0:
            raise ValueError(f"ema_weight must be in (0, 1], got {ema_weight}")
        self._ema_weight = ema_weight
        self._lock = threading.Lock()
        self._sessions: dict[str, list[SessionMetrics]] = defaultdict(list)
        self._session_ids: dict[str, set[str]] = defaultdict(set)
        self._baselines: dict[str, MetricBaselines] = {}

    def append(self, user_id: str, metrics: SessionMetrics) -> None:
        """Append a session and fold it into the user's baselines."""
        with self._lock:
            if metrics.session_id in self._session_ids[user_id]:
                raise DuplicateSessionError(user_id, metrics.session_id)

            self._sessions[user_id].append(metrics)
            self._session_ids[user_id].add(metrics.session_id)
            current = self._baselines.get(user_id, MetricBaselines())
            self._baselines[user_id] = current.updated(metrics, self._ema_weight)
            history_size = len(self._sessions[user_id])

        logger.debug(f"Appended session {metrics.session_id} for user {user_id} (history={history_size})")

    def window(self, user_id: str, since: datetime) -> list[SessionMetrics]:
        """Sessions dated at or after ``since``, in recording order."""
        with self._lock:
            return [m for m in self._sessions.get(user_id, []) if m.date >= since]

    def recent(self, user_id: str, limit: int) -> list[SessionMetrics]:
        """The last ``limit`` recorded sessions, oldest first."""
        if limit <= 0:
            return []
        with self._lock:
            return list(self._sessions.get(user_id, [])[-limit:])

    def count(self, user_id: str) -> int:
        with self._lock:
            return len(self._sessions.get(user_id, []))

    def baselines(self, user_id: str) -> MetricBaselines:
        """Current baselines; seed values for users with no history."""
        with self._lock:
            return self._baselines.get(user_id, MetricBaselines())
