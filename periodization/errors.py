"""Domain-specific errors for the periodization engine.

Missing data is not an error here: every analyzer has a neutral default for an
empty window. Only bad input and plan write conflicts raise.
"""


class EngineError(Exception):
    """Base exception for all engine errors."""

    pass


class InvalidMetricRangeError(EngineError, ValueError):
    """Raised when session metrics contain values outside their documented domain.

    Attributes:
        code: Error code (e.g., "INVALID_SESSION_METRICS")
        details: One entry per violated field, e.g. "rpe=11.0 outside [1, 10]"
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class DuplicateSessionError(EngineError):
    """Raised when a session id is recorded twice for the same user."""

    def __init__(self, user_id: str, session_id: str):
        self.user_id = user_id
        self.session_id = session_id
        super().__init__(f"Session {session_id} already recorded for user {user_id}")


class ConcurrentMutationConflictError(EngineError):
    """Raised when a plan was modified after the caller last read it.

    Attributes:
        plan_id: Plan being written
        expected_revision: Revision the caller based its write on
        actual_revision: Revision found on the plan
    """

    def __init__(self, plan_id: str, expected_revision: int, actual_revision: int):
        self.plan_id = plan_id
        self.expected_revision = expected_revision
        self.actual_revision = actual_revision
        super().__init__(
            f"Plan {plan_id} is at revision {actual_revision}, expected {expected_revision}"
        )
