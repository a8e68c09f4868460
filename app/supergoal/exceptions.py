"""Super Goal domain exceptions.

Each class sets ``http_status_code`` and ``error_code``; the handler in
``app.main`` turns them into ``{"error": {"code", "message"}}`` responses.
"""

from __future__ import annotations


class SuperGoalError(Exception):
    """Base exception for all Super Goal errors."""

    http_status_code: int = 400
    error_code: str = "SUPER_GOAL_ERROR"

    def __init__(self, message: str = "A Super Goal error occurred"):
        self.message = message
        super().__init__(self.message)


class SuperGoalNotFoundError(SuperGoalError):
    http_status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, goal_id: str):
        super().__init__(f"Super Goal with id '{goal_id}' not found")


class NotASuperGoalError(SuperGoalError):
    http_status_code = 409
    error_code = "NOT_A_SUPER_GOAL"

    def __init__(self, goal_id: str):
        super().__init__(f"Goal '{goal_id}' is not a Super Goal")


class InvalidMembershipError(SuperGoalError):
    http_status_code = 400
    error_code = "INVALID_MEMBERSHIP"


class PersistenceError(SuperGoalError):
    """The store rejected a write; the previously committed state still stands."""

    http_status_code = 503
    error_code = "PERSISTENCE_ERROR"
