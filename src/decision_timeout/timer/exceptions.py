"""Exceptions for the timer module.

This module defines exceptions related to the decision timer lifecycle
and state transitions.
"""

from decision_timeout.exceptions import DecisionTimeoutError

__all__ = ["TimerError", "IllegalTransitionError"]


class TimerError(DecisionTimeoutError):
    """Base exception for decision timer errors."""

    pass


class IllegalTransitionError(TimerError):
    """Raised when an operation is not allowed in the timer's current state.

    Attributes:
        operation: The rejected operation (e.g. "add_pro", "extend").
        state: The state the timer was in.
        reason: Optional extra detail.

    """

    def __init__(self, operation: str, state: str, reason: str | None = None) -> None:
        """Initialize IllegalTransitionError.

        Args:
            operation: The rejected operation.
            state: The state the timer was in.
            reason: Optional extra detail.

        """
        self.operation = operation
        self.state = state
        self.reason = reason
        message = f"Cannot {operation} while timer is {state}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
