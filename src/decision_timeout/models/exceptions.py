"""Exceptions for models module.

This module defines exceptions raised when a draft or record would be
put into an invalid shape.
"""

from decision_timeout.exceptions import DecisionTimeoutError

__all__ = [
    "ModelError",
    "ValidationError",
    "DecisionLockedError",
    "OutcomeAlreadySetError",
]


class ModelError(DecisionTimeoutError):
    """Base exception for model errors."""

    pass


class ValidationError(ModelError):
    """Raised when input violates a draft precondition.

    Attributes:
        field: Name of the offending input (question, pros, cons, ...).
        reason: Human-readable message suitable for inline display.

    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize ValidationError.

        Args:
            field: Name of the offending input.
            reason: Human-readable message.

        """
        self.field = field
        self.reason = reason
        super().__init__(reason)


class DecisionLockedError(ModelError):
    """Raised when an outcome is rated before the lock window has passed.

    Attributes:
        record_id: The locked record.
        locked_until_epoch_ms: When the lock expires.

    """

    def __init__(self, record_id: str, locked_until_epoch_ms: int) -> None:
        """Initialize DecisionLockedError.

        Args:
            record_id: The locked record.
            locked_until_epoch_ms: When the lock expires.

        """
        self.record_id = record_id
        self.locked_until_epoch_ms = locked_until_epoch_ms
        super().__init__(
            f"Decision {record_id} is still locked until {locked_until_epoch_ms}"
        )


class OutcomeAlreadySetError(ModelError):
    """Raised when a record's outcome is rated a second time."""

    def __init__(self, record_id: str, outcome: str) -> None:
        """Initialize OutcomeAlreadySetError.

        Args:
            record_id: The record that was already rated.
            outcome: The existing rating.

        """
        self.record_id = record_id
        self.outcome = outcome
        super().__init__(f"Decision {record_id} was already rated '{outcome}'")
