"""Domain-specific exceptions for storage.

This module defines exceptions for snapshot and record storage failures.
"""

from decision_timeout.exceptions import DecisionTimeoutError

__all__ = [
    "StorageError",
    "SnapshotError",
    "RecordPersistenceError",
    "RecordNotFoundError",
]


class StorageError(DecisionTimeoutError):
    """Exception for storage failures."""

    pass


class SnapshotError(StorageError):
    """Exception for local snapshot read/write failures."""

    pass


class RecordPersistenceError(StorageError):
    """Raised when a decision record could not be written.

    The record is unchanged and the write may be retried.

    Attributes:
        record_id: The record that failed to persist.
        reason: Why the write failed.

    """

    def __init__(self, record_id: str, reason: str) -> None:
        """Initialize RecordPersistenceError.

        Args:
            record_id: The record that failed to persist.
            reason: Why the write failed.

        """
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Failed to save decision {record_id}: {reason}")


class RecordNotFoundError(StorageError):
    """Raised when a record does not exist for the requesting user."""

    def __init__(self, record_id: str) -> None:
        """Initialize RecordNotFoundError."""
        self.record_id = record_id
        super().__init__(f"Decision {record_id} not found")
