"""Test doubles shared across the decision-timeout test suite."""

from decision_timeout.models.snapshot import TimerSnapshot
from decision_timeout.storage.exceptions import SnapshotError, StorageError
from decision_timeout.storage.rows import DuplicateRowError, InMemoryRowStore, Row

__all__ = [
    "FlakyRowStore",
    "FailingSnapshotStore",
    "LostAckRowStore",
    "PhantomDuplicateRowStore",
]


class FlakyRowStore(InMemoryRowStore):
    """Row store whose first N inserts fail before touching any data."""

    def __init__(self, failures: int = 1) -> None:
        super().__init__()
        self.failures_left = failures
        self.insert_calls = 0

    def insert(self, row: Row) -> Row:
        self.insert_calls += 1
        if self.failures_left > 0:
            self.failures_left -= 1
            raise StorageError("connection reset")
        return super().insert(row)


class LostAckRowStore(InMemoryRowStore):
    """Row store whose first insert succeeds but reports failure."""

    def __init__(self) -> None:
        super().__init__()
        self.lose_next_ack = True

    def insert(self, row: Row) -> Row:
        stored = super().insert(row)
        if self.lose_next_ack:
            self.lose_next_ack = False
            raise StorageError("timeout waiting for response")
        return stored


class PhantomDuplicateRowStore(InMemoryRowStore):
    """Row store that rejects every insert as a duplicate without storing it."""

    def insert(self, row: Row) -> Row:
        raise DuplicateRowError(f"Row {row['id']} already exists")

class FailingSnapshotStore:
    """Snapshot store where every write fails."""

    def __init__(self) -> None:
        self.save_attempts = 0

    def save_snapshot(self, snapshot: TimerSnapshot) -> None:
        self.save_attempts += 1
        raise SnapshotError("disk full")

    def load_snapshot(self, user_id: str) -> TimerSnapshot | None:
        return None

    def clear_snapshot(self, user_id: str) -> None:
        raise SnapshotError("disk full")
