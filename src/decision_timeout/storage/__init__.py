"""Snapshot and record storage for decision-timeout."""

from decision_timeout.storage.exceptions import (
    RecordNotFoundError,
    RecordPersistenceError,
    SnapshotError,
    StorageError,
)
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.storage.rows import (
    DuplicateRowError,
    InMemoryRowStore,
    JsonFileRowStore,
    RowStoreClient,
)
from decision_timeout.storage.snapshots import (
    InMemorySnapshotStore,
    JsonFileSnapshotStore,
    SnapshotStore,
)

__all__ = [
    "DecisionRepository",
    "DuplicateRowError",
    "InMemoryRowStore",
    "InMemorySnapshotStore",
    "JsonFileRowStore",
    "JsonFileSnapshotStore",
    "RecordNotFoundError",
    "RecordPersistenceError",
    "RowStoreClient",
    "SnapshotError",
    "SnapshotStore",
    "StorageError",
]
