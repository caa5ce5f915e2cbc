"""Snapshot stores for in-progress countdowns.

Each user has at most one snapshot; saving overwrites the previous one.
"""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from decision_timeout.logging_config import get_logger
from decision_timeout.models.snapshot import TimerSnapshot
from decision_timeout.storage.exceptions import SnapshotError
from decision_timeout.storage.files import write_json_atomic

__all__ = ["SnapshotStore", "InMemorySnapshotStore", "JsonFileSnapshotStore"]

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class SnapshotStore(Protocol):
    """Per-user key-value store for the running countdown."""

    def save_snapshot(self, snapshot: TimerSnapshot) -> None:
        """Write the snapshot, replacing any previous one for the user."""
        ...

    def load_snapshot(self, user_id: str) -> TimerSnapshot | None:
        """Read the user's snapshot, or None if there is none."""
        ...

    def clear_snapshot(self, user_id: str) -> None:
        """Delete the user's snapshot if present."""
        ...


class InMemorySnapshotStore:
    """Snapshot store kept in a dict; lost when the process exits."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._snapshots: dict[str, TimerSnapshot] = {}

    def save_snapshot(self, snapshot: TimerSnapshot) -> None:
        """Write the snapshot, replacing any previous one for the user."""
        self._snapshots[snapshot.user_id] = snapshot

    def load_snapshot(self, user_id: str) -> TimerSnapshot | None:
        """Read the user's snapshot, or None if there is none."""
        return self._snapshots.get(user_id)

    def clear_snapshot(self, user_id: str) -> None:
        """Delete the user's snapshot if present."""
        self._snapshots.pop(user_id, None)

    def __len__(self) -> int:
        """Return the number of stored snapshots."""
        return len(self._snapshots)


class JsonFileSnapshotStore:
    """Snapshot store writing one JSON file per user.

    Files are replaced atomically so a crash mid-write leaves either the
    old snapshot or the new one, never a torn file.

    Attributes:
        directory: Folder holding the snapshot files.

    """

    def __init__(self, directory: Path) -> None:
        """Initialize the store.

        Args:
            directory: Folder for snapshot files; created on first write.

        """
        self.directory = directory

    def path_for(self, user_id: str) -> Path:
        """Get the file path for a user's snapshot.

        The readable prefix is lossy, so a digest of the exact id keeps
        ids such as "a/b" and "a_b" in separate files.
        """
        safe = _UNSAFE_CHARS.sub("_", user_id)
        digest = hashlib.sha256(user_id.encode("utf-8")).hexdigest()[:16]
        return self.directory / f"{safe}-{digest}.json"

    def save_snapshot(self, snapshot: TimerSnapshot) -> None:
        """Write the snapshot, replacing any previous one for the user.

        Raises:
            SnapshotError: If the file cannot be written.

        """
        path = self.path_for(snapshot.user_id)
        try:
            write_json_atomic(path, snapshot.model_dump(mode="json"))
        except OSError as e:
            raise SnapshotError(f"Failed to save snapshot to {path}: {e}") from e

        logger.debug("snapshot_saved", user_id=snapshot.user_id, path=str(path))

    def load_snapshot(self, user_id: str) -> TimerSnapshot | None:
        """Read the user's snapshot.

        Returns:
            The snapshot, or None if there is none.

        Raises:
            SnapshotError: If the file exists but cannot be read or parsed.

        """
        path = self.path_for(user_id)
        if not path.exists():
            return None
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            snapshot = TimerSnapshot.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise SnapshotError(f"Failed to load snapshot from {path}: {e}") from e

        if snapshot.user_id != user_id:
            # Never hand one user another user's countdown
            logger.warning(
                "snapshot_user_mismatch",
                user_id=user_id,
                stored_user_id=snapshot.user_id,
                path=str(path),
            )
            return None
        return snapshot

    def clear_snapshot(self, user_id: str) -> None:
        """Delete the user's snapshot if present.

        Raises:
            SnapshotError: If the file exists but cannot be removed.

        """
        path = self.path_for(user_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise SnapshotError(f"Failed to clear snapshot {path}: {e}") from e
        logger.debug("snapshot_cleared", user_id=user_id)
