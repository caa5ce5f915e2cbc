"""Row-store clients used for durable decision records.

Rows are plain JSON-compatible dicts with a string "id" key. The
protocol mirrors a thin hosted-database client: insert, update by id,
and equality-filtered query.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Protocol

from decision_timeout.logging_config import get_logger
from decision_timeout.storage.exceptions import StorageError
from decision_timeout.storage.files import write_json_atomic

__all__ = [
    "Row",
    "RowStoreClient",
    "DuplicateRowError",
    "InMemoryRowStore",
    "JsonFileRowStore",
]

logger = get_logger(__name__)

Row = dict[str, Any]


class DuplicateRowError(StorageError):
    """Raised when inserting a row whose id already exists."""

    pass


class RowStoreClient(Protocol):
    """Minimal row-store interface."""

    def insert(self, row: Row) -> Row:
        """Insert a row and return the stored copy."""
        ...

    def update(self, row_id: str, fields: Row, filters: Row | None = None) -> Row | None:
        """Update fields of the row matching id and filters; None if no match."""
        ...

    def query(self, filters: Row) -> list[Row]:
        """Return rows whose fields equal every filter value."""
        ...

    def delete(self, row_id: str, filters: Row | None = None) -> bool:
        """Delete the row matching id and filters; True if one was removed."""
        ...


def _matches(row: Row, filters: Row) -> bool:
    return all(row.get(key) == value for key, value in filters.items())


class InMemoryRowStore:
    """Row store held in memory, keyed by id."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._rows: dict[str, Row] = {}

    def insert(self, row: Row) -> Row:
        """Insert a row and return the stored copy.

        Raises:
            DuplicateRowError: If a row with the same id exists.

        """
        row_id = row["id"]
        if row_id in self._rows:
            raise DuplicateRowError(f"Row {row_id} already exists")
        self._rows[row_id] = copy.deepcopy(row)
        return copy.deepcopy(self._rows[row_id])

    def update(self, row_id: str, fields: Row, filters: Row | None = None) -> Row | None:
        """Update fields of the row matching id and filters."""
        row = self._rows.get(row_id)
        if row is None or not _matches(row, filters or {}):
            return None
        row.update(copy.deepcopy(fields))
        return copy.deepcopy(row)

    def query(self, filters: Row) -> list[Row]:
        """Return rows whose fields equal every filter value."""
        return [copy.deepcopy(r) for r in self._rows.values() if _matches(r, filters)]

    def delete(self, row_id: str, filters: Row | None = None) -> bool:
        """Delete the row matching id and filters."""
        row = self._rows.get(row_id)
        if row is None or not _matches(row, filters or {}):
            return False
        del self._rows[row_id]
        return True

    def __len__(self) -> int:
        """Return the number of stored rows."""
        return len(self._rows)


class JsonFileRowStore:
    """Row store persisted as a single JSON array file.

    Every write rewrites the file atomically.

    Attributes:
        path: Location of the JSON file.

    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: JSON file location; created on first write.

        """
        self.path = path

    def insert(self, row: Row) -> Row:
        """Insert a row and return the stored copy.

        Raises:
            DuplicateRowError: If a row with the same id exists.
            StorageError: If the file cannot be read or written.

        """
        rows = self._read()
        if any(r.get("id") == row["id"] for r in rows):
            raise DuplicateRowError(f"Row {row['id']} already exists")
        rows.append(row)
        self._write(rows)
        return copy.deepcopy(row)

    def update(self, row_id: str, fields: Row, filters: Row | None = None) -> Row | None:
        """Update fields of the row matching id and filters."""
        rows = self._read()
        for row in rows:
            if row.get("id") == row_id and _matches(row, filters or {}):
                row.update(fields)
                self._write(rows)
                return copy.deepcopy(row)
        return None

    def query(self, filters: Row) -> list[Row]:
        """Return rows whose fields equal every filter value."""
        return [r for r in self._read() if _matches(r, filters)]

    def delete(self, row_id: str, filters: Row | None = None) -> bool:
        """Delete the row matching id and filters."""
        rows = self._read()
        kept = [
            r for r in rows
            if not (r.get("id") == row_id and _matches(r, filters or {}))
        ]
        if len(kept) == len(rows):
            return False
        self._write(kept)
        return True

    def _read(self) -> list[Row]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read rows from {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Expected a JSON array in {self.path}")
        return data

    def _write(self, rows: list[Row]) -> None:
        try:
            write_json_atomic(self.path, rows)
        except OSError as e:
            raise StorageError(f"Failed to write rows to {self.path}: {e}") from e
        logger.debug("rows_written", path=str(self.path), count=len(rows))
