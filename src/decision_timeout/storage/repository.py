"""Durable storage of decision records.

The repository sits on a RowStoreClient and enforces the record rules:
writes are idempotent by id, reads are scoped to one user, and an
outcome can be rated once, after the lock window.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from decision_timeout.logging_config import get_logger
from decision_timeout.models.enums import Outcome
from decision_timeout.models.record import DecisionRecord
from decision_timeout.storage.exceptions import (
    RecordNotFoundError,
    RecordPersistenceError,
    StorageError,
)
from decision_timeout.storage.rows import DuplicateRowError, RowStoreClient

__all__ = ["DecisionRepository"]

logger = get_logger(__name__)


class DecisionRepository:
    """User-scoped access to DecisionRecords.

    Attributes:
        rows: Underlying row store.

    """

    def __init__(self, rows: RowStoreClient) -> None:
        """Initialize the repository.

        Args:
            rows: Row store the records live in.

        """
        self.rows = rows

    def persist_record(self, record: DecisionRecord) -> DecisionRecord:
        """Write a record, at most once per id.

        Calling again with a record whose id is already stored returns the
        stored record without writing, so retries after a failure that
        actually reached the store never create duplicates.

        Args:
            record: The record to store.

        Returns:
            The stored record.

        Raises:
            RecordPersistenceError: If the store could not be reached or
                rejected the write.

        """
        try:
            existing = self.rows.query({"id": record.id})
            if existing:
                logger.info("record_already_persisted", record_id=record.id)
                return self._to_record(existing[0])
            try:
                stored = self.rows.insert(record.model_dump(mode="json"))
            except DuplicateRowError as e:
                # Lost a race with another writer of the same id
                winners = self.rows.query({"id": record.id})
                if not winners:
                    raise StorageError(
                        f"Row {record.id} reported as duplicate but not found"
                    ) from e
                stored = winners[0]
        except (StorageError, OSError) as e:
            logger.error(
                "record_persist_failed",
                record_id=record.id,
                user_id=record.user_id,
                error=str(e),
            )
            raise RecordPersistenceError(record.id, str(e)) from e

        logger.info(
            "record_persisted",
            record_id=record.id,
            user_id=record.user_id,
            result=record.result.value,
        )
        return self._to_record(stored)

    def get(self, user_id: str, record_id: str) -> DecisionRecord:
        """Get one of a user's records.

        Raises:
            RecordNotFoundError: If the user has no record with that id.

        """
        rows = self.rows.query({"id": record_id, "user_id": user_id})
        if not rows:
            raise RecordNotFoundError(record_id)
        return self._to_record(rows[0])

    def list_for_user(self, user_id: str) -> list[DecisionRecord]:
        """Get all of a user's records, newest first."""
        records = [self._to_record(r) for r in self.rows.query({"user_id": user_id})]
        return sorted(records, key=lambda r: r.created_at_epoch_ms, reverse=True)

    def rate_outcome(
        self,
        user_id: str,
        record_id: str,
        outcome: Outcome,
        now_ms: int,
    ) -> DecisionRecord:
        """Set a record's outcome once its lock window has passed.

        Args:
            user_id: Owner of the record.
            record_id: The record to rate.
            outcome: GOOD or BAD.
            now_ms: Current wall-clock time.

        Returns:
            The rated record.

        Raises:
            RecordNotFoundError: If the user has no such record.
            DecisionLockedError: If the lock window has not passed.
            OutcomeAlreadySetError: If the record was already rated.
            ValidationError: If outcome is pending.

        """
        record = self.get(user_id, record_id)
        rated = record.rate(outcome, now_ms)

        # Only a still-pending row may be updated
        updated = self.rows.update(
            record_id,
            {"outcome": rated.outcome.value},
            filters={"user_id": user_id, "outcome": Outcome.pending.value},
        )
        if updated is None:
            # Rated concurrently; report against the stored value
            return self.get(user_id, record_id).rate(outcome, now_ms)

        logger.info(
            "record_outcome_rated",
            record_id=record_id,
            user_id=user_id,
            outcome=outcome.value,
        )
        return self._to_record(updated)

    def delete(self, user_id: str, record_id: str) -> None:
        """Delete one of a user's records.

        Raises:
            RecordNotFoundError: If the user has no record with that id.

        """
        if not self.rows.delete(record_id, filters={"user_id": user_id}):
            raise RecordNotFoundError(record_id)
        logger.info("record_deleted", record_id=record_id, user_id=user_id)

    def _to_record(self, row: dict) -> DecisionRecord:
        try:
            return DecisionRecord.model_validate(row)
        except PydanticValidationError as e:
            raise StorageError(f"Malformed decision row {row.get('id')}: {e}") from e
