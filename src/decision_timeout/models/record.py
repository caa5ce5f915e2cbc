"""Decision record model.

A DecisionRecord is the durable, finalized outcome of a resolved draft.
It is immutable apart from a single outcome rating allowed once the
lock window has passed.
"""

from __future__ import annotations

from decision_timeout.models.base import FrozenSchema
from decision_timeout.models.enums import DecisionResult, Outcome, ResolutionKind
from decision_timeout.models.exceptions import (
    DecisionLockedError,
    OutcomeAlreadySetError,
    ValidationError,
)

__all__ = ["DecisionRecord"]


class DecisionRecord(FrozenSchema):
    """Record of a committed decision.

    Attributes:
        id: Unique record identifier, fixed before the first write attempt.
        user_id: Owner of the record.
        question: Snapshot of the draft's question.
        pros: Snapshot of the draft's pros.
        cons: Snapshot of the draft's cons.
        result: The committed answer.
        resolution: Whether time expired or the user decided early.
        created_at_epoch_ms: When the result was fixed.
        locked_until_epoch_ms: Earliest time the outcome may be rated.
        outcome: Later rating, pending until set.
        time_saved_minutes: Configured timer duration, in minutes.

    """

    id: str
    user_id: str
    question: str
    pros: tuple[str, ...]
    cons: tuple[str, ...]
    result: DecisionResult
    resolution: ResolutionKind
    created_at_epoch_ms: int
    locked_until_epoch_ms: int
    outcome: Outcome = Outcome.pending
    time_saved_minutes: int

    def is_locked(self, now_ms: int) -> bool:
        """Whether the outcome is still inside the lock window."""
        return now_ms < self.locked_until_epoch_ms

    def rate(self, outcome: Outcome, now_ms: int) -> DecisionRecord:
        """Return a copy with the outcome set.

        Args:
            outcome: GOOD or BAD.
            now_ms: Current wall-clock time.

        Returns:
            The rated record.

        Raises:
            ValidationError: If outcome is pending.
            DecisionLockedError: If the lock window has not passed.
            OutcomeAlreadySetError: If the record was already rated.

        """
        if outcome == Outcome.pending:
            raise ValidationError("outcome", "Rate the decision as good or bad")
        if self.outcome != Outcome.pending:
            raise OutcomeAlreadySetError(self.id, self.outcome.value)
        if self.is_locked(now_ms):
            raise DecisionLockedError(self.id, self.locked_until_epoch_ms)
        return self.model_copy(update={"outcome": outcome})
