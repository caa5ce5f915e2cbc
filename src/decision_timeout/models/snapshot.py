"""Timer snapshot model.

The snapshot is the local, ephemeral copy of a running countdown used
to recover after the process is torn down.
"""

from __future__ import annotations

from pydantic import Field

from decision_timeout.models.base import FrozenSchema
from decision_timeout.models.draft import DecisionDraft
from decision_timeout.models.record import DecisionRecord

__all__ = ["TimerSnapshot"]


class TimerSnapshot(FrozenSchema):
    """Persisted shape of an in-progress countdown.

    Attributes:
        user_id: Key the snapshot is stored under.
        question: The question being decided.
        pros: Pros at the time of the snapshot.
        cons: Cons at the time of the snapshot.
        timer_duration_seconds: Configured countdown length.
        started_at_epoch_ms: Wall-clock start of the countdown.
        starred_pro: Starred pro index, if any.
        starred_con: Starred con index, if any.
        pause_used: Whether the one-time extension was consumed.
        pending_record: Record fixed at resolution but not yet confirmed
            stored; recovery re-sends it instead of resolving again.

    """

    user_id: str
    question: str
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()
    timer_duration_seconds: int = Field(gt=0)
    started_at_epoch_ms: int
    starred_pro: int | None = None
    starred_con: int | None = None
    pause_used: bool = False
    pending_record: DecisionRecord | None = None

    @classmethod
    def from_draft(
        cls,
        user_id: str,
        draft: DecisionDraft,
        pending_record: DecisionRecord | None = None,
    ) -> TimerSnapshot:
        """Capture a started draft.

        Raises:
            ValueError: If the draft has not been started.

        """
        if draft.started_at_epoch_ms is None or draft.timer_duration_seconds is None:
            raise ValueError("Only a started draft can be snapshotted")
        return cls(
            user_id=user_id,
            question=draft.question,
            pros=draft.pros,
            cons=draft.cons,
            starred_pro=draft.starred_pro,
            starred_con=draft.starred_con,
            timer_duration_seconds=draft.timer_duration_seconds,
            started_at_epoch_ms=draft.started_at_epoch_ms,
            pause_used=draft.pause_used,
            pending_record=pending_record,
        )

    def to_draft(self) -> DecisionDraft:
        """Rebuild the started draft this snapshot was taken from."""
        return DecisionDraft(
            question=self.question,
            pros=self.pros,
            cons=self.cons,
            starred_pro=self.starred_pro,
            starred_con=self.starred_con,
            timer_duration_seconds=self.timer_duration_seconds,
            started_at_epoch_ms=self.started_at_epoch_ms,
            pause_used=self.pause_used,
        )
