"""Side-effect requests emitted by the decision timer.

The timer never performs I/O itself. Each intent returns a Transition:
the resulting state view plus the effects the caller must carry out.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from decision_timeout.models.base import FrozenSchema
from decision_timeout.models.draft import DecisionDraft
from decision_timeout.models.enums import DecisionResult, ResolutionKind, TimerState
from decision_timeout.models.record import DecisionRecord
from decision_timeout.models.snapshot import TimerSnapshot

__all__ = [
    "SaveSnapshot",
    "ClearSnapshot",
    "PersistRecord",
    "Effect",
    "TimerView",
    "Transition",
]


class SaveSnapshot(FrozenSchema):
    """Request to overwrite the user's in-progress snapshot."""

    kind: Literal["save_snapshot"] = "save_snapshot"
    snapshot: TimerSnapshot


class ClearSnapshot(FrozenSchema):
    """Request to delete the user's in-progress snapshot."""

    kind: Literal["clear_snapshot"] = "clear_snapshot"
    user_id: str


class PersistRecord(FrozenSchema):
    """Request to durably write a finalized record."""

    kind: Literal["persist_record"] = "persist_record"
    record: DecisionRecord


Effect = SaveSnapshot | ClearSnapshot | PersistRecord


class TimerView(FrozenSchema):
    """Read-only view of a timer at one moment.

    Attributes:
        state: Lifecycle state.
        draft: The draft as of this moment.
        remaining_seconds: Seconds left, clamped at zero; None before start.
        result: Fixed result once resolving has happened.
        resolution: How the result was reached.
        record: The record built at resolution.

    """

    state: TimerState
    draft: DecisionDraft
    remaining_seconds: int | None = None
    result: DecisionResult | None = None
    resolution: ResolutionKind | None = None
    record: DecisionRecord | None = None


class Transition(FrozenSchema):
    """Outcome of one intent: new state plus requested side effects."""

    view: TimerView
    effects: tuple[Effect, ...] = Field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        """Whether the intent produced any side effects."""
        return bool(self.effects)
