"""Commitment engine.

The engine is the single entry point the presentation layer talks to.
It owns the current DecisionTimer for one user, forwards intents to it,
and carries out the effects each intent returns: snapshot writes while
counting, the record write on resolution, and the snapshot clear once
the record is stored.
"""

from __future__ import annotations

from collections.abc import Callable

from decision_timeout.config.settings import TimerSettings, get_settings
from decision_timeout.insight.service import InsightService
from decision_timeout.logging_config import get_logger
from decision_timeout.models.effects import (
    ClearSnapshot,
    PersistRecord,
    SaveSnapshot,
    TimerView,
    Transition,
)
from decision_timeout.models.enums import DecisionResult, Side, TimerState
from decision_timeout.models.record import DecisionRecord
from decision_timeout.storage.exceptions import RecordPersistenceError, SnapshotError
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.storage.snapshots import SnapshotStore
from decision_timeout.timer.clock import Clock, SystemClock
from decision_timeout.timer.exceptions import IllegalTransitionError
from decision_timeout.timer.machine import DecisionTimer
from decision_timeout.timer.policy import ResolutionPolicy

__all__ = ["CommitmentEngine"]

logger = get_logger(__name__)


class CommitmentEngine:
    """Runs one user's decision timer against real storage.

    Snapshot failures are logged and the countdown carries on in memory.
    Record failures leave the timer in resolved_unsaved with its result
    intact; finalize() retries the same write.

    Attributes:
        user_id: The signed-in user.
        snapshots: Local store for the running countdown.
        repository: Durable store for finalized records.
        clock: Source of wall-clock time.
        policy: Resolution strategy passed to each timer.
        settings: Timer settings.
        insight: Optional post-resolution insight service.

    """

    def __init__(
        self,
        user_id: str,
        snapshots: SnapshotStore,
        repository: DecisionRepository,
        clock: Clock | None = None,
        policy: ResolutionPolicy | None = None,
        settings: TimerSettings | None = None,
        insight: InsightService | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the engine with a fresh draft.

        Call recover() before showing anything if a countdown may have
        been running when the process last stopped.

        Args:
            user_id: The signed-in user.
            snapshots: Local store for the running countdown.
            repository: Durable store for finalized records.
            clock: Source of wall-clock time (default: SystemClock).
            policy: Resolution strategy (default: CountPolicy).
            settings: Timer settings (default from get_settings()).
            insight: Optional insight service.
            id_factory: Generates record ids (default: uuid4).

        """
        self.user_id = user_id
        self.snapshots = snapshots
        self.repository = repository
        self.clock = clock or SystemClock()
        self.policy = policy
        self.settings = settings or get_settings().timer
        self.insight = insight
        self._id_factory = id_factory
        self._timer = self._new_timer()

    @property
    def timer(self) -> DecisionTimer:
        """Get the current timer."""
        return self._timer

    @property
    def state(self) -> TimerState:
        """Get the current timer state."""
        return self._timer.state

    def view(self) -> TimerView:
        """Get a read-only view of the current timer."""
        return self._timer.view()

    def recover(self) -> TimerView:
        """Resume whatever countdown was running when the process stopped.

        With no snapshot the engine stays in configuring. A countdown that
        still has time left resumes from the wall clock. A countdown that
        ran out while away is resolved and saved before this returns.

        Returns:
            The view to render first.

        """
        try:
            snapshot = self.snapshots.load_snapshot(self.user_id)
        except SnapshotError as e:
            logger.error("snapshot_unreadable", user_id=self.user_id, error=str(e))
            self._clear_snapshot()
            snapshot = None

        if snapshot is None:
            self._timer = self._new_timer()
            return self.view()

        self._timer, transition = DecisionTimer.restore(
            snapshot,
            self.clock,
            self.policy,
            self.settings,
            self._id_factory,
        )
        return self._apply(transition)

    def new_draft(self) -> TimerView:
        """Replace a finished or cancelled timer with an empty draft.

        Raises:
            IllegalTransitionError: If the current timer is still live.

        """
        if not self._timer.is_terminal() and self._timer.state != TimerState.configuring:
            raise IllegalTransitionError("new_draft", self._timer.state.value)
        self._timer = self._new_timer()
        return self.view()

    def set_question(self, question: str) -> TimerView:
        """Set the question being decided."""
        return self._apply(self._timer.set_question(question))

    def add_pro(self, text: str) -> TimerView:
        """Append a pro."""
        return self._apply(self._timer.add_pro(text))

    def add_con(self, text: str) -> TimerView:
        """Append a con."""
        return self._apply(self._timer.add_con(text))

    def remove_pro(self, index: int) -> TimerView:
        """Remove a pro."""
        return self._apply(self._timer.remove_pro(index))

    def remove_con(self, index: int) -> TimerView:
        """Remove a con."""
        return self._apply(self._timer.remove_con(index))

    def star(self, side: Side, index: int | None) -> TimerView:
        """Star an item, or clear the star on a side."""
        return self._apply(self._timer.star(side, index))

    def start(self, duration_seconds: int | None = None) -> TimerView:
        """Start the countdown and write the first snapshot."""
        return self._apply(self._timer.start(duration_seconds))

    def tick(self) -> TimerView:
        """Advance the countdown from the wall clock."""
        return self._apply(self._timer.tick())

    def decide_now(self, forced_result: DecisionResult | None = None) -> TimerView:
        """Commit before time runs out."""
        return self._apply(self._timer.decide_now(forced_result))

    def extend(self) -> TimerView:
        """Use the one-time extension."""
        return self._apply(self._timer.extend())

    def cancel(self) -> TimerView:
        """Abandon the current draft."""
        return self._apply(self._timer.cancel())

    def finalize(self) -> DecisionRecord:
        """Store the resolved decision, retrying a previously failed write.

        Never re-runs the resolution policy: the record written is the one
        fixed when the timer resolved.

        Returns:
            The stored record.

        Raises:
            IllegalTransitionError: If the timer has not resolved.
            RecordPersistenceError: If the write failed again; the timer
                stays in resolved_unsaved and finalize() may be retried.

        """
        self._apply(self._timer.finalize(), raise_on_persist_failure=True)
        record = self._timer.record
        if record is None:
            raise IllegalTransitionError("finalize", self._timer.state.value)
        return record

    async def get_insight(self, mood_score: int | None = None) -> str | None:
        """Get reflection text for the resolved decision.

        Returns:
            Insight text, or None if no insight service is configured or
            the timer has not resolved.

        """
        record = self._timer.record
        if self.insight is None or record is None:
            return None
        return await self.insight.get_insight(
            record.question, record.pros, record.cons, mood_score
        )

    def _new_timer(self) -> DecisionTimer:
        return DecisionTimer(
            self.user_id,
            self.clock,
            self.policy,
            self.settings,
            self._id_factory,
        )

    def _apply(
        self,
        transition: Transition,
        raise_on_persist_failure: bool = False,
    ) -> TimerView:
        for effect in transition.effects:
            if isinstance(effect, SaveSnapshot):
                self._save_snapshot(effect)
            elif isinstance(effect, ClearSnapshot):
                self._clear_snapshot()
            elif isinstance(effect, PersistRecord):
                self._persist(effect, raise_on_persist_failure)
        return self.view()

    def _persist(self, effect: PersistRecord, raise_on_failure: bool) -> None:
        try:
            self.repository.persist_record(effect.record)
        except RecordPersistenceError:
            logger.warning(
                "record_unsaved",
                user_id=self.user_id,
                record_id=effect.record.id,
                result=effect.record.result.value,
            )
            if raise_on_failure:
                raise
            return
        self._apply(self._timer.confirm_saved())

    def _save_snapshot(self, effect: SaveSnapshot) -> None:
        try:
            self.snapshots.save_snapshot(effect.snapshot)
        except SnapshotError as e:
            logger.warning("snapshot_save_failed", user_id=self.user_id, error=str(e))

    def _clear_snapshot(self) -> None:
        try:
            self.snapshots.clear_snapshot(self.user_id)
        except SnapshotError as e:
            logger.warning("snapshot_clear_failed", user_id=self.user_id, error=str(e))
