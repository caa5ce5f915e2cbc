"""Decision timer state machine.

This module contains the DecisionTimer, which owns a draft from
configuration through countdown to a fixed YES/NO result. The timer
performs no I/O: each intent returns a Transition listing the side
effects (snapshot writes, record writes) the caller must carry out.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Callable

from decision_timeout.config.settings import TimerSettings, get_settings
from decision_timeout.logging_config import get_logger
from decision_timeout.models.draft import DecisionDraft
from decision_timeout.models.effects import (
    ClearSnapshot,
    Effect,
    PersistRecord,
    SaveSnapshot,
    TimerView,
    Transition,
)
from decision_timeout.models.enums import (
    DecisionResult,
    ResolutionKind,
    Side,
    TimerState,
)
from decision_timeout.models.exceptions import ValidationError
from decision_timeout.models.record import DecisionRecord
from decision_timeout.models.snapshot import TimerSnapshot
from decision_timeout.timer.clock import Clock
from decision_timeout.timer.exceptions import IllegalTransitionError
from decision_timeout.timer.policy import CountPolicy, ResolutionPolicy
from decision_timeout.timer.state_machine import StateMachineMixin

__all__ = ["DecisionTimer", "VALID_TRANSITIONS"]

logger = get_logger(__name__)

VALID_TRANSITIONS: dict[TimerState, set[TimerState]] = {
    TimerState.configuring: {
        TimerState.counting,
        TimerState.cancelled,
    },
    TimerState.counting: {
        TimerState.resolving,
        TimerState.cancelled,
    },
    TimerState.resolving: {
        TimerState.resolved_unsaved,
    },
    TimerState.resolved_unsaved: {
        TimerState.resolved,
    },
    TimerState.resolved: set(),  # Terminal state
    TimerState.cancelled: set(),  # Terminal state
}

_RESOLVED_STATES = {
    TimerState.resolving,
    TimerState.resolved_unsaved,
    TimerState.resolved,
}


class DecisionTimer(StateMachineMixin[TimerState]):
    """Countdown that commits a draft to YES or NO exactly once.

    Remaining time is always derived from the injected clock and the
    draft's start timestamp, never from the number of ticks delivered.
    The result is fixed when the timer enters resolving, before any
    record write is requested, and never recomputed afterwards.

    Attributes:
        user_id: Owner of the draft and the resulting record.
        clock: Source of wall-clock time.
        policy: Strategy mapping pros/cons to a result.
        settings: Limits and durations.

    """

    _VALID_TRANSITIONS = VALID_TRANSITIONS
    _TERMINAL_STATES = {TimerState.resolved, TimerState.cancelled}

    def __init__(
        self,
        user_id: str,
        clock: Clock,
        policy: ResolutionPolicy | None = None,
        settings: TimerSettings | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize a timer with an empty draft.

        Args:
            user_id: Owner of the draft.
            clock: Source of wall-clock time.
            policy: Resolution strategy (default: CountPolicy with a coin flip).
            settings: Timer settings (default: from get_settings()).
            id_factory: Generates record ids (default: uuid4).

        """
        if not user_id:
            raise ValidationError("user_id", "A user id is required")
        self.user_id = user_id
        self.clock = clock
        self.policy = policy or CountPolicy()
        self.settings = settings or get_settings().timer
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

        self._state = TimerState.configuring
        self._history: list[TimerState] = [TimerState.configuring]
        self._draft = DecisionDraft()
        self._result: DecisionResult | None = None
        self._resolution: ResolutionKind | None = None
        self._record: DecisionRecord | None = None

    @classmethod
    def restore(
        cls,
        snapshot: TimerSnapshot,
        clock: Clock,
        policy: ResolutionPolicy | None = None,
        settings: TimerSettings | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> tuple[DecisionTimer, Transition]:
        """Rebuild a timer from a persisted snapshot.

        If the countdown would still be running, the timer comes back in
        counting with whatever time is left on the wall clock. If it ran
        out while the process was gone, the timer goes straight to
        resolving and is never observable in counting. A snapshot holding a
        pending record resumes in resolved_unsaved with that record, so the
        result is never computed twice.

        Args:
            snapshot: The persisted countdown.
            clock: Source of wall-clock time.
            policy: Resolution strategy.
            settings: Timer settings.
            id_factory: Generates record ids.

        Returns:
            Tuple of (timer, transition). The transition carries a
            PersistRecord effect when the countdown had already resolved.

        """
        timer = cls(snapshot.user_id, clock, policy, settings, id_factory)
        timer._draft = snapshot.to_draft()

        if snapshot.pending_record is not None:
            # Resolved before the process stopped; resend the same record
            record = snapshot.pending_record
            timer._set_current_state(TimerState.resolving)
            timer._result = record.result
            timer._resolution = record.resolution
            timer._record = record
            timer._set_current_state(TimerState.resolved_unsaved)
            logger.info(
                "timer_pending_record_restored",
                user_id=timer.user_id,
                record_id=record.id,
            )
            return timer, timer._transition(PersistRecord(record=record))

        if timer._remaining_ms() > 0:
            timer._set_current_state(TimerState.counting)
            logger.info(
                "timer_restored",
                user_id=timer.user_id,
                remaining_seconds=timer.remaining_seconds(),
            )
            return timer, timer._transition()

        timer._set_current_state(TimerState.resolving)
        logger.info("timer_expired_while_away", user_id=timer.user_id)
        return timer, timer._fix_result(ResolutionKind.expired, None)

    @property
    def state(self) -> TimerState:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> list[TimerState]:
        """Get a copy of the state transition history."""
        return self._history.copy()

    @property
    def draft(self) -> DecisionDraft:
        """Get the current draft."""
        return self._draft

    @property
    def result(self) -> DecisionResult | None:
        """Get the fixed result, if resolution has happened."""
        return self._result

    @property
    def resolution(self) -> ResolutionKind | None:
        """Get how the timer was resolved, if it has been."""
        return self._resolution

    @property
    def record(self) -> DecisionRecord | None:
        """Get the record built at resolution, if any."""
        return self._record

    @property
    def effective_duration_seconds(self) -> int | None:
        """Configured duration plus the extension bonus once it is used."""
        duration = self._draft.timer_duration_seconds
        if duration is None:
            return None
        bonus = self.settings.extend_bonus_seconds if self._draft.pause_used else 0
        return duration + bonus

    def remaining_seconds(self) -> int | None:
        """Get whole seconds left on the countdown, clamped at zero.

        Returns:
            Remaining seconds rounded up, or None if not started.

        """
        if not self._draft.is_started:
            return None
        if self._state not in (TimerState.configuring, TimerState.counting):
            return 0
        return math.ceil(self._remaining_ms() / 1000)

    def view(self) -> TimerView:
        """Get a read-only view of the timer."""
        return TimerView(
            state=self._state,
            draft=self._draft,
            remaining_seconds=self.remaining_seconds(),
            result=self._result,
            resolution=self._resolution,
            record=self._record,
        )

    # Draft editing

    def set_question(self, question: str) -> Transition:
        """Set the question being decided."""
        self._require_configuring("set_question")
        self._draft = self._draft.with_question(
            question, max_length=self.settings.max_question_length
        )
        return self._transition()

    def add_pro(self, text: str) -> Transition:
        """Append a pro to the draft."""
        return self._add_item(Side.pro, text)

    def add_con(self, text: str) -> Transition:
        """Append a con to the draft."""
        return self._add_item(Side.con, text)

    def remove_pro(self, index: int) -> Transition:
        """Remove the pro at the given position."""
        return self._remove_item(Side.pro, index)

    def remove_con(self, index: int) -> Transition:
        """Remove the con at the given position."""
        return self._remove_item(Side.con, index)

    def star(self, side: Side, index: int | None) -> Transition:
        """Star one item on a side, or clear the star with None."""
        self._require_configuring("star")
        self._draft = self._draft.with_star(side, index)
        return self._transition()

    # Countdown

    def start(self, duration_seconds: int | None = None) -> Transition:
        """Start the countdown.

        Args:
            duration_seconds: Countdown length (default from settings).

        Returns:
            Transition requesting an immediate snapshot write.

        Raises:
            IllegalTransitionError: If not configuring.
            ValidationError: If the question is empty, there are no pros
                or cons, or the duration is not positive.

        """
        self._require_configuring("start")
        duration = (
            self.settings.default_duration_seconds
            if duration_seconds is None
            else duration_seconds
        )
        if duration <= 0:
            raise ValidationError("duration", "Timer duration must be positive")
        if not self._draft.question:
            raise ValidationError("question", "Enter the question you are deciding")
        if self._draft.item_count == 0:
            raise ValidationError("items", "Add at least one pro or con")

        self._draft = self._draft.model_copy(
            update={
                "timer_duration_seconds": duration,
                "started_at_epoch_ms": self.clock.now_ms(),
            }
        )
        self.transition_to(TimerState.counting, "start")

        logger.info(
            "timer_started",
            user_id=self.user_id,
            duration_seconds=duration,
            pros=len(self._draft.pros),
            cons=len(self._draft.cons),
        )
        return self._transition(self._save_snapshot())

    def tick(self) -> Transition:
        """Recompute remaining time and resolve if it has run out.

        Ticks outside counting are ignored so a late tick after a user
        override cannot produce a second result.

        Returns:
            Transition; carries a PersistRecord effect on expiry.

        """
        if self._state != TimerState.counting:
            return self._transition()
        if self._remaining_ms() > 0:
            return self._transition()
        return self._resolve(ResolutionKind.expired, None)

    def decide_now(self, forced_result: DecisionResult | None = None) -> Transition:
        """Resolve the countdown before time runs out.

        If the wall clock shows the countdown has already expired, the
        expiry wins and forced_result is discarded. Calls after resolution
        are no-ops and return the already-fixed result.

        Args:
            forced_result: YES or NO to commit to; None applies the policy.

        Returns:
            Transition carrying a PersistRecord effect, or no effects if
            the timer was already resolved.

        Raises:
            IllegalTransitionError: If the countdown has not started or
                was cancelled.

        """
        if self._state in _RESOLVED_STATES:
            logger.debug("decide_now_ignored", user_id=self.user_id, state=self._state.value)
            return self._transition()
        if self._state != TimerState.counting:
            raise IllegalTransitionError("decide_now", self._state.value)
        if self._remaining_ms() <= 0:
            return self._resolve(ResolutionKind.expired, None)
        return self._resolve(ResolutionKind.user_override, forced_result)

    def extend(self) -> Transition:
        """Add the one-time bonus to the running countdown.

        Raises:
            IllegalTransitionError: If not counting, the extension was
                already used, or the time has already run out.

        """
        if self._state != TimerState.counting:
            raise IllegalTransitionError("extend", self._state.value)
        if self._draft.pause_used:
            raise IllegalTransitionError(
                "extend", self._state.value, "extension already used"
            )
        if self._remaining_ms() <= 0:
            raise IllegalTransitionError("extend", self._state.value, "time has run out")

        self._draft = self._draft.model_copy(update={"pause_used": True})
        logger.info(
            "timer_extended",
            user_id=self.user_id,
            bonus_seconds=self.settings.extend_bonus_seconds,
            remaining_seconds=self.remaining_seconds(),
        )
        return self._transition(self._save_snapshot())

    def cancel(self) -> Transition:
        """Discard the draft before it is resolved.

        Raises:
            IllegalTransitionError: If the timer is already resolving or later.

        """
        was_started = self._draft.is_started
        self.transition_to(TimerState.cancelled, "cancel")
        logger.info("timer_cancelled", user_id=self.user_id, started=was_started)
        if was_started:
            return self._transition(ClearSnapshot(user_id=self.user_id))
        return self._transition()

    # Finalization

    def finalize(self) -> Transition:
        """Request the record write for a resolved timer.

        Safe to call repeatedly: while unsaved it always requests the same
        record (same id, same result); once saved it requests nothing.

        Raises:
            IllegalTransitionError: If the timer has not been resolved.

        """
        if self._state == TimerState.resolved:
            return self._transition()
        if self._state != TimerState.resolved_unsaved or self._record is None:
            raise IllegalTransitionError("finalize", self._state.value)
        return self._transition(PersistRecord(record=self._record))

    def confirm_saved(self) -> Transition:
        """Mark the record as durably stored.

        Returns:
            Transition requesting the snapshot be cleared.

        Raises:
            IllegalTransitionError: If there is no unsaved record.

        """
        if self._state == TimerState.resolved:
            return self._transition()
        self.transition_to(TimerState.resolved, "confirm_saved")
        return self._transition(ClearSnapshot(user_id=self.user_id))

    # Internals

    def _get_current_state(self) -> TimerState:
        return self._state

    def _set_current_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self._history.append(new_state)

    def _require_configuring(self, operation: str) -> None:
        if self._state != TimerState.configuring:
            raise IllegalTransitionError(
                operation, self._state.value, "the draft is read-only once started"
            )

    def _add_item(self, side: Side, text: str) -> Transition:
        self._require_configuring(f"add_{side.value}")
        self._draft = self._draft.with_item(
            side,
            text,
            max_items=self.settings.max_items_per_side,
            max_length=self.settings.max_item_length,
        )
        return self._transition()

    def _remove_item(self, side: Side, index: int) -> Transition:
        self._require_configuring(f"remove_{side.value}")
        self._draft = self._draft.without_item(side, index)
        return self._transition()

    def _deadline_ms(self) -> int | None:
        started = self._draft.started_at_epoch_ms
        effective = self.effective_duration_seconds
        if started is None or effective is None:
            return None
        return started + effective * 1000

    def _remaining_ms(self) -> int:
        deadline = self._deadline_ms()
        if deadline is None:
            return 0
        return max(0, deadline - self.clock.now_ms())

    def _resolve(
        self,
        kind: ResolutionKind,
        forced_result: DecisionResult | None,
    ) -> Transition:
        # Check-then-transition with no await in between: whichever path
        # gets here first owns the result, later callers see resolving.
        if self._state != TimerState.counting:
            return self._transition()
        self.transition_to(TimerState.resolving, "resolve")
        return self._fix_result(kind, forced_result)

    def _fix_result(
        self,
        kind: ResolutionKind,
        forced_result: DecisionResult | None,
    ) -> Transition:
        draft = self._draft
        result = forced_result or self.policy.resolve(
            draft.pros, draft.cons, draft.starred_pro, draft.starred_con
        )
        now = self.clock.now_ms()
        deadline = self._deadline_ms()
        if kind == ResolutionKind.expired and deadline is not None:
            # An expiry happened at the deadline, however late it is noticed
            now = min(now, deadline)
        duration = draft.timer_duration_seconds or 0

        self._result = result
        self._resolution = kind
        self._record = DecisionRecord(
            id=self._id_factory(),
            user_id=self.user_id,
            question=draft.question,
            pros=draft.pros,
            cons=draft.cons,
            result=result,
            resolution=kind,
            created_at_epoch_ms=now,
            locked_until_epoch_ms=now + self.settings.lock_window_seconds * 1000,
            time_saved_minutes=max(1, math.ceil(duration / 60)),
        )
        self.transition_to(TimerState.resolved_unsaved, "resolve")

        logger.info(
            "timer_resolved",
            user_id=self.user_id,
            record_id=self._record.id,
            result=result.value,
            resolution=kind.value,
        )
        # Snapshot first so a crash before the write recovers this exact record
        return self._transition(
            self._save_snapshot(), PersistRecord(record=self._record)
        )

    def _save_snapshot(self) -> SaveSnapshot:
        return SaveSnapshot(
            snapshot=TimerSnapshot.from_draft(self.user_id, self._draft, self._record)
        )

    def _transition(self, *effects: Effect) -> Transition:
        return Transition(view=self.view(), effects=effects)
