"""Integration tests for crash recovery against the file-backed stores.

Each test builds a fresh engine over the same directory to stand in for
the process being killed and started again.
"""

from pathlib import Path

import pytest

from decision_timeout.config.settings import TimerSettings
from decision_timeout.models.enums import DecisionResult, ResolutionKind, TimerState
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.storage.rows import JsonFileRowStore
from decision_timeout.storage.snapshots import JsonFileSnapshotStore
from decision_timeout.timer.clock import ManualClock
from decision_timeout.timer.engine import CommitmentEngine
from decision_timeout.timer.exceptions import IllegalTransitionError
from decision_timeout.timer.policy import CountPolicy, FixedTieBreaker
from tests.conftest import START_MS, USER_ID
from tests.fixtures import FlakyRowStore

pytestmark = pytest.mark.integration


def boot(data_dir: Path, clock: ManualClock) -> CommitmentEngine:
    return CommitmentEngine(
        user_id=USER_ID,
        snapshots=JsonFileSnapshotStore(data_dir / "snapshots"),
        repository=DecisionRepository(JsonFileRowStore(data_dir / "decisions.json")),
        clock=clock,
        policy=CountPolicy(FixedTieBreaker(DecisionResult.yes)),
        settings=TimerSettings(),
    )


def start(engine: CommitmentEngine, duration: int) -> None:
    engine.set_question("Take the job?")
    engine.add_pro("more pay")
    engine.add_pro("growth")
    engine.add_con("commute")
    engine.start(duration)


class TestRestartRecovery:
    """Tests for recovering across simulated restarts."""

    def test_resume_counting_after_restart(self, tmp_path: Path) -> None:
        """Test a restarted process sees the wall-clock remaining time."""
        clock = ManualClock(START_MS)
        start(boot(tmp_path, clock), 60)
        clock.advance(50)

        engine = boot(tmp_path, clock)
        view = engine.recover()

        assert view.state == TimerState.counting
        assert view.remaining_seconds == 10
        assert view.draft.pros == ("more pay", "growth")

    def test_extension_survives_restart(self, tmp_path: Path) -> None:
        """Test a used extension is still applied and cannot be reused."""
        clock = ManualClock(START_MS)
        first = boot(tmp_path, clock)
        start(first, 60)
        first.extend()
        clock.advance(100)

        engine = boot(tmp_path, clock)
        view = engine.recover()

        assert view.remaining_seconds == 260
        assert view.draft.pause_used is True
        with pytest.raises(IllegalTransitionError):
            engine.extend()

    def test_expired_while_down(self, tmp_path: Path) -> None:
        """Test a countdown that ran out while down is saved exactly once."""
        clock = ManualClock(START_MS)
        start(boot(tmp_path, clock), 60)
        clock.advance(120)

        engine = boot(tmp_path, clock)
        view = engine.recover()

        assert view.state == TimerState.resolved
        assert view.resolution == ResolutionKind.expired
        assert TimerState.counting not in engine.timer.history

        again = boot(tmp_path, clock).recover()
        assert again.state == TimerState.configuring

        records = DecisionRepository(JsonFileRowStore(tmp_path / "decisions.json"))
        assert len(records.list_for_user(USER_ID)) == 1

    def test_crash_before_save_keeps_result(self, tmp_path: Path) -> None:
        """Test a result fixed before a failed save is stored after restart."""
        clock = ManualClock(START_MS)
        flaky = FlakyRowStore(failures=1)
        first = CommitmentEngine(
            user_id=USER_ID,
            snapshots=JsonFileSnapshotStore(tmp_path / "snapshots"),
            repository=DecisionRepository(flaky),
            clock=clock,
            policy=CountPolicy(FixedTieBreaker(DecisionResult.yes)),
            settings=TimerSettings(),
        )
        start(first, 60)
        parked = first.decide_now(DecisionResult.no).record
        assert first.state == TimerState.resolved_unsaved
        clock.advance(3600)

        view = boot(tmp_path, clock).recover()

        assert view.state == TimerState.resolved
        assert view.record == parked
        stored = DecisionRepository(JsonFileRowStore(tmp_path / "decisions.json"))
        assert stored.get(USER_ID, parked.id).result == DecisionResult.no
