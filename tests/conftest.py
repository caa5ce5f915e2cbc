"""Pytest configuration and shared fixtures for the decision-timeout test suite.

Every timer under test gets its own ManualClock and stores, so tests
never share timer state or depend on real time passing.
"""

from collections.abc import Callable
from itertools import count

import pytest

from decision_timeout.config.settings import TimerSettings
from decision_timeout.models.enums import DecisionResult
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.storage.rows import InMemoryRowStore
from decision_timeout.storage.snapshots import InMemorySnapshotStore
from decision_timeout.timer.clock import ManualClock
from decision_timeout.timer.engine import CommitmentEngine
from decision_timeout.timer.machine import DecisionTimer
from decision_timeout.timer.policy import CountPolicy, FixedTieBreaker

START_MS = 1_700_000_000_000
USER_ID = "user_123"


@pytest.fixture
def clock() -> ManualClock:
    """Provide a clock frozen at a fixed epoch time."""
    return ManualClock(start_ms=START_MS)


@pytest.fixture
def timer_settings() -> TimerSettings:
    """Provide timer settings with the reference durations."""
    return TimerSettings(
        default_duration_seconds=300,
        extend_bonus_seconds=300,
        tick_interval_seconds=0.01,
        lock_window_seconds=24 * 60 * 60,
        max_items_per_side=5,
        max_item_length=100,
        max_question_length=500,
    )


@pytest.fixture
def yes_on_tie() -> CountPolicy:
    """Provide a count policy whose ties resolve to YES."""
    return CountPolicy(FixedTieBreaker(DecisionResult.yes))


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Provide predictable record ids: rec-1, rec-2, ..."""
    counter = count(1)
    return lambda: f"rec-{next(counter)}"


@pytest.fixture
def timer(
    clock: ManualClock,
    timer_settings: TimerSettings,
    yes_on_tie: CountPolicy,
    id_factory: Callable[[], str],
) -> DecisionTimer:
    """Provide a fresh timer in configuring."""
    return DecisionTimer(USER_ID, clock, yes_on_tie, timer_settings, id_factory)


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    """Provide an empty in-memory snapshot store."""
    return InMemorySnapshotStore()


@pytest.fixture
def row_store() -> InMemoryRowStore:
    """Provide an empty in-memory row store."""
    return InMemoryRowStore()


@pytest.fixture
def repository(row_store: InMemoryRowStore) -> DecisionRepository:
    """Provide a repository over the in-memory row store."""
    return DecisionRepository(row_store)


@pytest.fixture
def make_engine(
    clock: ManualClock,
    timer_settings: TimerSettings,
    yes_on_tie: CountPolicy,
    id_factory: Callable[[], str],
    snapshot_store: InMemorySnapshotStore,
    repository: DecisionRepository,
) -> Callable[..., CommitmentEngine]:
    """Provide a factory for engines sharing this test's clock and stores."""

    def _make(**overrides) -> CommitmentEngine:
        kwargs = {
            "user_id": USER_ID,
            "snapshots": snapshot_store,
            "repository": repository,
            "clock": clock,
            "policy": yes_on_tie,
            "settings": timer_settings,
            "id_factory": id_factory,
        }
        kwargs.update(overrides)
        return CommitmentEngine(**kwargs)

    return _make
