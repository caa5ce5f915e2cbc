"""Decision timer: clock, resolution policy, state machine and engine."""

from decision_timeout.timer.clock import Clock, ManualClock, SystemClock
from decision_timeout.timer.driver import run_countdown
from decision_timeout.timer.engine import CommitmentEngine
from decision_timeout.timer.exceptions import IllegalTransitionError, TimerError
from decision_timeout.timer.machine import VALID_TRANSITIONS, DecisionTimer
from decision_timeout.timer.policy import (
    CountPolicy,
    FixedTieBreaker,
    RandomTieBreaker,
    ResolutionPolicy,
    StarWeightedPolicy,
    TieBreaker,
)
from decision_timeout.timer.state_machine import StateMachineMixin

__all__ = [
    "Clock",
    "CommitmentEngine",
    "CountPolicy",
    "DecisionTimer",
    "FixedTieBreaker",
    "IllegalTransitionError",
    "ManualClock",
    "RandomTieBreaker",
    "ResolutionPolicy",
    "run_countdown",
    "StarWeightedPolicy",
    "StateMachineMixin",
    "SystemClock",
    "TieBreaker",
    "TimerError",
    "VALID_TRANSITIONS",
]
