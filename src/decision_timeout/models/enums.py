"""Enumeration types for decision-timeout.

This module defines all enum types used throughout the package,
including timer states, decision results and outcome ratings.
"""

from enum import Enum

__all__ = [
    "TimerState",
    "ResolutionKind",
    "DecisionResult",
    "Outcome",
    "Side",
    "UserPlan",
]


class TimerState(str, Enum):
    """Lifecycle state of a decision timer.

    Attributes:
        configuring: Draft is being edited; countdown not started.
        counting: Countdown running; draft is read-only.
        resolving: Result is being fixed; transient.
        resolved_unsaved: Result fixed but the record is not yet stored.
        resolved: Record stored; terminal.
        cancelled: Draft discarded before resolution; terminal.
    """

    configuring = "configuring"
    counting = "counting"
    resolving = "resolving"
    resolved_unsaved = "resolved_unsaved"
    resolved = "resolved"
    cancelled = "cancelled"


class ResolutionKind(str, Enum):
    """How a countdown was resolved.

    Attributes:
        expired: Time ran out (including expiry discovered on recovery).
        user_override: The user decided before time ran out.
    """

    expired = "expired"
    user_override = "user_override"


class DecisionResult(str, Enum):
    """The committed answer to a decision question."""

    yes = "YES"
    no = "NO"


class Outcome(str, Enum):
    """User's later rating of a decision.

    Attributes:
        pending: Not yet rated.
        good: Rated as a good decision.
        bad: Rated as a bad decision.
    """

    pending = "pending"
    good = "good"
    bad = "bad"


class Side(str, Enum):
    """Which list of a draft an item belongs to."""

    pro = "pro"
    con = "con"


class UserPlan(str, Enum):
    """Subscription plan, used only to pick timer presets."""

    guest = "guest"
    free = "free"
    premium = "premium"
