"""Data models for decision-timeout."""

from decision_timeout.models.base import BaseSchema, FrozenSchema
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
    Outcome,
    ResolutionKind,
    Side,
    TimerState,
    UserPlan,
)
from decision_timeout.models.exceptions import (
    DecisionLockedError,
    ModelError,
    OutcomeAlreadySetError,
    ValidationError,
)
from decision_timeout.models.record import DecisionRecord
from decision_timeout.models.snapshot import TimerSnapshot

__all__ = [
    "BaseSchema",
    "ClearSnapshot",
    "DecisionDraft",
    "DecisionLockedError",
    "DecisionRecord",
    "DecisionResult",
    "Effect",
    "FrozenSchema",
    "ModelError",
    "Outcome",
    "OutcomeAlreadySetError",
    "PersistRecord",
    "ResolutionKind",
    "SaveSnapshot",
    "Side",
    "TimerSnapshot",
    "TimerState",
    "TimerView",
    "Transition",
    "UserPlan",
    "ValidationError",
]
