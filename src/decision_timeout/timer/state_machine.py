"""State machine abstractions for decision-timeout.

This module provides a generic mixin for state machine functionality
shared by state-based entities.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from decision_timeout.timer.exceptions import IllegalTransitionError

__all__ = ["StateMachineMixin"]

StateT = TypeVar("StateT", bound=Enum)


class StateMachineMixin(Generic[StateT]):
    """Mixin providing common state machine operations.

    Type Parameters:
        StateT: The enum type representing possible states.

    Usage:
        Define class attributes:
        - _VALID_TRANSITIONS: dict[StateT, set[StateT]] - transition rules
        - _TERMINAL_STATES: set[StateT] - states with no outgoing transitions

        Implement _get_current_state() and _set_current_state().

    """

    _VALID_TRANSITIONS: dict[StateT, set[StateT]]
    _TERMINAL_STATES: set[StateT]

    @abstractmethod
    def _get_current_state(self) -> StateT:
        """Get the current state of the entity."""
        ...

    @abstractmethod
    def _set_current_state(self, new_state: StateT) -> None:
        """Store a new state without validation."""
        ...

    def can_transition_to(self, new_state: StateT) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            new_state: The target state to check.

        Returns:
            True if the transition is allowed, False otherwise.

        """
        current = self._get_current_state()
        return new_state in self._VALID_TRANSITIONS.get(current, set())

    def is_terminal(self) -> bool:
        """Check if the entity is in a terminal state."""
        return self._get_current_state() in self._TERMINAL_STATES

    def get_valid_transitions(self) -> list[StateT]:
        """Get the list of valid states the entity can transition to."""
        current = self._get_current_state()
        return list(self._VALID_TRANSITIONS.get(current, set()))

    def transition_to(self, new_state: StateT, operation: str | None = None) -> None:
        """Transition to a new state with validation.

        Args:
            new_state: The target state to transition to.
            operation: Name of the operation requesting the transition,
                used in the error message.

        Raises:
            IllegalTransitionError: If the transition is not allowed.

        """
        current = self._get_current_state()
        if not self.can_transition_to(new_state):
            valid = sorted(s.value for s in self._VALID_TRANSITIONS.get(current, set()))
            raise IllegalTransitionError(
                operation or f"move to {new_state.value}",
                current.value,
                f"valid transitions: {valid}",
            )
        self._set_current_state(new_state)
