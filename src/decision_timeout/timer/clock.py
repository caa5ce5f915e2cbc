"""Clock sources for the decision timer.

The timer never reads the system clock directly. Remaining time is
always recomputed from a Clock so that a suspended or reloaded process
sees the true wall-clock elapsed time.
"""

import time
from typing import Protocol, runtime_checkable

__all__ = ["Clock", "SystemClock", "ManualClock"]


@runtime_checkable
class Clock(Protocol):
    """Provider of the current wall-clock time."""

    def now_ms(self) -> int:
        """Get the current time in epoch milliseconds."""
        ...


class SystemClock:
    """Clock backed by the operating system's wall clock."""

    def now_ms(self) -> int:
        """Get the current time in epoch milliseconds."""
        return time.time_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to.

    Useful for replaying a countdown deterministically.

    Attributes:
        current_ms: The time reported by now_ms().

    """

    def __init__(self, start_ms: int = 0) -> None:
        """Initialize the clock at a fixed time.

        Args:
            start_ms: Initial epoch milliseconds.

        """
        self.current_ms = start_ms

    def now_ms(self) -> int:
        """Get the current time in epoch milliseconds."""
        return self.current_ms

    def advance(self, seconds: float) -> int:
        """Move the clock forward.

        Args:
            seconds: Seconds to advance; must not be negative.

        Returns:
            The new time in epoch milliseconds.

        """
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        self.current_ms += round(seconds * 1000)
        return self.current_ms

    def set(self, epoch_ms: int) -> None:
        """Jump to an absolute time."""
        self.current_ms = epoch_ms
