"""Exceptions for the insight module."""

from decision_timeout.exceptions import DecisionTimeoutError

__all__ = ["InsightError"]


class InsightError(DecisionTimeoutError):
    """Raised when the text-completion service fails to produce an insight."""

    pass
