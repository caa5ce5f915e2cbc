"""Base exceptions for decision-timeout.

This module defines the root exception hierarchy for the package.
All domain-specific exceptions should inherit from DecisionTimeoutError.
"""

__all__ = ["DecisionTimeoutError"]


class DecisionTimeoutError(Exception):
    """Base exception for all decision-timeout errors.

    Provides a common exception type for clients to catch package errors.
    """

    pass
