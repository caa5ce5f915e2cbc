"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from decision_timeout.exceptions import DecisionTimeoutError

__all__ = ["CLIError", "CommandError"]


class CLIError(DecisionTimeoutError):
    """Base exception for CLI-related errors."""

    pass


class CommandError(CLIError):
    """Raised when a command execution fails."""

    pass
