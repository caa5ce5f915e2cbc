"""Command-line interface for decision-timeout."""

from decision_timeout.cli.main import main

__all__ = ["main"]
