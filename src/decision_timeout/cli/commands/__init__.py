"""CLI command implementations."""

from decision_timeout.cli.commands.base import BaseCommand, CommandResult
from decision_timeout.cli.commands.decide import DecideCommand, ResumeCommand
from decision_timeout.cli.commands.records import ListCommand, RateCommand

__all__ = [
    "BaseCommand",
    "CommandResult",
    "DecideCommand",
    "ListCommand",
    "RateCommand",
    "ResumeCommand",
]
