"""Base command class for CLI commands.

This module defines the abstract base class for CLI commands
following the Command pattern, and the wiring shared by commands.
"""

from abc import ABC, abstractmethod
from argparse import Namespace
from pathlib import Path

from decision_timeout.config.defaults import RECORDS_FILE_NAME, SNAPSHOT_DIR_NAME
from decision_timeout.config.settings import get_settings
from decision_timeout.insight.service import InsightService
from decision_timeout.models.base import BaseSchema
from decision_timeout.models.record import DecisionRecord
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.storage.rows import JsonFileRowStore
from decision_timeout.storage.snapshots import JsonFileSnapshotStore
from decision_timeout.timer.clock import SystemClock
from decision_timeout.timer.engine import CommitmentEngine
from decision_timeout.timer.policy import StarWeightedPolicy

__all__ = ["BaseCommand", "CommandResult", "build_engine", "build_repository"]


class CommandResult(BaseSchema):
    """Result of a command execution.

    Attributes:
        exit_code: Exit code for the CLI (0 for success).
        records: Decision records produced or listed.
        message: Optional message to display.

    """

    exit_code: int
    records: list[DecisionRecord] = []
    message: str | None = None


class BaseCommand(ABC):
    """Abstract base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the command name for logging and display."""
        pass

    @abstractmethod
    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            CommandResult with exit code and any records.

        """
        pass


def _data_dir(args: Namespace) -> Path:
    if getattr(args, "data_dir", None):
        return Path(args.data_dir)
    return get_settings().storage.data_dir


def build_repository(args: Namespace) -> DecisionRepository:
    """Create the file-backed record repository for the CLI."""
    return DecisionRepository(JsonFileRowStore(_data_dir(args) / RECORDS_FILE_NAME))


def build_engine(args: Namespace) -> CommitmentEngine:
    """Create a file-backed engine for the CLI user."""
    settings = get_settings()
    insight = None
    if getattr(args, "insight", False) or settings.insight.enabled:
        from decision_timeout.insight.client import InsightClient

        insight = InsightService(InsightClient(settings.insight))

    policy = StarWeightedPolicy() if getattr(args, "weigh_stars", False) else None

    return CommitmentEngine(
        user_id=args.user,
        snapshots=JsonFileSnapshotStore(_data_dir(args) / SNAPSHOT_DIR_NAME),
        repository=build_repository(args),
        clock=SystemClock(),
        policy=policy,
        settings=settings.timer,
        insight=insight,
    )
