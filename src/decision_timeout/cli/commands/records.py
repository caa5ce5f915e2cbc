"""List and rate command implementations."""

from argparse import Namespace

from decision_timeout.cli.commands.base import BaseCommand, CommandResult, build_repository
from decision_timeout.cli.exceptions import CommandError
from decision_timeout.models.enums import Outcome
from decision_timeout.models.record import DecisionRecord
from decision_timeout.storage.repository import DecisionRepository
from decision_timeout.timer.clock import SystemClock

__all__ = ["ListCommand", "RateCommand"]


class ListCommand(BaseCommand):
    """Command to list a user's decisions."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "list"

    async def execute(self, args: Namespace) -> CommandResult:
        """List the user's decisions, newest first."""
        repository = build_repository(args)
        return CommandResult(exit_code=0, records=repository.list_for_user(args.user))


class RateCommand(BaseCommand):
    """Command to rate a past decision."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "rate"

    async def execute(self, args: Namespace) -> CommandResult:
        """Rate a decision as good or bad.

        Raises:
            CommandError: If the id prefix matches no record or several.
            DecisionLockedError: If the record is still locked.
            OutcomeAlreadySetError: If the record was already rated.

        """
        repository = build_repository(args)
        record = self._resolve_id(repository, args.user, args.record_id)
        rated = repository.rate_outcome(
            args.user,
            record.id,
            Outcome(args.outcome),
            SystemClock().now_ms(),
        )
        return CommandResult(
            exit_code=0,
            records=[rated],
            message=f"Rated '{rated.question}' as {rated.outcome.value}.",
        )

    def _resolve_id(
        self,
        repository: DecisionRepository,
        user_id: str,
        prefix: str,
    ) -> DecisionRecord:
        matches = [r for r in repository.list_for_user(user_id) if r.id.startswith(prefix)]
        if not matches:
            raise CommandError(f"No decision matches '{prefix}'")
        if len(matches) > 1:
            raise CommandError(f"'{prefix}' matches {len(matches)} decisions; use more characters")
        return matches[0]
