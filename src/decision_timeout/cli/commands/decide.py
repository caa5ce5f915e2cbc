"""Decide and resume command implementations.

Both commands run a countdown in the terminal until it resolves,
store the record, and optionally print a reflection.
"""

import sys
from argparse import Namespace

from decision_timeout.cli.commands.base import BaseCommand, CommandResult, build_engine
from decision_timeout.cli.formatters import format_countdown, format_record
from decision_timeout.logging_config import get_logger
from decision_timeout.models.effects import TimerView
from decision_timeout.models.enums import DecisionResult, Side, TimerState
from decision_timeout.storage.exceptions import RecordPersistenceError
from decision_timeout.timer.driver import run_countdown
from decision_timeout.timer.engine import CommitmentEngine

__all__ = ["DecideCommand", "ResumeCommand"]

logger = get_logger(__name__)

_FORCED = {
    "yes": DecisionResult.yes,
    "no": DecisionResult.no,
    "now": None,
}


def _print_tick(view: TimerView) -> None:
    if view.state == TimerState.counting:
        sys.stdout.write("\r" + format_countdown(view).ljust(70))
        sys.stdout.flush()


async def _finish(engine: CommitmentEngine, args: Namespace) -> CommandResult:
    """Store the resolved decision and print the optional insight."""
    sys.stdout.write("\n")
    try:
        record = engine.finalize()
    except RecordPersistenceError as e:
        return CommandResult(
            exit_code=1,
            message=(
                f"{e}. Your result is kept; run 'decision-timeout resume' to retry saving."
            ),
        )

    message = None
    if getattr(args, "insight", False):
        message = await engine.get_insight(getattr(args, "mood", None))
    return CommandResult(exit_code=0, records=[record], message=message)


class DecideCommand(BaseCommand):
    """Command to create a decision and run its countdown."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "decide"

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the decide command.

        Args:
            args: Parsed arguments with question, pros, cons and timing.

        Returns:
            CommandResult with the stored record.

        """
        engine = build_engine(args)
        view = engine.recover()

        if view.state == TimerState.counting:
            return CommandResult(
                exit_code=1,
                message="A countdown is already running; use 'decision-timeout resume'.",
            )
        if view.state == TimerState.resolved_unsaved:
            return CommandResult(
                exit_code=1,
                message="A previous decision is not saved yet; use 'decision-timeout resume'.",
            )
        if view.state == TimerState.resolved:
            logger.info("previous_decision_recovered", record_id=view.record.id)
            print("A countdown finished while you were away:")
            print(format_record(view.record, json_output=getattr(args, "json_output", False)))
            engine.new_draft()

        engine.set_question(args.question)
        for pro in args.pro:
            engine.add_pro(pro)
        for con in args.con:
            engine.add_con(con)
        if args.star_pro is not None:
            engine.star(Side.pro, args.star_pro)
        if args.star_con is not None:
            engine.star(Side.con, args.star_con)

        duration = args.seconds
        if args.minutes is not None:
            duration = args.minutes * 60
        view = engine.start(duration)
        draft = view.draft
        leaning = engine.timer.policy.explain(
            draft.pros, draft.cons, draft.starred_pro, draft.starred_con
        )
        print(f"Leaning: {leaning}")

        if args.decide is not None:
            engine.decide_now(_FORCED[args.decide])
        else:
            if args.extend:
                engine.extend()
            await run_countdown(engine, on_tick=_print_tick)

        return await _finish(engine, args)


class ResumeCommand(BaseCommand):
    """Command to pick up an interrupted countdown."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "resume"

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the resume command.

        Args:
            args: Parsed arguments.

        Returns:
            CommandResult with the stored record, if there was a countdown.

        """
        engine = build_engine(args)
        view = engine.recover()

        if view.state == TimerState.configuring:
            return CommandResult(exit_code=0, message="No countdown in progress.")

        if view.state == TimerState.counting:
            await run_countdown(engine, on_tick=_print_tick)

        return await _finish(engine, args)
