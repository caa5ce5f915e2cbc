"""CLI main entry point.

This module provides the main entry point for the decision-timeout CLI.
"""

import argparse
import asyncio
import sys
import traceback

from decision_timeout.cli.commands import (
    BaseCommand,
    DecideCommand,
    ListCommand,
    RateCommand,
    ResumeCommand,
)
from decision_timeout.cli.formatters import format_record, format_records
from decision_timeout.cli.parser import create_parser
from decision_timeout.cli.validators import validate_args
from decision_timeout.exceptions import DecisionTimeoutError
from decision_timeout.logging_config import configure_logging, get_logger

__all__ = ["main", "CommandDispatcher"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers."""

    def __init__(self) -> None:
        """Initialize the command dispatcher with all command handlers."""
        self._commands: dict[str, BaseCommand] = {
            cmd.name: cmd
            for cmd in (DecideCommand(), ResumeCommand(), ListCommand(), RateCommand())
        }

    async def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the command named in the arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        """
        command = self._commands[args.command]
        result = await command.execute(args)
        json_output = getattr(args, "json_output", False)

        if args.command == "list":
            print(format_records(result.records, json_output=json_output))
        else:
            for record in result.records:
                print(format_record(record, json_output=json_output))

        if result.message:
            stream = sys.stderr if result.exit_code else sys.stdout
            print(result.message, file=stream)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=getattr(args, "verbose", False), json_output=False)

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return asyncio.run(dispatcher.dispatch(args))

    except KeyboardInterrupt:
        print("\nInterrupted. The clock keeps running; use 'decision-timeout resume'.")
        return 130

    except DecisionTimeoutError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
