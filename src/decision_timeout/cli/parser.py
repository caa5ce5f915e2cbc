"""CLI argument parser configuration.

This module provides the argument parser for the decision-timeout CLI.
"""

import argparse
import os

from decision_timeout import __version__
from decision_timeout.models.enums import UserPlan

__all__ = ["create_parser"]

DEFAULT_USER = "local"


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="decision-timeout",
        description=(
            "Decision Timeout - list pros and cons, start the clock, and "
            "commit to YES or NO when time runs out."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Five minutes to decide, pros vs cons
  decision-timeout decide "Take the job?" --pro "more pay" --pro growth --con commute --minutes 5

  # Commit right away instead of waiting
  decision-timeout decide "Order pizza?" --pro tasty --con pricey --decide yes

  # Pick up a countdown that was interrupted
  decision-timeout resume

  # Review past decisions and rate one after its lock window
  decision-timeout list
  decision-timeout rate 1b9d6bcd good
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--user",
        default=os.environ.get("DECISION_USER", DEFAULT_USER),
        help="User id that owns snapshots and records (default: $DECISION_USER or 'local')",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory for snapshots and records (default from settings)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Output results as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    decide = subparsers.add_parser("decide", help="Start a new timed decision")
    decide.add_argument("question", help="The yes/no question to decide")
    decide.add_argument("--pro", action="append", default=[], help="A reason for YES")
    decide.add_argument("--con", action="append", default=[], help="A reason for NO")
    decide.add_argument("--star-pro", type=int, default=None, help="Index of the pro to star")
    decide.add_argument("--star-con", type=int, default=None, help="Index of the con to star")
    duration = decide.add_mutually_exclusive_group()
    duration.add_argument("--minutes", type=int, default=None, help="Timer length in minutes")
    duration.add_argument("--seconds", type=int, default=None, help="Timer length in seconds")
    decide.add_argument(
        "--plan",
        choices=[p.value for p in UserPlan],
        default=None,
        help="Restrict --minutes to the presets of this plan",
    )
    decide.add_argument(
        "--decide",
        choices=["yes", "no", "now"],
        default=None,
        help="Commit immediately: yes, no, or now (let pros and cons decide)",
    )
    decide.add_argument(
        "--extend",
        action="store_true",
        help="Use the one-time extension as soon as the countdown starts",
    )
    _add_policy_argument(decide)
    _add_insight_arguments(decide)

    resume = subparsers.add_parser("resume", help="Resume an interrupted countdown")
    _add_policy_argument(resume)
    _add_insight_arguments(resume)

    subparsers.add_parser("list", help="List past decisions, newest first")

    rate = subparsers.add_parser("rate", help="Rate a past decision as good or bad")
    rate.add_argument("record_id", help="Decision id (a unique prefix is enough)")
    rate.add_argument("outcome", choices=["good", "bad"], help="How the decision turned out")

    return parser


def _add_policy_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--weigh-stars",
        action="store_true",
        help="Count each starred item twice when the timer decides",
    )


def _add_insight_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--insight",
        action="store_true",
        help="Ask for a reflection after the decision is made",
    )
    parser.add_argument(
        "--mood",
        type=int,
        default=None,
        help="How you feel, 1 (stressed) to 5 (confident), used by --insight",
    )
