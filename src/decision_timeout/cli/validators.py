"""Validation utilities for CLI arguments."""

import argparse

from decision_timeout.config.plans import validate_duration_for_plan
from decision_timeout.models.enums import UserPlan
from decision_timeout.models.exceptions import ValidationError

__all__ = ["validate_args"]


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    if args.command != "decide" and args.command != "resume":
        return None

    mood = getattr(args, "mood", None)
    if mood is not None and not 1 <= mood <= 5:
        return "Error: --mood must be between 1 and 5"

    if args.command == "resume":
        return None

    if args.minutes is not None and args.minutes <= 0:
        return "Error: --minutes must be positive"
    if args.seconds is not None and args.seconds <= 0:
        return "Error: --seconds must be positive"

    if args.plan is not None:
        if args.minutes is None:
            return "Error: --plan requires --minutes"
        try:
            validate_duration_for_plan(UserPlan(args.plan), args.minutes)
        except ValidationError as e:
            return f"Error: {e.reason}"

    if args.extend and args.decide:
        return "Error: --extend cannot be combined with --decide"

    return None
