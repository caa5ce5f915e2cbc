"""Timer presets per user plan."""

from decision_timeout.config.defaults import PLAN_TIMER_MINUTES
from decision_timeout.models.enums import UserPlan
from decision_timeout.models.exceptions import ValidationError

__all__ = ["allowed_durations", "validate_duration_for_plan"]


def allowed_durations(plan: UserPlan) -> list[int]:
    """Get the timer presets available to a plan.

    Args:
        plan: The user's plan.

    Returns:
        Allowed durations in minutes, shortest first.

    """
    return list(PLAN_TIMER_MINUTES.get(plan.value, PLAN_TIMER_MINUTES["guest"]))


def validate_duration_for_plan(plan: UserPlan, minutes: int) -> None:
    """Check that a plan may use a timer of the given length.

    Args:
        plan: The user's plan.
        minutes: Requested duration in minutes.

    Raises:
        ValidationError: If the duration is not a preset of the plan.

    """
    allowed = allowed_durations(plan)
    if minutes not in allowed:
        raise ValidationError(
            "duration",
            f"{minutes} minute timer is not available on the {plan.value} plan "
            f"(choose from {', '.join(str(m) for m in allowed)})",
        )
