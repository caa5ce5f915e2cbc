"""Asyncio tick driver for a running countdown.

There is no shared interval: each call drives exactly one engine and
stops as soon as that engine leaves counting.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from decision_timeout.config.settings import get_settings
from decision_timeout.logging_config import get_logger
from decision_timeout.models.effects import TimerView
from decision_timeout.models.enums import TimerState
from decision_timeout.timer.engine import CommitmentEngine

__all__ = ["run_countdown"]

logger = get_logger(__name__)


async def run_countdown(
    engine: CommitmentEngine,
    interval_seconds: float | None = None,
    on_tick: Callable[[TimerView], None] | None = None,
) -> TimerView:
    """Tick an engine until its countdown resolves or is cancelled.

    Each tick recomputes remaining time from the wall clock, so a late or
    skipped tick never stretches the countdown.

    Args:
        engine: The engine to drive; must already be counting.
        interval_seconds: Seconds between ticks (default from settings).
        on_tick: Called with the view after every tick.

    Returns:
        The view once the engine has left counting.

    """
    interval = (
        interval_seconds
        if interval_seconds is not None
        else get_settings().timer.tick_interval_seconds
    )
    view = engine.view()
    logger.debug("countdown_loop_started", user_id=engine.user_id, interval=interval)

    while engine.state == TimerState.counting:
        view = engine.tick()
        if on_tick is not None:
            on_tick(view)
        if engine.state != TimerState.counting:
            break
        await asyncio.sleep(interval)

    view = engine.view()
    logger.debug("countdown_loop_stopped", user_id=engine.user_id, state=view.state.value)
    return view
