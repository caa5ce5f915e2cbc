"""Configuration for decision-timeout.

Centralized settings via pydantic-settings and per-plan timer presets.
"""

from decision_timeout.config.settings import (
    InsightSettings,
    Settings,
    StorageSettings,
    TimerSettings,
    get_settings,
)

__all__ = [
    "get_settings",
    "InsightSettings",
    "Settings",
    "StorageSettings",
    "TimerSettings",
]
