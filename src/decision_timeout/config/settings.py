"""Application settings using pydantic-settings.

Settings can be overridden via environment variables with the
appropriate prefix.

Environment Variables:
    DECISION_TIMER_DEFAULT_DURATION_SECONDS: Countdown length when none is given
    DECISION_TIMER_EXTEND_BONUS_SECONDS: Seconds added by the one-time extend
    DECISION_TIMER_TICK_INTERVAL_SECONDS: Polling interval of the tick driver
    DECISION_TIMER_LOCK_WINDOW_SECONDS: Delay before an outcome may be rated
    DECISION_STORAGE_DATA_DIR: Directory for snapshots and records
    DECISION_INSIGHT_ENABLED: Whether to request an insight after resolution
    DECISION_INSIGHT_MODEL: Model used for insight text
    DECISION_INSIGHT_MAX_RETRIES: Attempts before falling back
    DECISION_INSIGHT_RETRY_DELAY_SECONDS: Base backoff delay
    DECISION_INSIGHT_TIMEOUT_SECONDS: Per-request timeout
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from decision_timeout.config.defaults import (
    DEFAULT_DATA_DIR,
    DEFAULT_INSIGHT_MAX_RETRIES,
    DEFAULT_INSIGHT_MODEL,
    DEFAULT_INSIGHT_RETRY_DELAY_SECONDS,
    DEFAULT_INSIGHT_TIMEOUT_SECONDS,
    DEFAULT_TICK_INTERVAL_SECONDS,
    DEFAULT_TIMER_DURATION_SECONDS,
    EXTEND_BONUS_SECONDS,
    LOCK_WINDOW_SECONDS,
    MAX_ITEM_LENGTH,
    MAX_ITEMS_PER_SIDE,
    MAX_QUESTION_LENGTH,
    TICK_INTERVAL_MAX,
    TICK_INTERVAL_MIN,
    TIMER_DURATION_MAX,
    TIMER_DURATION_MIN,
)

__all__ = [
    "TimerSettings",
    "StorageSettings",
    "InsightSettings",
    "Settings",
    "get_settings",
]


class TimerSettings(BaseSettings):
    """Settings for the decision timer.

    Attributes:
        default_duration_seconds: Countdown length when none is given.
        extend_bonus_seconds: Seconds added by the one-time extend.
        tick_interval_seconds: Polling interval of the tick driver.
        lock_window_seconds: Delay before a record's outcome may be rated.
        max_items_per_side: Maximum pros (or cons) in a draft.
        max_item_length: Maximum characters in one pro or con.
        max_question_length: Maximum characters in the question.

    """

    model_config = SettingsConfigDict(
        env_prefix="DECISION_TIMER_",
        extra="ignore",
    )

    default_duration_seconds: int = Field(
        default=DEFAULT_TIMER_DURATION_SECONDS,
        ge=TIMER_DURATION_MIN,
        le=TIMER_DURATION_MAX,
        description="Countdown length in seconds when none is given",
    )
    extend_bonus_seconds: int = Field(
        default=EXTEND_BONUS_SECONDS,
        ge=1,
        le=TIMER_DURATION_MAX,
        description="Seconds added by the one-time extend",
    )
    tick_interval_seconds: float = Field(
        default=DEFAULT_TICK_INTERVAL_SECONDS,
        ge=TICK_INTERVAL_MIN,
        le=TICK_INTERVAL_MAX,
        description="Polling interval of the tick driver in seconds",
    )
    lock_window_seconds: int = Field(
        default=LOCK_WINDOW_SECONDS,
        ge=0,
        description="Seconds after creation before an outcome may be rated",
    )
    max_items_per_side: int = Field(default=MAX_ITEMS_PER_SIDE, ge=1, le=50)
    max_item_length: int = Field(default=MAX_ITEM_LENGTH, ge=1, le=1000)
    max_question_length: int = Field(default=MAX_QUESTION_LENGTH, ge=1, le=5000)


class StorageSettings(BaseSettings):
    """Settings for snapshot and record storage.

    Attributes:
        data_dir: Directory holding snapshot files and the record file.

    """

    model_config = SettingsConfigDict(
        env_prefix="DECISION_STORAGE_",
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path.home() / DEFAULT_DATA_DIR,
        description="Directory for snapshots and records",
    )


class InsightSettings(BaseSettings):
    """Settings for the post-resolution insight service.

    Attributes:
        enabled: Whether to request an insight after resolution.
        model: Model identifier for insight generation.
        max_retries: Attempts before falling back to canned text.
        retry_delay_seconds: Base delay between attempts.
        timeout_seconds: Per-request timeout.

    """

    model_config = SettingsConfigDict(
        env_prefix="DECISION_INSIGHT_",
        extra="ignore",
    )

    enabled: bool = Field(default=False)
    model: str = Field(default=DEFAULT_INSIGHT_MODEL)
    max_retries: int = Field(default=DEFAULT_INSIGHT_MAX_RETRIES, ge=1, le=10)
    retry_delay_seconds: float = Field(
        default=DEFAULT_INSIGHT_RETRY_DELAY_SECONDS, ge=0.0, le=30.0
    )
    timeout_seconds: int = Field(default=DEFAULT_INSIGHT_TIMEOUT_SECONDS, ge=1, le=300)


class Settings(BaseSettings):
    """Root settings container.

    Use get_settings() to access the cached singleton instance.

    Attributes:
        timer: Timer settings.
        storage: Storage settings.
        insight: Insight service settings.

    """

    model_config = SettingsConfigDict(
        env_prefix="DECISION_",
        extra="ignore",
    )

    timer: TimerSettings = Field(default_factory=TimerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    insight: InsightSettings = Field(default_factory=InsightSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
