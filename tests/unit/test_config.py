"""Unit tests for settings and plan presets."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from decision_timeout.config.plans import allowed_durations, validate_duration_for_plan
from decision_timeout.config.settings import (
    InsightSettings,
    Settings,
    TimerSettings,
    get_settings,
)
from decision_timeout.models.enums import UserPlan
from decision_timeout.models.exceptions import ValidationError


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestTimerSettings:
    """Tests for TimerSettings."""

    def test_defaults(self) -> None:
        """Test the reference durations and limits."""
        settings = TimerSettings()
        assert settings.default_duration_seconds == 300
        assert settings.extend_bonus_seconds == 300
        assert settings.lock_window_seconds == 86400
        assert settings.max_items_per_side == 5
        assert settings.max_item_length == 100

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test DECISION_TIMER_ variables override defaults."""
        monkeypatch.setenv("DECISION_TIMER_DEFAULT_DURATION_SECONDS", "180")
        monkeypatch.setenv("DECISION_TIMER_LOCK_WINDOW_SECONDS", "60")
        settings = TimerSettings()
        assert settings.default_duration_seconds == 180
        assert settings.lock_window_seconds == 60

    def test_rejects_zero_duration(self) -> None:
        """Test a zero default duration is invalid."""
        with pytest.raises(PydanticValidationError):
            TimerSettings(default_duration_seconds=0)


class TestInsightSettings:
    """Tests for InsightSettings."""

    def test_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test insight is opt-in."""
        monkeypatch.delenv("DECISION_INSIGHT_ENABLED", raising=False)
        assert InsightSettings().enabled is False

    def test_env_enables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test DECISION_INSIGHT_ENABLED turns insight on."""
        monkeypatch.setenv("DECISION_INSIGHT_ENABLED", "true")
        assert InsightSettings().enabled is True


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_cached(self, fresh_settings: None) -> None:
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_reads_storage_env(
        self, fresh_settings: None, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test the data directory can be set from the environment."""
        monkeypatch.setenv("DECISION_STORAGE_DATA_DIR", str(tmp_path))
        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.storage.data_dir == tmp_path


class TestPlans:
    """Tests for plan timer presets."""

    @pytest.mark.parametrize(
        ("plan", "expected"),
        [
            (UserPlan.guest, [5]),
            (UserPlan.free, [3, 5]),
            (UserPlan.premium, [3, 5, 10, 15]),
        ],
    )
    def test_allowed_durations(self, plan: UserPlan, expected: list[int]) -> None:
        """Test each plan's presets."""
        assert allowed_durations(plan) == expected

    def test_premium_allows_fifteen(self) -> None:
        """Test a premium user may pick fifteen minutes."""
        validate_duration_for_plan(UserPlan.premium, 15)

    def test_free_rejects_ten(self) -> None:
        """Test a free user may not pick ten minutes."""
        with pytest.raises(ValidationError) as exc_info:
            validate_duration_for_plan(UserPlan.free, 10)
        assert exc_info.value.field == "duration"
        assert "3, 5" in exc_info.value.reason
