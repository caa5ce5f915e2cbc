"""Default configuration values for decision-timeout.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

# Draft limits
MAX_ITEMS_PER_SIDE = 5
MAX_ITEM_LENGTH = 100
MAX_QUESTION_LENGTH = 500

# Timer (seconds)
DEFAULT_TIMER_DURATION_SECONDS = 300
EXTEND_BONUS_SECONDS = 300
DEFAULT_TICK_INTERVAL_SECONDS = 1.0
URGENT_THRESHOLD_SECONDS = 30

# Records
LOCK_WINDOW_SECONDS = 24 * 60 * 60

# Storage
DEFAULT_DATA_DIR = ".decision-timeout"
SNAPSHOT_DIR_NAME = "snapshots"
RECORDS_FILE_NAME = "decisions.json"

# Insight service
DEFAULT_INSIGHT_MODEL = "claude-haiku-4-5@20251001"
DEFAULT_INSIGHT_MAX_RETRIES = 2
DEFAULT_INSIGHT_RETRY_DELAY_SECONDS = 1.0
DEFAULT_INSIGHT_TIMEOUT_SECONDS = 20

# Timer presets per plan, in minutes
PLAN_TIMER_MINUTES: dict[str, list[int]] = {
    "guest": [5],
    "free": [3, 5],
    "premium": [3, 5, 10, 15],
}

# Validation ranges
TIMER_DURATION_MIN = 1
TIMER_DURATION_MAX = 24 * 60 * 60
TICK_INTERVAL_MIN = 0.01
TICK_INTERVAL_MAX = 60.0
