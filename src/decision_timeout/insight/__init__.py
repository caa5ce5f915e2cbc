"""Optional reflection text shown after a decision is made."""

from decision_timeout.insight.exceptions import InsightError
from decision_timeout.insight.service import InsightService, TextCompleter

__all__ = ["InsightError", "InsightService", "TextCompleter"]
