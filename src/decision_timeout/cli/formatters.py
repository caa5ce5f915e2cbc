"""Output formatting utilities for CLI."""

import json
from datetime import datetime

from decision_timeout.config.defaults import URGENT_THRESHOLD_SECONDS
from decision_timeout.models.effects import TimerView
from decision_timeout.models.record import DecisionRecord

__all__ = [
    "format_time",
    "format_countdown",
    "format_record",
    "format_records",
]


def format_time(seconds: int) -> str:
    """Format seconds as M:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_countdown(view: TimerView) -> str:
    """Format one countdown line for the terminal."""
    remaining = view.remaining_seconds or 0
    line = f"{format_time(remaining)} remaining"
    if remaining <= URGENT_THRESHOLD_SECONDS:
        line += f" - time's up = decision made, no takebacks in {remaining}s"
    return line


def _format_epoch(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y-%m-%d %H:%M")


def format_record(record: DecisionRecord, json_output: bool = False) -> str:
    """Format a single decision record."""
    if json_output:
        return json.dumps(record.model_dump(mode="json"), indent=2)

    lines = [
        "",
        "=" * 60,
        f"Decision: {record.result.value}",
        "=" * 60,
        f"  Question: {record.question}",
        f"  Pros: {', '.join(record.pros) or '-'}",
        f"  Cons: {', '.join(record.cons) or '-'}",
        f"  Resolved by: {record.resolution.value.replace('_', ' ')}",
        f"  Id: {record.id}",
        f"  Rate it after: {_format_epoch(record.locked_until_epoch_ms)}",
    ]
    return "\n".join(lines)


def format_records(records: list[DecisionRecord], json_output: bool = False) -> str:
    """Format a list of decision records, one line each."""
    if json_output:
        return json.dumps([r.model_dump(mode="json") for r in records], indent=2)
    if not records:
        return "No decisions yet."

    lines = []
    for record in records:
        lines.append(
            f"{record.id[:8]}  {_format_epoch(record.created_at_epoch_ms)}  "
            f"{record.result.value:<3}  {record.outcome.value:<7}  {record.question}"
        )
    return "\n".join(lines)
