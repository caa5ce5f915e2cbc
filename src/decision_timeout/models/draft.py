"""Decision draft model.

A DecisionDraft is the in-progress decision: a question plus pros and
cons, optionally starred, and the countdown parameters once started.
Drafts are immutable; every edit returns a new draft so a finalized
record can never be affected by later changes.
"""

from __future__ import annotations

from pydantic import Field

from decision_timeout.models.base import FrozenSchema
from decision_timeout.models.enums import Side
from decision_timeout.models.exceptions import ValidationError

__all__ = ["DecisionDraft"]


class DecisionDraft(FrozenSchema):
    """Immutable in-progress decision.

    Attributes:
        question: The yes/no question being decided.
        pros: Reasons for YES, in entry order.
        cons: Reasons for NO, in entry order.
        starred_pro: Index of the starred pro, if any. Advisory only.
        starred_con: Index of the starred con, if any. Advisory only.
        timer_duration_seconds: Configured countdown length, set on start.
        started_at_epoch_ms: Wall-clock start of the countdown, set on start.
        pause_used: Whether the one-time extension was consumed.

    """

    question: str = ""
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()
    starred_pro: int | None = None
    starred_con: int | None = None
    timer_duration_seconds: int | None = Field(default=None, gt=0)
    started_at_epoch_ms: int | None = None
    pause_used: bool = False

    @property
    def is_started(self) -> bool:
        """Whether the countdown has begun."""
        return self.started_at_epoch_ms is not None

    @property
    def item_count(self) -> int:
        """Total number of pros and cons."""
        return len(self.pros) + len(self.cons)

    def items(self, side: Side) -> tuple[str, ...]:
        """Get the items on one side."""
        return self.pros if side == Side.pro else self.cons

    def starred(self, side: Side) -> int | None:
        """Get the starred index on one side."""
        return self.starred_pro if side == Side.pro else self.starred_con

    def with_question(self, question: str, *, max_length: int) -> DecisionDraft:
        """Return a copy with a new question.

        Raises:
            ValidationError: If the question is empty or too long.

        """
        text = question.strip()
        if not text:
            raise ValidationError("question", "Enter the question you are deciding")
        if len(text) > max_length:
            raise ValidationError(
                "question", f"Question must be at most {max_length} characters"
            )
        return self.model_copy(update={"question": text})

    def with_item(
        self,
        side: Side,
        text: str,
        *,
        max_items: int,
        max_length: int,
    ) -> DecisionDraft:
        """Return a copy with an item appended to one side.

        Args:
            side: Which list to append to.
            text: The item text; surrounding whitespace is stripped.
            max_items: Capacity of the list.
            max_length: Maximum characters per item.

        Raises:
            ValidationError: If the text is empty, too long, or the list is full.

        """
        field = _items_field(side)
        entry = text.strip()
        if not entry:
            raise ValidationError(field, f"A {side.value} cannot be empty")
        if len(entry) > max_length:
            raise ValidationError(
                field, f"Each {side.value} must be at most {max_length} characters"
            )
        current = self.items(side)
        if len(current) >= max_items:
            raise ValidationError(field, f"You can list at most {max_items} {field}")
        return self.model_copy(update={field: (*current, entry)})

    def without_item(self, side: Side, index: int) -> DecisionDraft:
        """Return a copy with one item removed.

        A star on the removed item is cleared; a star on a later item is
        shifted down so it keeps pointing at the same text.

        Raises:
            ValidationError: If the index is out of range.

        """
        field = _items_field(side)
        current = self.items(side)
        if not 0 <= index < len(current):
            raise ValidationError(field, f"No {side.value} at position {index}")

        starred = self.starred(side)
        if starred == index:
            starred = None
        elif starred is not None and starred > index:
            starred -= 1

        remaining = current[:index] + current[index + 1 :]
        return self.model_copy(
            update={field: remaining, _star_field(side): starred}
        )

    def with_star(self, side: Side, index: int | None) -> DecisionDraft:
        """Return a copy with the star on one side moved, or cleared with None.

        Raises:
            ValidationError: If the index is out of range.

        """
        if index is not None and not 0 <= index < len(self.items(side)):
            raise ValidationError(
                _star_field(side), f"No {side.value} at position {index} to star"
            )
        return self.model_copy(update={_star_field(side): index})


def _items_field(side: Side) -> str:
    return "pros" if side == Side.pro else "cons"


def _star_field(side: Side) -> str:
    return "starred_pro" if side == Side.pro else "starred_con"
