"""Tests for the DecisionDraft model."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from decision_timeout.models.draft import DecisionDraft
from decision_timeout.models.enums import Side
from decision_timeout.models.exceptions import ValidationError

LIMITS = {"max_items": 5, "max_length": 100}


def draft_with(pros: list[str] = (), cons: list[str] = ()) -> DecisionDraft:
    draft = DecisionDraft()
    for pro in pros:
        draft = draft.with_item(Side.pro, pro, **LIMITS)
    for con in cons:
        draft = draft.with_item(Side.con, con, **LIMITS)
    return draft


class TestDraftItems:
    """Tests for adding and removing items."""

    def test_with_item_returns_new_draft(self) -> None:
        """Test that adding an item leaves the original untouched."""
        original = DecisionDraft()
        updated = original.with_item(Side.pro, "more pay", **LIMITS)

        assert original.pros == ()
        assert updated.pros == ("more pay",)

    def test_item_text_is_stripped(self) -> None:
        """Test that surrounding whitespace is removed."""
        draft = DecisionDraft().with_item(Side.con, "  commute  ", **LIMITS)
        assert draft.cons == ("commute",)

    def test_blank_item_rejected(self) -> None:
        """Test that an empty item is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            DecisionDraft().with_item(Side.pro, "   ", **LIMITS)
        assert exc_info.value.field == "pros"

    def test_item_at_max_length_accepted(self) -> None:
        """Test that exactly 100 characters is allowed."""
        draft = DecisionDraft().with_item(Side.pro, "x" * 100, **LIMITS)
        assert len(draft.pros[0]) == 100

    def test_item_over_max_length_rejected(self) -> None:
        """Test that 101 characters is rejected."""
        with pytest.raises(ValidationError, match="at most 100 characters"):
            DecisionDraft().with_item(Side.pro, "x" * 101, **LIMITS)

    def test_sixth_item_rejected(self) -> None:
        """Test that a side holds at most five items."""
        draft = draft_with(cons=["a", "b", "c", "d", "e"])

        with pytest.raises(ValidationError, match="at most 5 cons"):
            draft.with_item(Side.con, "f", **LIMITS)
        assert len(draft.cons) == 5

    def test_sides_have_separate_capacity(self) -> None:
        """Test that a full pros list does not block cons."""
        draft = draft_with(pros=["a", "b", "c", "d", "e"])
        draft = draft.with_item(Side.con, "z", **LIMITS)
        assert draft.item_count == 6

    def test_without_item_removes_by_index(self) -> None:
        """Test removing the middle item keeps order."""
        draft = draft_with(pros=["a", "b", "c"]).without_item(Side.pro, 1)
        assert draft.pros == ("a", "c")

    def test_without_item_out_of_range(self) -> None:
        """Test removing a missing index is a validation error."""
        with pytest.raises(ValidationError):
            draft_with(pros=["a"]).without_item(Side.pro, 3)

    def test_without_item_negative_index(self) -> None:
        """Test negative indexes are not treated as from-the-end."""
        with pytest.raises(ValidationError):
            draft_with(pros=["a", "b"]).without_item(Side.pro, -1)


class TestDraftStars:
    """Tests for starred item bookkeeping."""

    def test_star_sets_index(self) -> None:
        """Test starring an item."""
        draft = draft_with(pros=["a", "b"]).with_star(Side.pro, 1)
        assert draft.starred_pro == 1
        assert draft.starred_con is None

    def test_star_none_clears(self) -> None:
        """Test clearing the star."""
        draft = draft_with(cons=["a"]).with_star(Side.con, 0).with_star(Side.con, None)
        assert draft.starred_con is None

    def test_star_out_of_range_rejected(self) -> None:
        """Test starring a missing item."""
        with pytest.raises(ValidationError) as exc_info:
            draft_with(pros=["a"]).with_star(Side.pro, 1)
        assert exc_info.value.field == "starred_pro"

    def test_removing_starred_item_clears_star(self) -> None:
        """Test the star disappears with its item."""
        draft = draft_with(pros=["a", "b", "c"]).with_star(Side.pro, 1)
        draft = draft.without_item(Side.pro, 1)
        assert draft.starred_pro is None

    def test_removing_earlier_item_shifts_star(self) -> None:
        """Test the star follows its item when an earlier one is removed."""
        draft = draft_with(pros=["a", "b", "c"]).with_star(Side.pro, 2)
        draft = draft.without_item(Side.pro, 0)
        assert draft.starred_pro == 1
        assert draft.pros[draft.starred_pro] == "c"

    def test_removing_later_item_keeps_star(self) -> None:
        """Test the star is unchanged when a later item is removed."""
        draft = draft_with(cons=["a", "b", "c"]).with_star(Side.con, 0)
        draft = draft.without_item(Side.con, 2)
        assert draft.starred_con == 0


class TestDraftQuestion:
    """Tests for the question field."""

    def test_with_question_strips(self) -> None:
        """Test the question is stored stripped."""
        draft = DecisionDraft().with_question("  Take the job?  ", max_length=500)
        assert draft.question == "Take the job?"

    def test_empty_question_rejected(self) -> None:
        """Test an empty question is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            DecisionDraft().with_question("", max_length=500)
        assert exc_info.value.field == "question"

    def test_long_question_rejected(self) -> None:
        """Test the question length limit."""
        with pytest.raises(ValidationError):
            DecisionDraft().with_question("q" * 501, max_length=500)


class TestDraftImmutability:
    """Tests that drafts cannot be changed in place."""

    def test_assignment_raises(self) -> None:
        """Test frozen model rejects attribute assignment."""
        draft = DecisionDraft()
        with pytest.raises(PydanticValidationError):
            draft.question = "changed"

    def test_is_started(self) -> None:
        """Test is_started follows the start timestamp."""
        assert DecisionDraft().is_started is False
        assert DecisionDraft(started_at_epoch_ms=1, timer_duration_seconds=5).is_started
