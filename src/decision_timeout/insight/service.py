"""Post-resolution insight text.

InsightService always returns something to show: a generated reflection
when the completion service answers, otherwise one of a few canned ones.
It is never on the path of saving a decision.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Sequence
from typing import Protocol

from decision_timeout.insight.exceptions import InsightError
from decision_timeout.logging_config import get_logger

__all__ = [
    "TextCompleter",
    "InsightService",
    "FALLBACK_INSIGHTS",
    "mood_label",
    "build_prompt",
]

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a wise decision-making coach who helps people make clearer, "
    "more confident decisions. You provide thoughtful insights without "
    "being prescriptive."
)

MOOD_LABELS = {
    1: "Stressed",
    2: "Worried",
    3: "Uncertain",
    4: "Hopeful",
    5: "Confident",
}

FALLBACK_INSIGHTS: tuple[tuple[str, str, str], ...] = (
    (
        "What would your future self thank you for?",
        "This decision isn't just about now. It's about the person you're "
        "becoming. Both paths have merit, but which aligns better with your "
        "long-term vision?",
        "The best time to make a decision was yesterday. The second best time is now.",
    ),
    (
        "What would happen if you chose based on growth over comfort?",
        "Fear often disguises itself as rational thinking. Consider whether "
        "your hesitation comes from genuine concerns or from avoiding the "
        "unfamiliar.",
        "Comfort is the enemy of progress. Sometimes the scariest path leads "
        "to the most beautiful destinations.",
    ),
    (
        "What advice would you give your best friend in this situation?",
        "We often see our own situations as more complex than they are. Step "
        "back and view this with the same clarity you'd offer someone you "
        "care about.",
        "Trust yourself. You know more than you think you do.",
    ),
)


class TextCompleter(Protocol):
    """Anything that turns a prompt into text."""

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate text for a prompt."""
        ...


def mood_label(score: int | None) -> str:
    """Map a 1-5 mood score to a word; unknown scores read as Uncertain."""
    return MOOD_LABELS.get(score or 0, "Uncertain")


def build_prompt(
    question: str,
    pros: Sequence[str],
    cons: Sequence[str],
    mood_score: int | None,
) -> str:
    """Build the insight prompt for one decision."""
    pros_text = ", ".join(pros) if pros else "None listed"
    cons_text = ", ".join(cons) if cons else "None listed"
    score = mood_score if mood_score in MOOD_LABELS else 3
    return f"""User is trying to decide: "{question}"

Their pros: {pros_text}
Their cons: {cons_text}
Their current emotional state: {mood_label(mood_score)} ({score}/5)

Please provide:
1. A helpful reflection question that broadens their perspective
2. A thoughtful, empathetic reframe of the situation to reduce anxiety and provide clarity
3. A brief inspiring quote or mindset shift to encourage clear thinking

Guidelines:
- Be supportive, calm, and insightful
- Avoid giving direct advice; instead encourage reflection
- Keep the tone professional yet warm

Format your response as:
**Reflection Question:** [question]

**Reframe:** [reframe paragraph]

**Mindset Shift:** [quote or insight]"""


def format_insight(question: str, reframe: str, quote: str) -> str:
    """Render an insight in the same layout the completion service is asked for."""
    return (
        f"**Reflection Question:** {question}\n\n"
        f"**Reframe:** {reframe}\n\n"
        f"**Mindset Shift:** {quote}"
    )


class InsightService:
    """Generates reflection text after a decision, degrading to canned text.

    Attributes:
        completer: Text-completion backend, or None to always use fallbacks.

    """

    def __init__(
        self,
        completer: TextCompleter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            completer: Text-completion backend (None disables generation).
            rng: Random source for picking a fallback.

        """
        self.completer = completer
        self._rng = rng or random.Random()

    def fallback(self) -> str:
        """Get one of the canned insights."""
        return format_insight(*self._rng.choice(FALLBACK_INSIGHTS))

    async def get_insight(
        self,
        question: str,
        pros: Sequence[str],
        cons: Sequence[str],
        mood_score: int | None = None,
    ) -> str:
        """Get insight text for a decision.

        Args:
            question: The decided question.
            pros: Reasons for YES.
            cons: Reasons for NO.
            mood_score: 1 (stressed) to 5 (confident), if known.

        Returns:
            Generated text, or a canned insight if generation fails.

        """
        if self.completer is None:
            return self.fallback()
        try:
            return await self.completer.generate(
                build_prompt(question, pros, cons, mood_score),
                system_prompt=SYSTEM_PROMPT,
            )
        except (InsightError, asyncio.TimeoutError, ConnectionError, OSError) as e:
            logger.warning("insight_fallback_used", error=str(e))
            return self.fallback()
