"""Resolution policies mapping pros and cons to a decision.

A policy is a pure function of the two lists. Ties are handed to an
injected TieBreaker so that randomness can be replaced in tests.
"""

import random
from collections.abc import Sequence
from typing import Protocol

from decision_timeout.models.enums import DecisionResult

__all__ = [
    "TieBreaker",
    "RandomTieBreaker",
    "FixedTieBreaker",
    "ResolutionPolicy",
    "CountPolicy",
    "StarWeightedPolicy",
]


class TieBreaker(Protocol):
    """Source of a result when both sides weigh the same."""

    def choose(self) -> DecisionResult:
        """Pick YES or NO."""
        ...


class RandomTieBreaker:
    """Fair coin flip.

    Attributes:
        rng: Random source; pass a seeded random.Random for reproducibility.

    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize the coin.

        Args:
            rng: Optional random source (default: a fresh random.Random).

        """
        self.rng = rng or random.Random()

    def choose(self) -> DecisionResult:
        """Pick YES or NO with equal probability."""
        return DecisionResult.yes if self.rng.random() < 0.5 else DecisionResult.no


class FixedTieBreaker:
    """Tie breaker that always returns the same result."""

    def __init__(self, result: DecisionResult) -> None:
        """Initialize with the result every tie resolves to."""
        self.result = result

    def choose(self) -> DecisionResult:
        """Return the fixed result."""
        return self.result


class ResolutionPolicy(Protocol):
    """Strategy that decides YES or NO from a draft's lists."""

    def resolve(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> DecisionResult:
        """Resolve the decision."""
        ...

    def explain(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> str:
        """Describe which way the lists lean and why."""
        ...


class CountPolicy:
    """More pros means YES, more cons means NO, a tie goes to the tie breaker.

    Stars are ignored.
    """

    def __init__(self, tie_breaker: TieBreaker | None = None) -> None:
        """Initialize the policy.

        Args:
            tie_breaker: Resolves equal counts (default: RandomTieBreaker).

        """
        self.tie_breaker = tie_breaker or RandomTieBreaker()

    def weights(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> tuple[int, int]:
        """Get the (pro, con) weights compared by resolve()."""
        return len(pros), len(cons)

    def resolve(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> DecisionResult:
        """Resolve the decision by comparing weights.

        Args:
            pros: Reasons for YES.
            cons: Reasons for NO.
            starred_pro: Starred pro index, if any.
            starred_con: Starred con index, if any.

        Returns:
            YES if pros outweigh cons, NO if cons outweigh pros,
            otherwise whatever the tie breaker chooses.

        """
        pro_weight, con_weight = self.weights(pros, cons, starred_pro, starred_con)
        if pro_weight > con_weight:
            return DecisionResult.yes
        if con_weight > pro_weight:
            return DecisionResult.no
        return self.tie_breaker.choose()

    def explain(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> str:
        """Describe which way the lists lean."""
        pro_weight, con_weight = self.weights(pros, cons, starred_pro, starred_con)
        note = self._note(starred_pro, starred_con)
        if pro_weight > con_weight:
            return f"More pros than cons ({pro_weight} vs {con_weight}){note}"
        if con_weight > pro_weight:
            return f"More cons than pros ({con_weight} vs {pro_weight}){note}"
        return f"Tied pros and cons ({pro_weight} vs {con_weight}){note} - coin flip"

    def _note(self, starred_pro: int | None, starred_con: int | None) -> str:
        return ""


class StarWeightedPolicy(CountPolicy):
    """Count policy where a starred item counts double."""

    def weights(
        self,
        pros: Sequence[str],
        cons: Sequence[str],
        starred_pro: int | None = None,
        starred_con: int | None = None,
    ) -> tuple[int, int]:
        """Get the (pro, con) weights, adding one per starred side."""
        pro_weight = len(pros) + (1 if starred_pro is not None else 0)
        con_weight = len(cons) + (1 if starred_con is not None else 0)
        return pro_weight, con_weight

    def _note(self, starred_pro: int | None, starred_con: int | None) -> str:
        if starred_pro is None and starred_con is None:
            return ""
        return " (starred items count double)"
