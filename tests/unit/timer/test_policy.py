"""Tests for resolution policies and tie breakers."""

import random

import pytest

from decision_timeout.models.enums import DecisionResult
from decision_timeout.timer.policy import (
    CountPolicy,
    FixedTieBreaker,
    RandomTieBreaker,
    StarWeightedPolicy,
)


class TestCountPolicy:
    """Tests for the default pros-vs-cons count."""

    @pytest.mark.parametrize(
        ("pros", "cons"),
        [(1, 0), (2, 1), (5, 4), (5, 0)],
    )
    def test_more_pros_is_yes(self, pros: int, cons: int) -> None:
        """Test that more pros than cons resolves YES."""
        policy = CountPolicy(FixedTieBreaker(DecisionResult.no))
        assert policy.resolve(["p"] * pros, ["c"] * cons) == DecisionResult.yes

    @pytest.mark.parametrize(
        ("pros", "cons"),
        [(0, 1), (1, 2), (4, 5), (0, 5)],
    )
    def test_more_cons_is_no(self, pros: int, cons: int) -> None:
        """Test that more cons than pros resolves NO."""
        policy = CountPolicy(FixedTieBreaker(DecisionResult.yes))
        assert policy.resolve(["p"] * pros, ["c"] * cons) == DecisionResult.no

    @pytest.mark.parametrize("n", [1, 3, 5])
    @pytest.mark.parametrize("coin", [DecisionResult.yes, DecisionResult.no])
    def test_tie_uses_tie_breaker(self, n: int, coin: DecisionResult) -> None:
        """Test that equal counts return exactly the tie breaker's choice."""
        policy = CountPolicy(FixedTieBreaker(coin))
        assert policy.resolve(["p"] * n, ["c"] * n) == coin

    def test_stars_ignored(self) -> None:
        """Test that stars do not change the count policy."""
        policy = CountPolicy(FixedTieBreaker(DecisionResult.no))
        assert policy.resolve(["p"], ["c"], starred_pro=0) == DecisionResult.no

    def test_tie_breaker_not_consulted_without_tie(self) -> None:
        """Test the coin is only flipped on a tie."""

        class ExplodingCoin:
            def choose(self) -> DecisionResult:
                raise AssertionError("coin should not be flipped")

        assert CountPolicy(ExplodingCoin()).resolve(["p", "q"], ["c"]) == DecisionResult.yes

    def test_explain(self) -> None:
        """Test the human-readable reasons."""
        policy = CountPolicy()
        assert policy.explain(["a", "b"], ["c"]) == "More pros than cons (2 vs 1)"
        assert policy.explain(["a"], ["b", "c"]) == "More cons than pros (2 vs 1)"
        assert policy.explain(["a"], ["b"]) == "Tied pros and cons (1 vs 1) - coin flip"


class TestStarWeightedPolicy:
    """Tests for the optional star-weighted policy."""

    def test_star_breaks_tie(self) -> None:
        """Test a starred pro outweighs an unstarred con."""
        policy = StarWeightedPolicy(FixedTieBreaker(DecisionResult.no))
        assert policy.resolve(["p"], ["c"], starred_pro=0) == DecisionResult.yes

    def test_both_starred_is_tie(self) -> None:
        """Test stars on both sides cancel out."""
        policy = StarWeightedPolicy(FixedTieBreaker(DecisionResult.no))
        result = policy.resolve(["p"], ["c"], starred_pro=0, starred_con=0)
        assert result == DecisionResult.no

    def test_explain_mentions_stars(self) -> None:
        """Test the reason notes that stars count double."""
        text = StarWeightedPolicy().explain(["a", "b"], ["c"], starred_con=0)
        assert text == "Tied pros and cons (2 vs 2) (starred items count double) - coin flip"


class TestTieBreakers:
    """Tests for tie breaker strategies."""

    def test_fixed(self) -> None:
        """Test fixed tie breaker always returns its result."""
        coin = FixedTieBreaker(DecisionResult.no)
        assert {coin.choose() for _ in range(10)} == {DecisionResult.no}

    def test_random_is_reproducible_with_seed(self) -> None:
        """Test seeded coins flip the same sequence."""
        a = RandomTieBreaker(random.Random(42))
        b = RandomTieBreaker(random.Random(42))
        assert [a.choose() for _ in range(20)] == [b.choose() for _ in range(20)]

    def test_random_produces_both_results(self) -> None:
        """Test the coin lands on both sides over many flips."""
        coin = RandomTieBreaker(random.Random(7))
        assert {coin.choose() for _ in range(100)} == {DecisionResult.yes, DecisionResult.no}
