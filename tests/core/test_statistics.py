"""
Unit Tests for Word Statistics Models

Tests for WordCount, WordsTarget, WordsStatus and WordStatistics.
"""

import pytest

from freeout.core.models.statistics import (
    DistributionMethod,
    WordCount,
    WordsStatus,
    WordsTarget,
    WordStatistics,
)


class TestWordCount:
    """Tests for WordCount dataclass."""

    def test_add_when_two_counts_then_sums_fields(self):
        total = WordCount(3, 15) + WordCount(2, 9)
        assert total == WordCount(words=5, characters=24)

    def test_zero_when_added_then_identity(self):
        count = WordCount(7, 30)
        assert count + WordCount.zero() == count
        assert WordCount.zero() + count == count

    def test_add_when_associative_then_same_result(self):
        a, b, c = WordCount(1, 2), WordCount(3, 4), WordCount(5, 6)
        assert (a + b) + c == a + (b + c)

    def test_init_when_negative_words_then_raises_error(self):
        with pytest.raises(ValueError, match="words cannot be negative"):
            WordCount(words=-1)


class TestWordsTarget:
    """Tests for WordsTarget dataclass."""

    def test_uniform_when_created_then_uniform_distribution(self):
        target = WordsTarget.uniform(500)
        assert target.words == 500
        assert target.distribution is DistributionMethod.UNIFORM

    def test_init_when_negative_then_raises_error(self):
        with pytest.raises(ValueError, match="Target words cannot be negative"):
            WordsTarget(words=-10)

    def test_to_dict_when_round_tripped_then_equal(self):
        target = WordsTarget.uniform(42)
        assert target.to_dict() == {"words": 42, "distribution": "uniform"}
        assert WordsTarget.from_dict(target.to_dict()) == target

    def test_to_dict_when_no_distribution_then_omitted(self):
        assert WordsTarget(words=5).to_dict() == {"words": 5}


class TestWordsStatus:
    """Tests for WordsStatus dataclass."""

    def test_compute_when_over_target_then_positive_balance(self):
        assert WordsStatus.compute(120, 100).balance == 20

    def test_compute_when_under_target_then_negative_balance(self):
        assert WordsStatus.compute(80, 100).balance == -20

    def test_compute_when_adjusted_given_then_balance_uses_adjusted(self):
        status = WordsStatus.compute(150, 166, adjusted_target=100)
        assert status.balance == 50
        assert status.adjusted_target == 100


class TestWordStatistics:
    """Tests for WordStatistics dataclass."""

    def test_with_count_when_target_set_then_keeps_target(self):
        stats = WordStatistics(target=WordsTarget(10), status=WordsStatus(-10))
        updated = stats.with_count(WordCount(4, 20))
        assert updated.count.words == 4
        assert updated.target == WordsTarget(10)
        assert stats.count.words == 0

    def test_to_dict_when_round_tripped_then_equal(self):
        stats = WordStatistics(
            target=WordsTarget.uniform(10),
            status=WordsStatus(balance=-2, adjusted_target=8),
            count=WordCount(6, 30),
        )
        assert WordStatistics.from_dict(stats.to_dict()) == stats
