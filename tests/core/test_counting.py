"""
Unit Tests for Word Counting and Content Hashing
"""

from freeout.core.models import WordCount
from freeout.core.utils.counting import count_words
from freeout.core.utils.hashing import compute_hash


class TestCountWords:
    """Tests for count_words()."""

    def test_count_when_plain_sentence_then_counts_words_and_characters(self):
        assert count_words("One two three four") == WordCount(words=4, characters=18)

    def test_count_when_empty_then_zero(self):
        assert count_words("") == WordCount.zero()

    def test_count_when_punctuation_only_then_no_words(self):
        assert count_words("--- * ... !").words == 0

    def test_count_when_contractions_and_hyphens_then_single_words(self):
        assert count_words("don't well-known").words == 2

    def test_count_when_numbers_then_counted(self):
        assert count_words("Title 1").words == 2

    def test_count_when_cjk_then_each_character_is_a_word(self):
        assert count_words("你好 world").words == 3

    def test_count_when_multiline_then_newlines_separate(self):
        assert count_words("Title 1\nOne two three four\nFive six seven eight").words == 10


class TestComputeHash:
    """Tests for compute_hash()."""

    def test_hash_when_same_text_then_same_value(self):
        assert compute_hash("hello") == compute_hash("hello")

    def test_hash_when_different_text_then_different_value(self):
        assert compute_hash("hello") != compute_hash("hello!")

    def test_hash_when_any_text_then_fits_64_bits(self):
        value = compute_hash("some content")
        assert 0 <= value < 2 ** 64
