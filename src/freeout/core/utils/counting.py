"""
Word and character counting.

A word is a run of letters, digits and combining marks, optionally
joined by apostrophes or hyphens ("don't", "well-known"). Han, kana and
Hangul characters count as one word each, so CJK prose is counted by
character. Characters are counted as code points.
"""

from __future__ import annotations

import regex

from ..models.statistics import WordCount

_CJK = r"\p{Han}\p{Hiragana}\p{Katakana}\p{Hangul}"

_WORD_RE = regex.compile(
    rf"[{_CJK}]"
    rf"|[[\p{{L}}\p{{N}}\p{{M}}]--[{_CJK}]]+"
    rf"(?:['’\-][[\p{{L}}\p{{N}}\p{{M}}]--[{_CJK}]]+)*",
    flags=regex.V1,
)


def count_words(text: str) -> WordCount:
    """
    Count words and characters in ``text``.

    Example:
        >>> count_words("One two three four")
        WordCount(words=4, characters=18)
        >>> count_words("你好 world").words
        3
    """
    words = sum(1 for _ in _WORD_RE.finditer(text))
    return WordCount(words=words, characters=len(text))
