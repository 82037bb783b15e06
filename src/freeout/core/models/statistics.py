"""
Module: statistics

Purpose:
    Provides the word statistics value types attached to every block:
    raw counts, optional targets and the computed status that compares
    the two. Counts are additive so they can be rolled up a tree.

Key Functions:
    - WordCount.zero() / WordCount.__add__(): Additive counts
    - WordsTarget.uniform(words): Target with uniform distribution
    - WordsStatus.compute(actual, target): Balance against a target
    - WordStatistics.of(count): Statistics with only a count
    - to_dict() / from_dict() on every type

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.blocks.Block
    - engine.statistics (content processor, aggregator, distributor)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class DistributionMethod(str, Enum):
    """How a parent's target is shared among its children."""
    UNIFORM = "uniform"  # Each sub-block gets the same share of words

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class WordCount:
    """
    Word and character count of a piece of text.

    Attributes:
        words: Number of words (each CJK character counts as one word)
        characters: Number of characters (code points)

    Invariants:
        - words >= 0
        - characters >= 0

    Example:
        >>> WordCount(3, 15) + WordCount(2, 9)
        WordCount(words=5, characters=24)
    """

    words: int = 0
    characters: int = 0

    def __post_init__(self) -> None:
        """Validate counts on construction."""
        if self.words < 0:
            raise ValueError(f"words cannot be negative: {self.words}")
        if self.characters < 0:
            raise ValueError(f"characters cannot be negative: {self.characters}")

    @classmethod
    def zero(cls) -> WordCount:
        return cls(0, 0)

    def __add__(self, other: WordCount) -> WordCount:
        if not isinstance(other, WordCount):
            return NotImplemented
        return WordCount(
            words=self.words + other.words,
            characters=self.characters + other.characters,
        )

    def to_dict(self) -> dict:
        return {"words": self.words, "characters": self.characters}

    @classmethod
    def from_dict(cls, data: dict) -> WordCount:
        return cls(words=data.get("words", 0), characters=data.get("characters", 0))


@dataclass(frozen=True, slots=True)
class WordsTarget:
    """
    Expected number of words for a block (including its descendants).

    Attributes:
        words: Expected number of words
        distribution: How the target is shared among children.
            None is treated as UNIFORM by the distributor.
    """

    words: int = 0
    distribution: Optional[DistributionMethod] = None

    def __post_init__(self) -> None:
        """Validate target on construction."""
        if self.words < 0:
            raise ValueError(f"Target words cannot be negative: {self.words}")

    @classmethod
    def uniform(cls, words: int) -> WordsTarget:
        """Create a target distributed uniformly among children."""
        return cls(words=words, distribution=DistributionMethod.UNIFORM)

    def to_dict(self) -> dict:
        d: dict = {"words": self.words}
        if self.distribution is not None:
            d["distribution"] = str(self.distribution)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> WordsTarget:
        distribution = data.get("distribution")
        return cls(
            words=data.get("words", 0),
            distribution=DistributionMethod(distribution) if distribution else None,
        )


@dataclass(frozen=True, slots=True)
class WordsStatus:
    """
    Computed comparison of actual words against a target.

    A target of 100 words and an actual count of 120 gives a balance of 20.

    The adjusted target is the "real expectation": it accounts for words
    already consumed by preceding siblings. With a parent target of 500
    shared by three children, each nominally expects ~167 words; if the
    first two already used 400, the third's adjusted target is 100.

    Attributes:
        balance: actual - target (negative means under target)
        adjusted_target: Target after earlier siblings' consumption, if any
    """

    balance: int = 0
    adjusted_target: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate status on construction."""
        if self.adjusted_target is not None and self.adjusted_target < 0:
            raise ValueError(
                f"adjusted_target cannot be negative: {self.adjusted_target}"
            )

    @classmethod
    def compute(
        cls,
        actual: int,
        target: int,
        adjusted_target: Optional[int] = None,
    ) -> WordsStatus:
        """
        Compare an actual word count with its expectation.

        The adjusted target wins over the nominal target when present.

        Args:
            actual: Words actually written
            target: Nominal target words
            adjusted_target: Target corrected for sibling consumption

        Returns:
            WordsStatus with balance = actual - (adjusted_target or target)
        """
        expected = adjusted_target if adjusted_target is not None else target
        return cls(balance=actual - expected, adjusted_target=adjusted_target)

    def to_dict(self) -> dict:
        d: dict = {"balance": self.balance}
        if self.adjusted_target is not None:
            d["adjusted_target"] = self.adjusted_target
        return d

    @classmethod
    def from_dict(cls, data: dict) -> WordsStatus:
        return cls(
            balance=data.get("balance", 0),
            adjusted_target=data.get("adjusted_target"),
        )


@dataclass(frozen=True, slots=True)
class WordStatistics:
    """
    Count, optional target and optional status for one block.

    Instances are immutable; stages build new ones with ``with_*``.
    """

    target: Optional[WordsTarget] = None
    status: Optional[WordsStatus] = None
    count: WordCount = WordCount()

    @classmethod
    def of(cls, count: WordCount) -> WordStatistics:
        """Statistics carrying only a count."""
        return cls(count=count)

    def with_count(self, count: WordCount) -> WordStatistics:
        return replace(self, count=count)

    def with_target(
        self,
        target: Optional[WordsTarget],
        status: Optional[WordsStatus],
    ) -> WordStatistics:
        return replace(self, target=target, status=status)

    def to_dict(self) -> dict:
        d: dict = {"count": self.count.to_dict()}
        if self.target is not None:
            d["target"] = self.target.to_dict()
        if self.status is not None:
            d["status"] = self.status.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> WordStatistics:
        return cls(
            target=WordsTarget.from_dict(data["target"]) if "target" in data else None,
            status=WordsStatus.from_dict(data["status"]) if "status" in data else None,
            count=WordCount.from_dict(data.get("count", {})),
        )
