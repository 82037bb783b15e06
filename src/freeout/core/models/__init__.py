"""
Core Models Package

Value types and the tree node used throughout the engine.

Positions, ranges, statistics and outline items are frozen dataclasses:
stages never edit them, they build new instances. Block is the one
mutable model, because each pipeline stage fills in more of it.
"""

from .position import Position, BlockRange
from .statistics import (
    DistributionMethod,
    WordCount,
    WordsTarget,
    WordsStatus,
    WordStatistics,
)
from .blocks import Block, Blocks
from .outline import Outline, OutlineItem

__all__ = [
    "Position",
    "BlockRange",
    "DistributionMethod",
    "WordCount",
    "WordsTarget",
    "WordsStatus",
    "WordStatistics",
    "Block",
    "Blocks",
    "Outline",
    "OutlineItem",
]
