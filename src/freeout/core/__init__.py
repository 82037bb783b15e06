"""
Freeout Core Package

Shared data models, errors and utilities. Nothing here depends on the
engine or on any reader.

1. **Frozen value types**
   - Position, BlockRange, statistics and outline items never change
     after construction; new instances are created instead.

2. **One mutable node**
   - Block is filled in stage by stage while the engine owns it, and
     is copied into the Outline when the pipeline finishes.
"""

from .errors import FreeoutError, FormatError, StructuralError, MissingContentError
from .models import (
    Position,
    BlockRange,
    DistributionMethod,
    WordCount,
    WordsTarget,
    WordsStatus,
    WordStatistics,
    Block,
    Blocks,
    Outline,
    OutlineItem,
)

__all__ = [
    "FreeoutError",
    "FormatError",
    "StructuralError",
    "MissingContentError",
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
