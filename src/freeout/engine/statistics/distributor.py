"""
Module: engine.statistics.distributor

Purpose:
    Pushes a document-level word target down the block tree and records,
    for every block, its share of the target and how far its subtree is
    over or under that share.

Key Functions:
    - distribute_targets(): Distribute a document target over all blocks
    - split_uniform(): Uniform shares for one sibling group

Dependencies:
    - core.models: WordsTarget, WordsStatus, WordStatistics
    - engine.statistics.aggregator: Actual counts of subtrees

Used By:
    - engine.pipeline: Runs after aggregation, only when a target is given

Rounding:
    Shares are whole words. The nominal share is ``T // n`` and each
    sibling's adjusted target is ``remaining // siblings_left``, so any
    remainder (and any words earlier siblings left unused) falls to the
    later siblings. A pool that earlier siblings overran is treated as 0.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from freeout.core.models import (
    Blocks,
    DistributionMethod,
    WordsStatus,
    WordsTarget,
    WordStatistics,
)
from .aggregator import document_count

logger = logging.getLogger(__name__)


def split_uniform(pool: int, actuals: Sequence[int]) -> List[Tuple[int, int]]:
    """
    Uniform shares of ``pool`` for siblings in document order.

    Every sibling nominally gets ``pool // n``. Its adjusted target is what
    is left of the pool after the actual words of the siblings before it,
    divided evenly among it and the siblings after it.

    Args:
        pool: Words available to the group
        actuals: Actual words of each sibling subtree, in id order

    Returns:
        (nominal, adjusted) per sibling

    Example:
        >>> split_uniform(500, [200, 200, 50])
        [(166, 166), (166, 150), (166, 100)]
    """
    if not actuals:
        return []
    count = len(actuals)
    nominal = pool // count
    shares = []
    consumed = 0
    for index, actual in enumerate(actuals):
        remaining = max(pool - consumed, 0)
        shares.append((nominal, remaining // (count - index)))
        consumed += actual
    return shares


def distribute_targets(blocks: Blocks, target: WordsTarget) -> WordStatistics:
    """
    Distribute a document-level target over the tree.

    The roots form the first sibling group with the whole target as pool.
    Each non-excluded block gets ``aggregate_stats.target`` (its nominal
    share) and ``aggregate_stats.status`` (balance against its adjusted
    target), and its children share its adjusted target in turn. Excluded
    blocks and their subtrees get no target.

    Args:
        blocks: Aggregated arena (modified in place)
        target: Document target; distribution None means UNIFORM

    Returns:
        Document statistics: total count, the target and its status
    """
    method = target.distribution or DistributionMethod.UNIFORM
    if method is not DistributionMethod.UNIFORM:
        raise ValueError(f"Unsupported distribution method: {method}")

    roots = sorted(block_id for block_id, block in blocks.items() if block.parent_id is None)
    groups: List[Tuple[List[int], int]] = [(roots, target.words)]
    assigned = 0

    # Explicit stack: deep documents must not hit the recursion limit
    while groups:
        sibling_ids, pool = groups.pop()
        active = [block_id for block_id in sibling_ids if not blocks[block_id].exclude]
        actuals = [blocks[block_id].aggregate_stats.count.words for block_id in active]

        for block_id, actual, (nominal, adjusted) in zip(
            active, actuals, split_uniform(pool, actuals)
        ):
            block = blocks[block_id]
            block.aggregate_stats = block.aggregate_stats.with_target(
                WordsTarget(words=nominal, distribution=method),
                WordsStatus.compute(actual, nominal, adjusted),
            )
            assigned += 1
            if block.children_ids:
                groups.append((block.children_ids, adjusted))

    logger.debug(f"Distributed target of {target.words} words over {assigned} blocks")
    return document_statistics(blocks, target)


def document_statistics(blocks: Blocks, target: Optional[WordsTarget] = None) -> WordStatistics:
    """Document statistics without distributing anything."""
    total = document_count(blocks)
    if target is None:
        return WordStatistics.of(total)
    return WordStatistics(
        target=target,
        status=WordsStatus.compute(total.words, target.words),
        count=total,
    )
