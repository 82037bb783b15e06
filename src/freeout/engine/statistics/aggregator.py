"""
Module: engine.statistics.aggregator

Purpose:
    Rolls self statistics up the tree so every block knows the count of
    its whole subtree.

Key Functions:
    - aggregate_statistics(): Fill aggregate_stats for every block
    - contributing_count(): What a block adds to its parent's total

Dependencies:
    - core.models: Blocks, WordCount

Used By:
    - engine.pipeline: Runs after content processing
    - engine.statistics.distributor: Reads aggregate counts as actuals
"""

from __future__ import annotations

import logging

from freeout.core.models import Block, Blocks, WordCount

logger = logging.getLogger(__name__)


def contributing_count(block: Block) -> WordCount:
    """Count a block adds to its parent: nothing when excluded."""
    if block.exclude:
        return WordCount.zero()
    return block.aggregate_stats.count


def aggregate_statistics(blocks: Blocks) -> None:
    """
    Compute ``aggregate_stats.count`` bottom-up.

    aggregate = self + sum of non-excluded children's aggregates.

    Blocks are processed in descending id order; a child's id is always
    greater than its parent's, so every child is done before its parent.
    An excluded block still gets its own aggregate but adds nothing to its
    parent's. Targets and statuses already on the aggregate are kept.

    Args:
        blocks: Validated arena (modified in place)
    """
    for block_id in sorted(blocks, reverse=True):
        block = blocks[block_id]
        total = block.self_stats.count
        for child_id in block.children_ids:
            total = total + contributing_count(blocks[child_id])
        block.aggregate_stats = block.aggregate_stats.with_count(total)

    excluded = sum(1 for block in blocks.values() if block.exclude)
    logger.debug(f"Aggregated statistics for {len(blocks)} blocks ({excluded} excluded)")


def document_count(blocks: Blocks) -> WordCount:
    """Total count of the document: sum over non-excluded roots."""
    total = WordCount.zero()
    for block in blocks.values():
        if block.parent_id is None:
            total = total + contributing_count(block)
    return total
