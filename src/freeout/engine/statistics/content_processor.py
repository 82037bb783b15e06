"""
Module: engine.statistics.content_processor

Purpose:
    Fills in each block's content hash and self word statistics from the
    content the tree builder attached.

Key Functions:
    - process_content(): Hash and count every block with content

Dependencies:
    - core.utils.counting: count_words
    - core.utils.hashing: compute_hash

Used By:
    - engine.pipeline: Runs after range resolution
"""

from __future__ import annotations

import logging

from freeout.core.models import Block, Blocks, WordCount
from freeout.core.utils.counting import count_words
from freeout.core.utils.hashing import compute_hash

logger = logging.getLogger(__name__)


def count_block(block: Block) -> WordCount:
    """
    Words of the block's own text: its heading title and its content.

    Descendants are not included; see the aggregator for subtree totals.
    Only called for blocks with content, so a heading without prose of
    its own keeps zero self words and its title goes uncounted.
    """
    if block.title:
        return count_words(f"{block.title}\n{block.content or ''}")
    return count_words(block.content or "")


def process_content(blocks: Blocks) -> int:
    """
    Hash and count the content of every block that has some.

    A block keeps any hash it already has, and keeps its count unless the
    count is zero words, so values set by the reader survive and running
    the stage twice changes nothing. Blocks without content are skipped
    and keep their default statistics.

    Args:
        blocks: Arena (modified in place)

    Returns:
        Number of blocks that received a hash or a count
    """
    updated = 0
    for block in blocks.values():
        if block.content is None:
            continue
        changed = False
        if block.hash is None:
            block.hash = compute_hash(block.content)
            changed = True
        if block.self_stats.count.words == 0:
            block.self_stats = block.self_stats.with_count(count_block(block))
            changed = True
        if changed:
            updated += 1
    logger.debug(f"Processed content of {updated} blocks")
    return updated
