"""
Module: engine.structuring.assembler

Purpose:
    Converts the finished block arena into the read-only Outline handed
    to callers.

Key Functions:
    - build_outline(): Assemble root items and their subitems

Dependencies:
    - core.models: Outline, OutlineItem, WordStatistics
    - core.errors: StructuralError

Used By:
    - engine.pipeline: Last stage of every outline
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from freeout.core.errors import StructuralError
from freeout.core.models import Blocks, Outline, OutlineItem, WordStatistics

logger = logging.getLogger(__name__)


def build_outline(blocks: Blocks, statistics: Optional[WordStatistics] = None) -> Outline:
    """
    Assemble an Outline from a fully processed arena.

    Items are built from the highest id down. A child's id is always
    greater than its parent's, so every child item exists by the time its
    parent is built, and no recursion is needed however deep the tree is.
    Each item holds a snapshot of its block; later changes to the arena
    do not show through.

    Args:
        blocks: Validated, processed arena (not modified)
        statistics: Document-level statistics to attach

    Returns:
        Outline whose roots and subitems are ascending by id

    Raises:
        StructuralError: If a block lists a child id that is not in the arena
    """
    items: Dict[int, OutlineItem] = {}
    for block_id in sorted(blocks, reverse=True):
        block = blocks[block_id]
        subitems = []
        for child_id in sorted(block.children_ids):
            child_item = items.get(child_id)
            if child_item is None:
                if child_id not in blocks:
                    raise StructuralError(
                        f"Block {block_id} references missing child {child_id}",
                        found=child_id,
                    )
                raise StructuralError(
                    f"Block {block_id} lists child {child_id} which does not follow it"
                )
            subitems.append(child_item)
        items[block_id] = OutlineItem(block=block.snapshot(), subitems=tuple(subitems))

    roots = tuple(
        items[block_id]
        for block_id in sorted(blocks)
        if blocks[block_id].parent_id is None
    )
    logger.debug(f"Assembled outline with {len(roots)} root items")
    return Outline(items=roots, statistics=statistics or WordStatistics())
