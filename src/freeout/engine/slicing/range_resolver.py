"""
Module: engine.slicing.range_resolver

Purpose:
    Computes the span of source text each block owns: from the start of
    its header up to just before the next block that is not one of its
    descendants, or to the end of the document.

Key Functions:
    - populate_block_ranges(): Fill block_range for every block
    - find_boundary_ids(): Boundary block of every block in one pass
    - get_boundary_block_id(): Boundary block of a single block

Dependencies:
    - core.models: Block, BlockRange, Position
    - core.utils.text: SourceText (end and prior positions)

Used By:
    - engine.pipeline: Runs after validation, before content processing

Example:
    ```markdown
    # Header 1      <-- block_range.start of Header 1 = "#"

    Content 1

    ## Header 2

    Content 2
                    <-- block_range.end of Header 1 (just before "#" below)
    # Header 3
    ```
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from freeout.core.models import BlockRange, Blocks, Position
from freeout.core.utils.text import SourceText

logger = logging.getLogger(__name__)


def get_boundary_block_id(blocks: Blocks, block_id: int) -> Optional[int]:
    """
    Nearest following block whose depth is <= the block's own depth.

    That is the next sibling (equal depth) or the next sibling of an
    ancestor (lesser depth). Scanning in ascending id order means a
    sibling is always met before any shallower block that would also
    qualify.

    Returns:
        Boundary block id, or None if the block runs to the end of the
        document
    """
    depth = blocks[block_id].depth
    candidate = block_id + 1
    while candidate in blocks:
        if blocks[candidate].depth <= depth:
            return candidate
        candidate += 1
    return None


def find_boundary_ids(blocks: Blocks) -> Dict[int, Optional[int]]:
    """
    Boundary block of every block, in a single pass over id/depth.

    Blocks are visited in ascending id order while a stack holds those
    still waiting for their boundary. A new block closes every waiting
    block at the same or a greater depth; whatever remains at the end
    has no boundary. Each block is pushed and popped once.

    Returns:
        Mapping of block id to boundary id (or None)
    """
    boundaries: Dict[int, Optional[int]] = {}
    pending: List[int] = []
    for block_id in sorted(blocks):
        depth = blocks[block_id].depth
        while pending and blocks[pending[-1]].depth >= depth:
            boundaries[pending.pop()] = block_id
        pending.append(block_id)
    for block_id in pending:
        boundaries[block_id] = None
    return boundaries


def populate_block_ranges(blocks: Blocks, source: SourceText) -> int:
    """
    Fill ``block_range`` for every block that does not have one yet.

    The range starts at the block's header. It ends one grapheme before
    the header of the boundary block, or at the end of the document when
    there is no boundary. Ranges supplied by the reader are left as they
    are, and only id/depth/header ranges feed the computation, so the
    result does not depend on other resolved ranges.

    Args:
        blocks: Validated arena (modified in place)
        source: Indexed source text the header ranges refer to

    Returns:
        Number of blocks whose range was filled in
    """
    end_of_document: Position = source.end_position()
    boundaries = find_boundary_ids(blocks)

    resolved: Dict[int, BlockRange] = {}
    for block_id, boundary_id in boundaries.items():
        block = blocks[block_id]
        if block.block_range is not None:
            continue

        start = block.header_range.start
        if boundary_id is None:
            end = end_of_document
        else:
            end = source.prior_position(blocks[boundary_id].header_range.start)

        if end.offset < start.offset:
            logger.warning(
                f"Block {block_id}: boundary {boundary_id} starts before its own "
                f"header ({end.offset} < {start.offset}); using an empty range"
            )
            end = start
        resolved[block_id] = BlockRange(start=start, end=end)

    for block_id, block_range in resolved.items():
        blocks[block_id].block_range = block_range

    logger.debug(f"Resolved {len(resolved)} block ranges ({len(blocks) - len(resolved)} preset)")
    return len(resolved)
