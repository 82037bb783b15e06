"""
Lookups over a block arena by id and depth.

These read the arena only; none of them rely on resolved ranges or
statistics, so they can be used at any point after tree building.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from freeout.core.models import Blocks


def has_block_id(blocks: Blocks, block_id: int) -> bool:
    return block_id in blocks


def get_immediate_parent(blocks: Blocks, block_id: int) -> Optional[int]:
    """
    Nearest preceding block that is shallower than ``block_id``.

    This recomputes the parent from id/depth alone, without trusting
    ``parent_id``; the parent is not necessarily one level up.
    """
    depth = blocks[block_id].depth
    for candidate in range(block_id - 1, 0, -1):
        block = blocks.get(candidate)
        if block is not None and block.depth < depth:
            return candidate
    return None


def get_root_parent(blocks: Blocks, block_id: int) -> Optional[int]:
    """Top-most ancestor of a block, or None if the block is a root."""
    root_id = None
    current = blocks[block_id]
    while current.parent_id is not None:
        root_id = current.parent_id
        current = blocks[root_id]
    return root_id


def get_previous_block_id(blocks: Blocks, block_id: int) -> Optional[int]:
    """Id of the block immediately before ``block_id`` in document order."""
    previous = block_id - 1
    return previous if previous in blocks else None


def get_next_sibling_id(blocks: Blocks, block_id: int) -> Optional[int]:
    """Next block sharing the same parent, or None for the last child."""
    block = blocks[block_id]
    if block.parent_id is not None:
        siblings = blocks[block.parent_id].children_ids
    else:
        siblings = sorted(b.id for b in blocks.values() if b.parent_id is None)
    index = siblings.index(block_id)
    return siblings[index + 1] if index + 1 < len(siblings) else None


def get_block_ids_by_title(blocks: Blocks, title: str) -> List[int]:
    return sorted(block_id for block_id, block in blocks.items() if block.title == title)


def iter_descendants(blocks: Blocks, block_id: int) -> Iterator[int]:
    """
    Ids of every descendant of a block, in document order.

    Uses an explicit stack, so deep trees do not hit the recursion limit.
    """
    stack = list(reversed(blocks[block_id].children_ids))
    while stack:
        child_id = stack.pop()
        yield child_id
        stack.extend(reversed(blocks[child_id].children_ids))
