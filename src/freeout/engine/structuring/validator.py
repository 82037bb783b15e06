"""
Module: engine.structuring.validator

Purpose:
    Checks the block arena a reader produced before any stage relies on
    dense, 1-indexed ids.

Key Functions:
    - validate_blocks(): Fail on the first id gap
    - find_structure_issues(): Report every broken tree invariant

Dependencies:
    - core.errors: StructuralError
    - core.models: Blocks

Used By:
    - engine.pipeline: Runs validate_blocks() right after tree building
"""

from __future__ import annotations

import logging
from typing import List

from freeout.core.errors import StructuralError
from freeout.core.models import Blocks

logger = logging.getLogger(__name__)


def validate_blocks(blocks: Blocks) -> None:
    """
    Validate that block ids start at 1 and have no gaps.

    Ids are the linear order the blocks are rendered in, so continuity
    is required by every later stage.

    Args:
        blocks: Arena to check (not modified)

    Raises:
        StructuralError: On the first id that differs from the expected
            running counter; carries ``expected`` and ``found``
    """
    expected_id = 1
    for block_id in sorted(blocks):
        if block_id != expected_id:
            raise StructuralError(
                f"Expected block id {expected_id} but found {block_id}. "
                f"Block ids should be 1-indexed (starting from 1) and "
                f"continuous (without any gaps in between).",
                expected=expected_id,
                found=block_id,
            )
        expected_id += 1
    logger.debug(f"Validated {len(blocks)} block ids")


def find_structure_issues(blocks: Blocks) -> List[str]:
    """
    Collect every broken parent/child invariant in the arena.

    Checks, for each block: its key matches its id, its parent exists and
    is strictly shallower, it is listed among its parent's children, and
    its children list is ascending and points back at it.

    Args:
        blocks: Arena to check (not modified)

    Returns:
        Human-readable issues; empty when the tree is consistent
    """
    issues: List[str] = []
    for block_id, block in sorted(blocks.items()):
        if block.id != block_id:
            issues.append(f"Block stored under {block_id} has id {block.id}")

        if block.parent_id is not None:
            parent = blocks.get(block.parent_id)
            if parent is None:
                issues.append(f"Block {block_id}: parent {block.parent_id} does not exist")
            else:
                if parent.depth >= block.depth:
                    issues.append(
                        f"Block {block_id}: parent {parent.id} depth {parent.depth} "
                        f">= child depth {block.depth}"
                    )
                if block_id not in parent.children_ids:
                    issues.append(
                        f"Block {block_id}: missing from children of parent {parent.id}"
                    )

        if block.children_ids != sorted(set(block.children_ids)):
            issues.append(f"Block {block_id}: children not strictly ascending")
        for child_id in block.children_ids:
            child = blocks.get(child_id)
            if child is None:
                issues.append(f"Block {block_id}: child {child_id} does not exist")
            elif child.parent_id != block_id:
                issues.append(
                    f"Block {block_id}: child {child_id} has parent {child.parent_id}"
                )
    return issues
