"""
Module: engine.structuring.tree_builder

Purpose:
    Builds the block arena from a reader's structural sequence. Assigns
    dense 1-indexed ids in document order, links each block to its
    parent with a depth-stack search and attaches prose to the block
    that owns it.

Key Functions:
    - build_blocks(): Build a Blocks arena from reader events

Key Classes:
    - BlockTreeBuilder: Incremental builder for one build pass
    - DepthStack: Most-recent-ancestor lookup by depth

Dependencies:
    - itertools (std)
    - core.models: Block, Blocks, WordStatistics
    - readers.base: HeadingEvent, ProseEvent

Used By:
    - engine.pipeline: Builds blocks for each outline
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Tuple

from freeout.core.models import Block, Blocks, WordStatistics
from freeout.readers.base import HeadingEvent, ProseEvent, ReaderEvent

logger = logging.getLogger(__name__)


class DepthStack:
    """
    Tracks previously assigned (id, depth) pairs to find parents.

    The parent of a block at depth ``d`` is the most recent block whose
    depth is strictly less than ``d``. Depths may skip levels (a level-1
    heading followed directly by a level-3 one), so this is a search over
    ancestors rather than a one-level-up cache.

    Only pairs that can still be found are kept: a new entry hides every
    earlier entry of equal or greater depth, since any query that would
    match those matches the newer entry first. Depths on the stack are
    therefore strictly increasing.

    Example:
        >>> stack = DepthStack()
        >>> stack.push(1, 1); stack.push(2, 3)
        >>> stack.parent_for(2)
        1
        >>> stack.parent_for(4)
        2
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> Optional[Tuple[int, int]]:
        """Most recently pushed (id, depth) pair, if any."""
        return self._entries[-1] if self._entries else None

    def push(self, block_id: int, depth: int) -> None:
        while self._entries and self._entries[-1][1] >= depth:
            self._entries.pop()
        self._entries.append((block_id, depth))

    def parent_for(self, depth: int) -> Optional[int]:
        """
        Id of the most recent block with depth strictly less than ``depth``.

        Returns:
            Parent id, or None if no such block exists (a root)
        """
        for block_id, entry_depth in reversed(self._entries):
            if entry_depth < depth:
                return block_id
        return None


class BlockTreeBuilder:
    """
    Single-pass builder for a block arena.

    Ids come from a counter owned by the builder instance, so two builds
    never share a sequence.

    Attributes:
        include_content: Attach prose to blocks when True
    """

    def __init__(self, include_content: bool = True):
        self.include_content = include_content
        self._blocks: Blocks = {}
        self._stack = DepthStack()
        self._ids = itertools.count(1)
        self._dropped_prose = 0

    def add_heading(self, event: HeadingEvent) -> Block:
        """
        Create the block for a heading and link it to its parent.

        Args:
            event: Heading from the reader

        Returns:
            The new block
        """
        block_id = next(self._ids)
        parent_id = self._stack.parent_for(event.depth)

        block = Block(
            id=block_id,
            depth=event.depth,
            marker=event.marker,
            title=event.title,
            note=event.note,
            parent_id=parent_id,
            header_range=event.header_range,
            block_range=event.block_range,
            self_stats=event.self_stats or WordStatistics(),
            exclude=event.exclude,
            hash=event.hash,
        )
        if parent_id is not None:
            self._blocks[parent_id].children_ids.append(block_id)

        self._blocks[block_id] = block
        self._stack.push(block_id, event.depth)
        return block

    def add_prose(self, text: str) -> Optional[int]:
        """
        Attach prose to the block that owns it.

        The owner is the block that would be the parent of a new node one
        level below the most recent heading, i.e. that heading itself.
        Prose before the first heading has no owner and is dropped.

        Returns:
            Id of the block the text was attached to, or None
        """
        if not self.include_content:
            return None
        text = text.strip()
        if not text:
            return None

        last = self._stack.last()
        depth = last[1] + 1 if last is not None else 0
        owner_id = self._stack.parent_for(depth)
        if owner_id is None:
            self._dropped_prose += 1
            return None

        owner = self._blocks[owner_id]
        if owner.content:
            owner.content = f"{owner.content}\n{text}"
        else:
            owner.content = text
        return owner_id

    def add(self, event: ReaderEvent) -> None:
        if isinstance(event, HeadingEvent):
            self.add_heading(event)
        elif isinstance(event, ProseEvent):
            self.add_prose(event.text)
        else:
            raise TypeError(f"Unsupported reader event: {event!r}")

    def build(self) -> Blocks:
        """Finish the pass and return the arena."""
        if self._dropped_prose:
            logger.debug(f"Dropped {self._dropped_prose} prose chunk(s) before the first heading")
        return self._blocks


def build_blocks(events: Iterable[ReaderEvent], include_content: bool = True) -> Blocks:
    """
    Build a block arena from a reader's events.

    Args:
        events: HeadingEvent/ProseEvent records in document order
        include_content: Attach prose to blocks

    Returns:
        Blocks keyed by id, ids 1..N in document order

    Example:
        >>> blocks = build_blocks(MarkdownReader().read(text, OutlineConfig()))
        >>> blocks[1].parent_id is None
        True
    """
    builder = BlockTreeBuilder(include_content=include_content)
    for event in events:
        builder.add(event)
    blocks = builder.build()
    logger.debug(f"Built {len(blocks)} blocks")
    return blocks
