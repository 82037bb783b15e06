"""
Module: blocks

Purpose:
    Provides the Block dataclass - one node of the document tree (a
    heading and everything it owns). Blocks live in an arena keyed by id
    (``Blocks``); parent and children are referenced by id only.

Key Functions:
    - Block.is_root / Block.is_leaf: Structural queries
    - Block.snapshot(): Independent deep copy for outline output
    - Block.to_dict() / Block.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .position: Position, BlockRange
    - .statistics: WordStatistics

Used By:
    - engine.structuring.tree_builder: Creates blocks
    - engine.* stages: Fill in ranges, hashes and statistics
    - core.models.outline: Snapshots blocks into outline items

Lifecycle:
    Blocks are created once by the tree builder and then filled in by each
    pipeline stage in turn. Unlike the frozen value types, Block is mutable
    so stages can complete it in place; the outline holds snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .position import BlockRange
from .statistics import WordStatistics


@dataclass(slots=True)
class Block:
    """
    Tree node for one structural marker.

    Attributes:
        id: 1-indexed unique id; also the document order of the block
        depth: Nesting level reported by the format (e.g. heading level)
        marker: Section marker, e.g. "##" for markdown, "==" for typst
        title: Section title
        content: Plain prose owned directly by this block (not descendants),
            None when the reader attaches none or content capture is off
        note: Free annotation, independent of structure
        parent_id: Id of the parent block, None for roots
        children_ids: Child ids in document order
        header_range: Span of just the marker line, supplied by the reader
        block_range: Span owned by the block including descendants;
            None until resolved
        self_stats: Statistics of this block's own content
        aggregate_stats: Statistics of this block plus its descendants
        exclude: Drop this block from statistics totals (not from the tree)
        hash: 64-bit digest of the block content

    Invariants (checked by engine.structuring.validator, not here):
        - ids are exactly 1..N
        - a parent's depth is strictly less than its children's
        - children_ids ascending
    """

    id: int
    depth: int
    marker: str = ""
    title: str = ""
    content: Optional[str] = None
    note: Optional[str] = None
    parent_id: Optional[int] = None
    children_ids: List[int] = field(default_factory=list)
    header_range: BlockRange = BlockRange()
    block_range: Optional[BlockRange] = None
    self_stats: WordStatistics = WordStatistics()
    aggregate_stats: WordStatistics = WordStatistics()
    exclude: bool = False
    hash: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate identity fields on construction."""
        if self.id < 1:
            raise ValueError(f"Block id must be >= 1 (1-indexed): {self.id}")
        if self.depth < 0:
            raise ValueError(f"Block depth must be >= 0: {self.depth}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        return not self.children_ids

    # ─────────────────────────────────────────────────────────────────────────
    # Copying
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> Block:
        """
        Independent copy of this block.

        Value fields are immutable, so only the children list needs copying.
        """
        return Block(
            id=self.id,
            depth=self.depth,
            marker=self.marker,
            title=self.title,
            content=self.content,
            note=self.note,
            parent_id=self.parent_id,
            children_ids=list(self.children_ids),
            header_range=self.header_range,
            block_range=self.block_range,
            self_stats=self.self_stats,
            aggregate_stats=self.aggregate_stats,
            exclude=self.exclude,
            hash=self.hash,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Optional fields are omitted when unset.
        """
        d = {
            "id": self.id,
            "depth": self.depth,
            "marker": self.marker,
            "title": self.title,
            "header_range": self.header_range.to_dict(),
            "self_stats": self.self_stats.to_dict(),
            "aggregate_stats": self.aggregate_stats.to_dict(),
            "children_ids": list(self.children_ids),
        }
        if self.content is not None:
            d["content"] = self.content
        if self.note is not None:
            d["note"] = self.note
        if self.parent_id is not None:
            d["parent_id"] = self.parent_id
        if self.block_range is not None:
            d["block_range"] = self.block_range.to_dict()
        if self.exclude:
            d["exclude"] = True
        if self.hash is not None:
            d["hash"] = self.hash
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Block:
        """Deserialize from dictionary."""
        return cls(
            id=data["id"],
            depth=data["depth"],
            marker=data.get("marker", ""),
            title=data.get("title", ""),
            content=data.get("content"),
            note=data.get("note"),
            parent_id=data.get("parent_id"),
            children_ids=list(data.get("children_ids", [])),
            header_range=(
                BlockRange.from_dict(data["header_range"])
                if "header_range" in data else BlockRange()
            ),
            block_range=(
                BlockRange.from_dict(data["block_range"])
                if "block_range" in data else None
            ),
            self_stats=WordStatistics.from_dict(data.get("self_stats", {})),
            aggregate_stats=WordStatistics.from_dict(data.get("aggregate_stats", {})),
            exclude=data.get("exclude", False),
            hash=data.get("hash"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        parent = f", parent={self.parent_id}" if self.parent_id is not None else ""
        return f"Block({self.id}, depth={self.depth}, {self.title!r}{parent})"


# Arena of blocks keyed by id
Blocks = Dict[int, Block]
