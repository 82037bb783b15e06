"""
Module: outline

Purpose:
    Provides the Outline and OutlineItem dataclasses - the read-only,
    ordered, recursive projection of a finished block tree that is handed
    to callers. Items hold block snapshots, never the engine's blocks.

Key Functions:
    - Outline.iter_items(): Pre-order iteration over all items
    - Outline.find(block_id): Locate an item by block id
    - OutlineItem.iter_all(): Pre-order iteration over a subtree
    - to_dict() / from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .blocks: Block
    - .statistics: WordStatistics

Used By:
    - engine.structuring.assembler: Builds the outline
    - core.utils.serialization: JSON output
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .blocks import Block
from .statistics import WordStatistics


@dataclass(frozen=True, slots=True)
class OutlineItem:
    """
    One node of the outline.

    Attributes:
        block: Caller-owned snapshot of the block
        subitems: Child items sorted by block id

    Invariants:
        - subitems are strictly ascending by block.id
    """

    block: Block
    subitems: Tuple[OutlineItem, ...] = ()

    def __post_init__(self) -> None:
        """Validate sibling ordering on construction."""
        last_id = 0
        for item in self.subitems:
            if item.block.id <= last_id:
                raise ValueError(
                    f"Subitems of block {self.block.id} must be sorted by id "
                    f"({item.block.id} <= {last_id})"
                )
            last_id = item.block.id

    @property
    def id(self) -> int:
        return self.block.id

    @property
    def title(self) -> str:
        return self.block.title

    def iter_all(self) -> Iterator[OutlineItem]:
        """
        Iterate over this item and all descendants (pre-order).

        Yields:
            This item, then all descendants in document order
        """
        yield self
        for item in self.subitems:
            yield from item.iter_all()

    def to_dict(self) -> dict:
        d = {"block": self.block.to_dict()}
        if self.subitems:
            d["subitems"] = [item.to_dict() for item in self.subitems]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> OutlineItem:
        return cls(
            block=Block.from_dict(data["block"]),
            subitems=tuple(cls.from_dict(item) for item in data.get("subitems", [])),
        )

    def __repr__(self) -> str:
        child_str = f", subitems={len(self.subitems)}" if self.subitems else ""
        return f"OutlineItem({self.block.id}, {self.block.title!r}{child_str})"


@dataclass(frozen=True, slots=True)
class Outline:
    """
    Ordered outline of a whole document.

    The outline is frozen but its blocks are plain Block snapshots owned by
    the caller. Editing one changes neither the engine arena nor any other
    outline.

    Attributes:
        items: Root items sorted by block id
        statistics: Document-level statistics - the count of all
            non-excluded roots and, when one was supplied, the document
            target and its status

    Example:
        >>> outline = engine.outline(MarkdownReader())
        >>> [item.title for item in outline.items]
        ['Introduction', 'Method']
    """

    items: Tuple[OutlineItem, ...] = ()
    statistics: WordStatistics = WordStatistics()

    def __post_init__(self) -> None:
        """Validate root ordering on construction."""
        ids = [item.block.id for item in self.items]
        if ids != sorted(set(ids)):
            raise ValueError(f"Outline items must be sorted by id: {ids}")

    def __len__(self) -> int:
        return len(self.items)

    def iter_items(self) -> Iterator[OutlineItem]:
        """Iterate over every item in document order."""
        for item in self.items:
            yield from item.iter_all()

    def find(self, block_id: int) -> Optional[OutlineItem]:
        """
        Find an item by block id.

        Returns:
            Matching OutlineItem or None if not found
        """
        for item in self.iter_items():
            if item.block.id == block_id:
                return item
        return None

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Outline:
        return cls(
            items=tuple(OutlineItem.from_dict(item) for item in data.get("items", [])),
            statistics=WordStatistics.from_dict(data.get("statistics", {})),
        )
