"""
Module: position

Purpose:
    Provides the Position and BlockRange dataclasses - immutable points
    and spans in a source document. Offsets are UTF-8 byte indexes and are
    the only coordinate used for slicing; line/column are for display.

Key Functions:
    - Position.to_dict() / Position.from_dict(): Serialization
    - BlockRange.merge(start, end): Join two ranges
    - BlockRange.contains(other): Check nesting of ranges
    - BlockRange.overlaps(other): Check for shared bytes

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.blocks.Block
    - core.utils.text.SourceText
    - engine.slicing.range_resolver
    - readers (header ranges)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """
    A point in source text.

    All three coordinates are 0-indexed. ``column`` is the byte offset
    from the start of ``line``; ``offset`` is the byte offset from the
    start of the document.

    Attributes:
        line: Line index
        column: Byte column within the line
        offset: Byte offset within the document

    Invariants:
        - line >= 0
        - column >= 0
        - offset >= 0

    Example:
        >>> Position(line=1, column=0, offset=10)
        Position(1:0@10)
    """

    line: int = 0
    column: int = 0
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate coordinates on construction."""
        if self.line < 0:
            raise ValueError(f"line must be >= 0: {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0: {self.column}")
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0: {self.offset}")

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {"line": self.line, "column": self.column, "offset": self.offset}

    @classmethod
    def from_dict(cls, data: dict) -> Position:
        """Deserialize from dictionary."""
        return cls(
            line=data.get("line", 0),
            column=data.get("column", 0),
            offset=data.get("offset", 0),
        )

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.column}@{self.offset})"


@dataclass(frozen=True, slots=True)
class BlockRange:
    """
    Half-open span ``[start.offset, end.offset)`` over the source text.

    Attributes:
        start: First position included in the span
        end: First position NOT included in the span

    Invariants:
        - end.offset >= start.offset

    Example:
        >>> r = BlockRange(Position(0, 0, 0), Position(0, 8, 8))
        >>> r.length
        8
    """

    start: Position = Position()
    end: Position = Position()

    def __post_init__(self) -> None:
        """Validate ordering on construction."""
        if self.end.offset < self.start.offset:
            raise ValueError(
                f"end must be >= start: {self.end.offset} < {self.start.offset}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def length(self) -> int:
        """Number of bytes covered by the span."""
        return self.end.offset - self.start.offset

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def contains(self, other: BlockRange) -> bool:
        """
        Check if another range lies entirely within this one.

        Args:
            other: Range to check

        Returns:
            True if start <= other.start and other.end <= end
        """
        return (
            self.start.offset <= other.start.offset
            and other.end.offset <= self.end.offset
        )

    def contains_offset(self, offset: int) -> bool:
        """Check if a byte offset is inside the span (end is exclusive)."""
        return self.start.offset <= offset < self.end.offset

    def overlaps(self, other: BlockRange) -> bool:
        """
        Check if this range shares at least one byte with another.

        Adjacent ranges (one.end == other.start) do NOT overlap.
        """
        return not (
            self.end.offset <= other.start.offset
            or other.end.offset <= self.start.offset
        )

    @staticmethod
    def merge(start_range: BlockRange, end_range: BlockRange) -> BlockRange:
        """
        Merge two ranges into one spanning from the first start to the second end.

        Example:
            >>> merged = BlockRange.merge(block.header_range, last_child.block_range)
        """
        return BlockRange(start=start_range.start, end=end_range.end)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> BlockRange:
        """Deserialize from dictionary."""
        return cls(
            start=Position.from_dict(data["start"]),
            end=Position.from_dict(data["end"]),
        )

    def __repr__(self) -> str:
        return f"BlockRange({self.start.offset}, {self.end.offset})"
