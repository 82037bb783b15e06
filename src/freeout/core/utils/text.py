"""
Module: core.utils.text

Purpose:
    Byte-accurate position arithmetic over a source document. Offsets
    are UTF-8 byte indexes; stepping backwards moves by whole grapheme
    clusters so a range never ends inside a user-perceived character.

Key Classes:
    - SourceText: Source string with its UTF-8 bytes and a line index

Key Functions:
    - SourceText.end_position(): Position just past the last byte
    - SourceText.prior_position(position): Step back one grapheme
    - SourceText.position_at(offset): Position for a byte offset
    - SourceText.slice(range): Text covered by a BlockRange
    - get_text_by_range(text, range): One-off slicing helper

Dependencies:
    - regex: Grapheme cluster matching (\\X)
    - bisect (std)

Used By:
    - engine.pipeline.OutlineEngine
    - engine.slicing.range_resolver
    - readers: Building header ranges
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Optional

import regex

from ..models.position import BlockRange, Position


_GRAPHEME_RE = regex.compile(r"\X")


class SourceText:
    """
    A source document indexed by line.

    The line index holds the byte offset at which every line starts; the
    first line starts at 0 and each newline opens a new line.

    Example:
        >>> src = SourceText("1\\n2")
        >>> src.end_position()
        Position(1:1@3)
        >>> src.prior_position(Position(1, 0, 2))
        Position(0:1@1)
    """

    def __init__(self, text: str):
        self.text = text
        self.data = text.encode("utf-8")
        self.line_starts: List[int] = [0]
        index = self.data.find(b"\n")
        while index != -1:
            self.line_starts.append(index + 1)
            index = self.data.find(b"\n", index + 1)

    def __len__(self) -> int:
        """Length of the document in bytes."""
        return len(self.data)

    # ─────────────────────────────────────────────────────────────────────────
    # Lines
    # ─────────────────────────────────────────────────────────────────────────

    def line_count(self) -> int:
        """Number of lines; a trailing newline opens an empty last line."""
        return len(self.line_starts)

    def get_line(self, line: int) -> Optional[str]:
        """
        Text of a line without its newline.

        Returns:
            The line, or None if the index is out of range
        """
        if line < 0 or line >= len(self.line_starts):
            return None
        start = self.line_starts[line]
        if line + 1 < len(self.line_starts):
            end = self.line_starts[line + 1] - 1
        else:
            end = len(self.data)
        return self.data[start:end].decode("utf-8")

    def line_of(self, offset: int) -> int:
        """Index of the line containing a byte offset."""
        return bisect_right(self.line_starts, offset) - 1

    # ─────────────────────────────────────────────────────────────────────────
    # Positions
    # ─────────────────────────────────────────────────────────────────────────

    def position_at(self, offset: int) -> Position:
        """
        Position for a byte offset.

        Raises:
            ValueError: If offset is outside [0, len]
        """
        if offset < 0 or offset > len(self.data):
            raise ValueError(f"offset {offset} outside document of {len(self.data)} bytes")
        line = self.line_of(offset)
        return Position(line=line, column=offset - self.line_starts[line], offset=offset)

    def end_position(self) -> Position:
        """
        Position just past the last byte of the document.

        Line is the number of newlines, column is the byte length of the
        last line and offset is the byte length of the whole document.
        """
        return Position(
            line=len(self.line_starts) - 1,
            column=len(self.data) - self.line_starts[-1],
            offset=len(self.data),
        )

    def prior_position(self, position: Position) -> Position:
        """
        Position immediately before another, one grapheme back.

        Within a line, column and offset shrink by the byte length of the
        preceding grapheme. At column 0 the position rolls back over the
        line break to the end of the previous line. The start of the
        document is returned unchanged.

        Example:
            ```markdown
            # Header 1

            Content
             // <-- prior position = "\\n"
            # Header 2 // <-- current position = "#"
            ```
        """
        if position.offset == 0:
            return position

        line = self.line_of(position.offset)
        if position.column > 0:
            segment_start = self.line_starts[line]
        else:
            segment_start = self.line_starts[line - 1] if line > 0 else 0

        step = self._last_grapheme_length(segment_start, position.offset)
        new_offset = position.offset - step

        if position.column > 0:
            return Position(
                line=position.line,
                column=max(position.column - step, 0),
                offset=new_offset,
            )
        if position.line > 0:
            return Position(
                line=position.line - 1,
                column=new_offset - segment_start,
                offset=new_offset,
            )
        return position

    def _last_grapheme_length(self, start: int, end: int) -> int:
        """Byte length of the last grapheme cluster in data[start:end]."""
        try:
            segment = self.data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"offset {end} is not on a character boundary") from exc
        clusters = _GRAPHEME_RE.findall(segment)
        if not clusters:
            return 0
        return len(clusters[-1].encode("utf-8"))

    # ─────────────────────────────────────────────────────────────────────────
    # Slicing
    # ─────────────────────────────────────────────────────────────────────────

    def slice(self, block_range: BlockRange) -> str:
        """
        Text covered by a half-open range.

        Raises:
            ValueError: If the range falls outside the document or splits
                a character
        """
        return self.text_between(block_range.start.offset, block_range.end.offset)

    def text_between(self, start: int, end: int) -> str:
        if end > len(self.data):
            raise ValueError(f"range end {end} beyond document of {len(self.data)} bytes")
        try:
            return self.data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"range [{start}, {end}) splits a character") from exc


def get_text_by_range(text: str, block_range: BlockRange) -> str:
    """Slice ``text`` by a byte range without building a reusable index."""
    return SourceText(text).slice(block_range)
