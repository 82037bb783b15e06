"""
Module: readers.typst

Purpose:
    Typst reader. Yields a heading event for every ``=`` heading and a
    prose event for each paragraph and raw block between them. Line
    comments and block comments are skipped.

Key Classes:
    - TypstReader: Reader implementation for Typst markup

Dependencies:
    - re (std): Line patterns
    - core.utils.text: Byte positions for header ranges
    - core.errors: FormatError for unterminated raw blocks and comments

Used By:
    - readers: Registered as "typst"
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterator, List, Tuple

from freeout.core.errors import FormatError
from freeout.core.models import BlockRange, Position
from freeout.core.utils.text import SourceText
from .base import HeadingEvent, ProseEvent, Reader, ReaderEvent

if TYPE_CHECKING:
    from freeout.engine.config import OutlineConfig

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^([ \t]*)(=+)[ \t]+(.*?)[ \t]*$")
LABEL_RE = re.compile(r"[ \t]*<[\w:.\-]+>$")
RAW_FENCE_RE = re.compile(r"^[ \t]*(`{3,})")


class TypstReader(Reader):
    """
    Line-based Typst reader.

    Raises FormatError for a raw block or block comment that is never
    closed, which Typst itself rejects.
    """

    name = "typst"

    def read(self, source: str, config: OutlineConfig) -> Iterator[ReaderEvent]:
        text = SourceText(source)
        paragraph: List[str] = []
        raw: List[str] = []
        raw_fence = ""
        raw_start = 0
        comment_start = -1

        for index in range(text.line_count()):
            line = (text.get_line(index) or "").rstrip("\r")

            if comment_start >= 0:
                close = line.find("*/")
                if close < 0:
                    continue
                comment_start = -1
                rest = line[close + 2:].strip()
                if rest:
                    paragraph.append(rest)
                continue

            if raw_fence:
                if line.strip() == raw_fence:
                    raw_fence = ""
                    yield ProseEvent("\n".join(raw))
                    raw = []
                else:
                    raw.append(line)
                continue

            stripped = line.strip()
            if stripped.startswith("//"):
                continue
            if "/*" in line:
                line, opened = _strip_block_comments(line)
                if opened:
                    comment_start = index
                stripped = line.strip()
                if not stripped:
                    continue

            fence = RAW_FENCE_RE.match(line)
            if fence and stripped.count(fence.group(1)) == 1:
                if paragraph:
                    yield ProseEvent("\n".join(paragraph))
                    paragraph = []
                raw_fence = fence.group(1)
                raw_start = index
                continue

            heading = HEADING_RE.match(line)
            if heading:
                if paragraph:
                    yield ProseEvent("\n".join(paragraph))
                    paragraph = []
                yield _heading(text, index, line, heading)
                continue

            if not stripped:
                if paragraph:
                    yield ProseEvent("\n".join(paragraph))
                    paragraph = []
                continue
            paragraph.append(stripped)

        if raw_fence:
            raise FormatError(self.name, f"unclosed raw block starting on line {raw_start + 1}")
        if comment_start >= 0:
            raise FormatError(self.name, f"unclosed block comment starting on line {comment_start + 1}")
        if paragraph:
            yield ProseEvent("\n".join(paragraph))


def _heading(text: SourceText, index: int, line: str, match: re.Match) -> HeadingEvent:
    indent = len(match.group(1).encode("utf-8"))
    column_end = len(line.rstrip().encode("utf-8"))
    line_start = text.line_starts[index]
    title = LABEL_RE.sub("", match.group(3))
    return HeadingEvent(
        depth=len(match.group(2)),
        marker=match.group(2),
        title=title,
        header_range=BlockRange(
            start=Position(line=index, column=indent, offset=line_start + indent),
            end=Position(line=index, column=column_end, offset=line_start + column_end),
        ),
    )


def _strip_block_comments(line: str) -> Tuple[str, bool]:
    """
    Remove ``/* ... */`` spans from a line.

    Returns:
        Visible text and whether a comment is left open at the line end
    """
    visible = []
    pos = 0
    while True:
        opening = line.find("/*", pos)
        if opening < 0:
            visible.append(line[pos:])
            return "".join(visible), False
        visible.append(line[pos:opening])
        close = line.find("*/", opening + 2)
        if close < 0:
            return "".join(visible), True
        pos = close + 2
