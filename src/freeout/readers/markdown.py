"""
Module: readers.markdown

Purpose:
    Markdown reader. Scans the source line by line and yields a heading
    event for every ATX (``## Title``) and setext (``Title`` over ``===``)
    heading, and a prose event for every paragraph and fenced code block
    between them.

Key Classes:
    - MarkdownReader: Reader implementation for Markdown/CommonMark text

Dependencies:
    - re (std): Line patterns
    - core.utils.text: Byte positions for header ranges

Used By:
    - readers: Registered as "markdown"
    - engine.pipeline: Default reader of generate_outline()

Notes:
    Heading depth is the heading level (1-6). A heading's header range
    runs from its first non-indent character to the end of its last
    line, newline excluded. Indented code (4+ spaces) is never a heading,
    and a list item or blockquote followed by dashes is a thematic break.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from freeout.core.models import BlockRange, Position
from freeout.core.utils.text import SourceText
from .base import HeadingEvent, ProseEvent, Reader, ReaderEvent

if TYPE_CHECKING:
    from freeout.engine.config import OutlineConfig

logger = logging.getLogger(__name__)

# "## Title ##": up to 3 spaces of indent, 1-6 marks, optional closing run
ATX_HEADING_RE = re.compile(r"^( {0,3})(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
# List item or blockquote start; never underlined into a setext heading
CONTAINER_START_RE = re.compile(r"^(?:[-*+](?:[ \t]|$)|\d{1,9}[.)](?:[ \t]|$)|>)")


@dataclass
class _Line:
    index: int
    text: str
    indent: int


class MarkdownReader(Reader):
    """
    Line-based Markdown reader.

    Example:
        >>> events = list(MarkdownReader().read("# A\\ntext", OutlineConfig()))
        >>> events[0].title, events[1].text
        ('A', 'text')
    """

    name = "markdown"

    def read(self, source: str, config: OutlineConfig) -> Iterator[ReaderEvent]:
        text = SourceText(source)
        paragraph: List[_Line] = []
        fence: Optional[Tuple[str, int]] = None
        code: List[str] = []
        headings = 0

        for index in range(text.line_count()):
            line = text.get_line(index) or ""
            if line.endswith("\r"):
                line = line[:-1]

            if fence is not None:
                if _closes_fence(line, fence):
                    fence = None
                    yield ProseEvent("\n".join(code))
                    code = []
                else:
                    code.append(line)
                continue

            fence_match = FENCE_OPEN_RE.match(line)
            if fence_match and not (
                fence_match.group(2)[0] == "`" and "`" in fence_match.group(3)
            ):
                yield from _flush(paragraph)
                fence = (fence_match.group(2)[0], len(fence_match.group(2)))
                continue

            atx = ATX_HEADING_RE.match(line)
            if atx:
                yield from _flush(paragraph)
                headings += 1
                yield _atx_heading(text, index, line, atx)
                continue

            underline = SETEXT_UNDERLINE_RE.match(line)
            if underline and paragraph and not _in_container(paragraph):
                headings += 1
                yield _setext_heading(text, paragraph, index, line)
                paragraph.clear()
                continue
            if underline and underline.group(1)[0] == "-":
                # Thematic break
                yield from _flush(paragraph)
                continue

            stripped = line.lstrip()
            if not stripped:
                yield from _flush(paragraph)
                continue
            paragraph.append(_Line(index=index, text=stripped, indent=len(line) - len(stripped)))

        yield from _flush(paragraph)
        if fence is not None:
            logger.warning("Unclosed code fence runs to the end of the document")
            yield ProseEvent("\n".join(code))

        logger.debug(f"Markdown reader found {headings} headings in {text.line_count()} lines")


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _flush(paragraph: List[_Line]) -> Iterator[ProseEvent]:
    """Emit the pending paragraph, if any, and reset it."""
    if paragraph:
        yield ProseEvent("\n".join(line.text.rstrip() for line in paragraph))
        paragraph.clear()


def _in_container(paragraph: List[_Line]) -> bool:
    return any(CONTAINER_START_RE.match(line.text) for line in paragraph)


def _closes_fence(line: str, fence: Tuple[str, int]) -> bool:
    char, length = fence
    stripped = line.strip()
    return (
        len(line) - len(line.lstrip(" ")) <= 3
        and len(stripped) >= length
        and stripped == char * len(stripped)
    )


def _line_position(text: SourceText, index: int, column_chars: int, line: str) -> Position:
    """Position of a character column within a line."""
    column = len(line[:column_chars].encode("utf-8"))
    return Position(line=index, column=column, offset=text.line_starts[index] + column)


def _atx_heading(text: SourceText, index: int, line: str, match: re.Match) -> HeadingEvent:
    marker = match.group(2)
    indent = len(match.group(1))
    start = _line_position(text, index, indent, line)
    end = _line_position(text, index, len(line.rstrip()), line)
    return HeadingEvent(
        depth=len(marker),
        marker=marker,
        title=(match.group(3) or "").strip(),
        header_range=BlockRange(start=start, end=end),
    )


def _setext_heading(
    text: SourceText,
    paragraph: List[_Line],
    index: int,
    underline: str,
) -> HeadingEvent:
    """A paragraph underlined with ``=`` (level 1) or ``-`` (level 2)."""
    first = paragraph[0]
    first_line = (text.get_line(first.index) or "").rstrip("\r")
    start = _line_position(text, first.index, first.indent, first_line)
    end = _line_position(text, index, len(underline.rstrip()), underline)
    marker = underline.strip()
    return HeadingEvent(
        depth=1 if marker[0] == "=" else 2,
        marker=marker,
        title=" ".join(line.text.strip() for line in paragraph),
        header_range=BlockRange(start=start, end=end),
    )
