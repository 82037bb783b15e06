"""
Module: readers.pdf

Purpose:
    PDF reader. Uses the document outline (table of contents) as the
    heading structure and the extracted page text as the source, so a
    PDF can be outlined like any text format.

Key Classes:
    - PdfReader: Reader bound to one PDF document

Dependencies:
    - fitz (PyMuPDF): Outline and page text extraction
    - core.utils.text: Byte positions for header ranges
    - core.errors: FormatError for unreadable documents

Used By:
    - readers: Exported; constructed per document rather than by name

Usage:
    The source handed to the engine must be the reader's own text:

        reader = PdfReader(path)
        engine = OutlineEngine(reader.extract_text())
        outline = engine.outline(reader)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union

import fitz

from freeout.core.errors import FormatError
from freeout.core.models import BlockRange
from freeout.core.utils.text import SourceText
from .base import HeadingEvent, ProseEvent, Reader, ReaderEvent

if TYPE_CHECKING:
    from freeout.engine.config import OutlineConfig

logger = logging.getLogger(__name__)

# Separator placed between the text of consecutive pages
PAGE_SEPARATOR = "\n"

# (level, title, 1-based page)
TocEntry = Tuple[int, str, int]


class PdfReader(Reader):
    """
    Reader for a PDF file or in-memory PDF bytes.

    Each outline entry becomes a heading at its outline level. Its header
    range is the line where the title first appears at or after the start
    of its target page; an entry whose title cannot be found gets an empty
    range at the start of that page.

    Attributes:
        document: Path to the PDF, or its raw bytes
    """

    name = "pdf"

    def __init__(self, document: Union[str, Path, bytes]):
        self.document = document
        self._pages: Optional[List[str]] = None
        self._toc: Optional[List[TocEntry]] = None

    def extract_text(self) -> str:
        """Text of all pages joined by PAGE_SEPARATOR."""
        return PAGE_SEPARATOR.join(self._load()[0])

    def read(self, source: str, config: OutlineConfig) -> Iterator[ReaderEvent]:
        pages, toc = self._load()
        if source != PAGE_SEPARATOR.join(pages):
            raise FormatError(self.name, "source text does not match the PDF page text")
        if not toc:
            logger.warning(f"PDF has no outline: {self._label()}")
            return

        text = SourceText(source)
        page_starts = _page_starts(pages)
        cursor = 0
        prose_from: Optional[int] = None

        for level, title, page in toc:
            page_index = min(max(page, 1), len(pages)) - 1
            search_from = max(page_starts[page_index], cursor)
            found = source.find(title, search_from) if title else -1

            if found < 0:
                logger.warning(f"Outline entry {title!r} not found on page {page}")
                start = end = search_from
            else:
                start = max(_line_start(source, found), cursor)
                end = _line_end(source, found)

            if prose_from is not None and config.include_content:
                yield ProseEvent(source[prose_from:start])

            yield HeadingEvent(
                depth=max(level, 1),
                marker="",
                title=title,
                header_range=BlockRange(
                    start=text.position_at(len(source[:start].encode("utf-8"))),
                    end=text.position_at(len(source[:end].encode("utf-8"))),
                ),
            )
            cursor = end
            prose_from = end

        if prose_from is not None and config.include_content:
            yield ProseEvent(source[prose_from:])

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def _load(self) -> Tuple[List[str], List[TocEntry]]:
        if self._pages is not None and self._toc is not None:
            return self._pages, self._toc
        try:
            if isinstance(self.document, bytes):
                doc = fitz.open(stream=self.document, filetype="pdf")
            else:
                doc = fitz.open(str(self.document))
            with doc:
                pages = [page.get_text("text") for page in doc]
                toc = [
                    (int(level), " ".join(str(title).split()), int(page))
                    for level, title, page, *_ in doc.get_toc(simple=True)
                ]
        except (RuntimeError, ValueError, OSError) as exc:
            raise FormatError(self.name, f"cannot read {self._label()}: {exc}") from exc

        logger.debug(f"Loaded {len(pages)} pages and {len(toc)} outline entries from {self._label()}")
        self._pages, self._toc = pages, toc
        return pages, toc

    def _label(self) -> str:
        if isinstance(self.document, bytes):
            return f"<{len(self.document)} bytes>"
        return Path(self.document).name


def _page_starts(pages: List[str]) -> List[int]:
    """Character index at which each page's text starts."""
    starts = []
    index = 0
    for page in pages:
        starts.append(index)
        index += len(page) + len(PAGE_SEPARATOR)
    return starts


def _line_start(source: str, index: int) -> int:
    return source.rfind("\n", 0, index) + 1


def _line_end(source: str, index: int) -> int:
    end = source.find("\n", index)
    return len(source) if end < 0 else end
