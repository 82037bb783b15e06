"""
Tests for readers.pdf

Test Coverage:
- Outline entries become headings at their outline level
- Page text becomes prose between headings
- FormatError for unreadable documents and mismatched sources
"""
import logging

import fitz
import pytest

from freeout.core.errors import FormatError
from freeout.engine import OutlineConfig, OutlineEngine
from freeout.readers.base import HeadingEvent
from freeout.readers.pdf import PdfReader


def _make_pdf(pages, toc=None) -> bytes:
    """Build a PDF with one text block per page and an optional outline."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    if toc:
        doc.set_toc(toc)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def sample_pdf() -> bytes:
    return _make_pdf(
        ["Chapter One\nIntro words", "Section Two\nMore words"],
        toc=[[1, "Chapter One", 1], [2, "Section Two", 2]],
    )


class TestPdfReader:
    """Tests for PdfReader."""

    def test_extract_text_when_pages_then_all_page_text(self, sample_pdf):
        text = PdfReader(sample_pdf).extract_text()
        assert "Chapter One" in text
        assert "More words" in text
        assert text.index("Chapter One") < text.index("Section Two")

    def test_outline_when_toc_then_headings_by_level(self, sample_pdf):
        reader = PdfReader(sample_pdf)
        engine = OutlineEngine(reader.extract_text())

        outline = engine.outline(reader)

        assert [item.title for item in outline.items] == ["Chapter One"]
        assert [item.title for item in outline.items[0].subitems] == ["Section Two"]
        assert engine.get_header_text(1) == "Chapter One"

    def test_outline_when_page_text_then_content_attached(self, sample_pdf):
        reader = PdfReader(sample_pdf)
        outline = OutlineEngine(reader.extract_text()).outline(reader)

        chapter = outline.items[0]
        assert "Intro words" in chapter.block.content
        assert "More words" in chapter.subitems[0].block.content

    def test_read_when_content_disabled_then_headings_only(self, sample_pdf):
        reader = PdfReader(sample_pdf)
        config = OutlineConfig(include_content=False)
        events = list(reader.read(reader.extract_text(), config))
        assert all(isinstance(event, HeadingEvent) for event in events)
        assert len(events) == 2

    def test_read_when_title_not_in_text_then_empty_range_at_page_start(self, caplog):
        data = _make_pdf(["First page", "Second page"], toc=[[1, "Missing Title", 2]])
        reader = PdfReader(data)
        source = reader.extract_text()

        with caplog.at_level(logging.WARNING):
            events = list(reader.read(source, OutlineConfig()))

        heading = events[0]
        assert heading.header_range.is_empty
        assert source.encode("utf-8")[heading.header_range.start.offset:].decode("utf-8").startswith("Second page")
        assert "not found" in caplog.text

    def test_read_when_no_toc_then_no_events(self):
        reader = PdfReader(_make_pdf(["Just text"]))
        assert list(reader.read(reader.extract_text(), OutlineConfig())) == []

    def test_read_when_source_differs_then_format_error(self, sample_pdf):
        with pytest.raises(FormatError, match="does not match"):
            list(PdfReader(sample_pdf).read("other text", OutlineConfig()))

    def test_read_when_not_a_pdf_then_format_error(self):
        with pytest.raises(FormatError) as exc_info:
            PdfReader(b"definitely not a pdf").extract_text()
        assert exc_info.value.reader == "pdf"

    def test_read_when_file_path_then_same_text_as_bytes(self, sample_pdf, tmp_path):
        path = tmp_path / "sample.pdf"
        path.write_bytes(sample_pdf)
        assert PdfReader(path).extract_text() == PdfReader(sample_pdf).extract_text()
