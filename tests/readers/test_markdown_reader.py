"""
Tests for readers.markdown

Test Coverage:
- ATX headings: levels, closing marks, indentation, header ranges
- Setext headings
- Paragraphs and fenced code as prose
- Things that look like headings but are not
"""
import pytest

from freeout.core.models import Position
from freeout.engine.config import OutlineConfig
from freeout.readers.base import HeadingEvent, ProseEvent
from freeout.readers.markdown import MarkdownReader


def _read(source: str):
    return list(MarkdownReader().read(source, OutlineConfig()))


def _headings(source: str):
    return [event for event in _read(source) if isinstance(event, HeadingEvent)]


class TestAtxHeadings:
    """Tests for '#' headings."""

    def test_read_when_levels_then_depth_is_level(self):
        headings = _headings("# One\n## Two\n###### Six")
        assert [(h.depth, h.marker, h.title) for h in headings] == [
            (1, "#", "One"),
            (2, "##", "Two"),
            (6, "######", "Six"),
        ]

    def test_read_when_closing_marks_then_stripped_from_title(self):
        assert _headings("## Title ##")[0].title == "Title"

    def test_read_when_hash_inside_title_then_kept(self):
        assert _headings("# C# notes")[0].title == "C# notes"

    def test_read_when_no_space_after_marks_then_not_heading(self):
        assert _headings("#hashtag") == []

    def test_read_when_seven_marks_then_not_heading(self):
        assert _headings("####### Seven") == []

    def test_read_when_indented_four_spaces_then_not_heading(self):
        assert _headings("    # Code") == []

    def test_read_when_empty_heading_then_empty_title(self):
        assert _headings("#")[0].title == ""

    def test_header_range_when_second_line_then_line_bounds(self):
        heading = _headings("intro\n## Title\nbody")[0]
        assert heading.header_range.start == Position(line=1, column=0, offset=6)
        assert heading.header_range.end == Position(line=1, column=8, offset=14)

    def test_header_range_when_indented_then_starts_at_marker(self):
        heading = _headings("  # Title")[0]
        assert heading.header_range.start == Position(0, 2, 2)

    def test_header_range_when_multibyte_title_then_byte_columns(self):
        heading = _headings("# Café")[0]
        assert heading.header_range.end == Position(0, 7, 7)

    def test_header_range_when_crlf_then_excludes_carriage_return(self):
        heading = _headings("# A\r\nbody")[0]
        assert heading.header_range.end == Position(0, 3, 3)


class TestSetextHeadings:
    """Tests for underlined headings."""

    def test_read_when_equals_underline_then_level_one(self):
        heading = _headings("Title\n=====\n")[0]
        assert (heading.depth, heading.title) == (1, "Title")

    def test_read_when_dash_underline_then_level_two(self):
        heading = _headings("Sub title\n---")[0]
        assert (heading.depth, heading.title) == (2, "Sub title")

    def test_header_range_when_setext_then_covers_underline(self):
        heading = _headings("Title\n===")[0]
        assert heading.header_range.start == Position(0, 0, 0)
        assert heading.header_range.end == Position(1, 3, 9)

    def test_read_when_dashes_after_blank_line_then_thematic_break(self):
        events = _read("para\n\n---\nnext")
        assert [type(e) for e in events] == [ProseEvent, ProseEvent]

    def test_read_when_list_item_then_dashes_then_thematic_break(self):
        events = _read("# A\n- item one\n---\ntext")
        assert [e.title for e in events if isinstance(e, HeadingEvent)] == ["A"]
        assert events[1:] == [ProseEvent("- item one"), ProseEvent("text")]

    def test_read_when_ordered_item_then_dashes_then_thematic_break(self):
        assert _headings("1. first\n---") == []

    def test_read_when_blockquote_then_dashes_then_thematic_break(self):
        events = _read("> quoted line\n---\nafter")
        assert events == [ProseEvent("> quoted line"), ProseEvent("after")]

    def test_read_when_list_item_then_equals_then_continuation_text(self):
        assert _read("- item\n===") == [ProseEvent("- item\n===")]

    def test_read_when_list_after_blank_line_then_later_blocks_unaffected(self):
        headings = _headings("# A\n\n* one\n* two\n\n---\n\n## B")
        assert [(h.depth, h.title) for h in headings] == [(1, "A"), (2, "B")]


class TestProse:
    """Tests for prose events."""

    def test_read_when_paragraphs_then_one_event_each(self):
        events = _read("# T\nOne two\nthree\n\nFour")
        assert [e.text for e in events if isinstance(e, ProseEvent)] == ["One two\nthree", "Four"]

    def test_read_when_indented_lines_then_leading_whitespace_stripped(self):
        events = _read("# T\n   indented text")
        assert events[1].text == "indented text"

    def test_read_when_fenced_code_then_code_is_prose_and_headings_ignored(self):
        events = _read("# T\n```python\n# not a heading\nx = 1\n```\nafter")
        assert len([e for e in events if isinstance(e, HeadingEvent)]) == 1
        assert events[1] == ProseEvent("# not a heading\nx = 1")
        assert events[2] == ProseEvent("after")

    def test_read_when_tilde_fence_then_closed_only_by_tildes(self):
        events = _read("~~~\n```\n~~~")
        assert events == [ProseEvent("```")]

    def test_read_when_fence_unclosed_then_runs_to_end(self):
        events = _read("# T\n```\n# inside")
        assert events[-1] == ProseEvent("# inside")
        assert len(events) == 2

    @pytest.mark.parametrize("source", ["", "\n\n", "   "])
    def test_read_when_blank_document_then_no_events(self, source):
        assert _read(source) == []
