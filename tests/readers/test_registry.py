"""
Tests for the reader registry
"""
import pytest

from freeout.readers import MarkdownReader, TypstReader, available_readers, get_reader


def test_available_readers_lists_text_formats():
    assert available_readers() == ["markdown", "typst"]


def test_get_reader_returns_new_instance_by_name():
    assert isinstance(get_reader("markdown"), MarkdownReader)
    assert isinstance(get_reader("Typst"), TypstReader)
    assert get_reader("markdown") is not get_reader("markdown")


def test_get_reader_unknown_name_raises():
    with pytest.raises(ValueError, match="available: markdown, typst"):
        get_reader("rst")
