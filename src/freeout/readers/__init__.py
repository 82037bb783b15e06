"""
Readers Package

Format-specific readers and the registry that looks them up by name.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .base import HeadingEvent, ProseEvent, Reader, ReaderEvent
from .markdown import MarkdownReader
from .typst import TypstReader
from .pdf import PdfReader

# Readers that need no constructor arguments
_READERS: Dict[str, Callable[[], Reader]] = {
    MarkdownReader.name: MarkdownReader,
    TypstReader.name: TypstReader,
}


def available_readers() -> List[str]:
    """Names accepted by get_reader()."""
    return sorted(_READERS)


def get_reader(name: str) -> Reader:
    """
    Create a reader by name.

    PdfReader is not registered: it is bound to a document and must be
    constructed directly.

    Raises:
        ValueError: If no reader has that name
    """
    factory = _READERS.get(name.lower())
    if factory is None:
        raise ValueError(
            f"Unknown reader: {name!r} (available: {', '.join(available_readers())})"
        )
    return factory()


__all__ = [
    "HeadingEvent",
    "ProseEvent",
    "Reader",
    "ReaderEvent",
    "MarkdownReader",
    "TypstReader",
    "PdfReader",
    "available_readers",
    "get_reader",
]
