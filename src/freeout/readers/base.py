"""
Module: readers.base

Purpose:
    Defines the reader capability - the format-specific collaborator that
    turns raw source text into the ordered structural sequence consumed
    by the tree builder - and the event records of that sequence.

Key Classes:
    - HeadingEvent: A structural marker (depth, marker, title, header range)
    - ProseEvent: Non-structural text found between markers
    - Reader: Abstract base class every format reader implements

Dependencies:
    - abc, dataclasses (std)
    - core.models: BlockRange, WordStatistics
    - engine.config: OutlineConfig (TYPE_CHECKING only)

Used By:
    - readers.markdown / readers.typst / readers.pdf: Implementations
    - engine.structuring.tree_builder: Consumes the events
    - engine.pipeline: Invokes Reader.read()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Union

from freeout.core.models import BlockRange, WordStatistics

if TYPE_CHECKING:
    from freeout.engine.config import OutlineConfig


@dataclass(frozen=True, slots=True)
class HeadingEvent:
    """
    A structural marker found in the source.

    Optional fields let a reader pre-populate block data it already
    knows; later stages never overwrite them.

    Attributes:
        depth: Nesting level reported by the format
        marker: Marker text, e.g. "##"
        title: Heading title
        header_range: Span of the marker line
        note: Optional annotation for the block
        exclude: Drop the block from statistics totals
        block_range: Owned span, if the format knows it
        hash: Content digest, if the format computed one
        self_stats: Statistics, if the format computed them
    """

    depth: int
    marker: str
    title: str
    header_range: BlockRange
    note: Optional[str] = None
    exclude: bool = False
    block_range: Optional[BlockRange] = None
    hash: Optional[int] = None
    self_stats: Optional[WordStatistics] = None

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"Heading depth must be >= 0: {self.depth}")


@dataclass(frozen=True, slots=True)
class ProseEvent:
    """Text between structural markers (paragraph, code block, list...)."""

    text: str


ReaderEvent = Union[HeadingEvent, ProseEvent]


class Reader(ABC):
    """
    Format-specific source reader.

    Subclasses yield events in document order and raise FormatError on
    input they cannot parse. Readers that cannot honour
    ``config.include_content`` cheaply may still yield ProseEvents; the
    tree builder drops them when content capture is off.
    """

    #: Name used in diagnostics and the reader registry
    name: str = "Unknown Reader"

    @abstractmethod
    def read(self, source: str, config: OutlineConfig) -> Iterator[ReaderEvent]:
        """
        Read ``source`` into an ordered structural sequence.

        Args:
            source: Raw document text
            config: Outline configuration

        Yields:
            HeadingEvent and ProseEvent records in document order

        Raises:
            FormatError: If the source is malformed for this format
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
