"""
Module: engine.pipeline

Purpose:
    Main pipeline orchestrator. Runs a reader over a source document and
    takes the resulting blocks through validation, range resolution,
    content hashing, statistics aggregation, optional target distribution
    and outline assembly.

Key Classes:
    - OutlineEngine: Owns one source document and its block arena

Key Functions:
    - generate_outline(): One-shot entry point

Dependencies:
    - engine.structuring: Tree building, validation, assembly
    - engine.slicing: Range resolution
    - engine.statistics: Content, aggregation, distribution
    - readers: Format-specific readers

Used By:
    - freeout (package API)
    - scripts/benchmark_outline.py

Stage order:
    Every stage relies on what the previous ones established (dense ids
    -> resolved ranges -> self statistics -> aggregates -> targets), so
    the order below is fixed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from freeout.core.errors import MissingContentError
from freeout.core.models import Block, BlockRange, Blocks, Outline, WordsTarget
from freeout.core.utils.hashing import compute_hash
from freeout.core.utils.text import SourceText
from freeout.readers import get_reader
from freeout.readers.base import Reader, ReaderEvent
from .config import OutlineConfig
from .slicing.range_resolver import populate_block_ranges
from .statistics.aggregator import aggregate_statistics
from .statistics.content_processor import process_content
from .statistics.distributor import distribute_targets, document_statistics
from .structuring.assembler import build_outline
from .structuring.tree_builder import build_blocks
from .structuring.validator import validate_blocks
from .timing import StageTimings, timed_stage

logger = logging.getLogger(__name__)


class OutlineEngine:
    """
    Outline engine for a single source document.

    The engine exclusively owns its block arena while a pipeline runs;
    the Outline it returns holds snapshots and stays valid after the
    engine is discarded. Not thread-safe.

    Attributes:
        config: Outline configuration
        source: Indexed source text
        blocks: Block arena of the last outline, empty after a failed one
        timings: Per-stage timings, when config.record_timings is set

    Example:
        >>> engine = OutlineEngine("# Title\\n\\nSome words")
        >>> outline = engine.outline("markdown")
        >>> outline.items[0].block.self_stats.count.words
        3
    """

    def __init__(self, source: str, config: Optional[OutlineConfig] = None):
        self.config = config or OutlineConfig()
        self.source = SourceText(source)
        self.blocks: Blocks = {}
        self.timings: Optional[StageTimings] = (
            StageTimings() if self.config.record_timings else None
        )

    @property
    def text(self) -> str:
        return self.source.text

    def get_line(self, line: int) -> Optional[str]:
        return self.source.get_line(line)

    def line_count(self) -> int:
        return self.source.line_count()

    # ─────────────────────────────────────────────────────────────────────────
    # Pipeline
    # ─────────────────────────────────────────────────────────────────────────

    def outline(
        self,
        reader: Union[Reader, str],
        target: Optional[WordsTarget] = None,
    ) -> Outline:
        """
        Generate the outline of the source with a reader.

        Args:
            reader: Reader instance or registered reader name
            target: Optional document-level word target to distribute

        Returns:
            Complete Outline

        Raises:
            FormatError: If the reader cannot parse the source
            StructuralError: If the reader produced an inconsistent tree
        """
        if isinstance(reader, str):
            reader = get_reader(reader)

        self.blocks = {}
        logger.debug(f"Running reader: {reader.name}")
        with timed_stage(self.timings, "reading"):
            events: List[ReaderEvent] = list(reader.read(self.source.text, self.config))

        with timed_stage(self.timings, "tree_building"):
            blocks = build_blocks(events, include_content=self.config.include_content)

        return self.outline_blocks(blocks, target)

    def outline_blocks(self, blocks: Blocks, target: Optional[WordsTarget] = None) -> Outline:
        """
        Run every stage after tree building on an existing arena.

        For callers that build blocks themselves. The arena is taken over
        by the engine and filled in place. On failure the engine keeps no
        blocks and nothing is returned.

        Raises:
            StructuralError: If ids are not 1..N or a child is missing
        """
        self.blocks = {}

        logger.debug("Validating blocks")
        with timed_stage(self.timings, "validation"):
            validate_blocks(blocks)

        logger.debug("Resolving block ranges")
        with timed_stage(self.timings, "range_resolution"):
            populate_block_ranges(blocks, self.source)

        logger.debug("Processing content")
        with timed_stage(self.timings, "content_processing"):
            process_content(blocks)

        logger.debug("Aggregating statistics")
        with timed_stage(self.timings, "aggregation"):
            aggregate_statistics(blocks)

        if target is not None:
            logger.debug(f"Distributing target of {target.words} words")
            with timed_stage(self.timings, "distribution"):
                statistics = distribute_targets(blocks, target)
        else:
            statistics = document_statistics(blocks)

        with timed_stage(self.timings, "assembly"):
            outline = build_outline(blocks, statistics)

        self.blocks = blocks
        logger.info(
            f"Outlined {len(blocks)} blocks ({len(outline.items)} roots, "
            f"{statistics.count.words} words)"
        )
        return outline

    def generate_incremental_outline(
        self,
        reader: Union[Reader, str],
        previous_blocks: Optional[Blocks] = None,
        target: Optional[WordsTarget] = None,
    ) -> Outline:
        """
        Outline the source, reusing a previous arena where possible.

        Only the full rebuild exists: without previous blocks this is
        ``outline()``. Reusing unchanged blocks is not implemented.

        Raises:
            NotImplementedError: If previous blocks are supplied
        """
        if previous_blocks:
            raise NotImplementedError("Incremental re-outlining is not supported")
        return self.outline(reader, target)

    # ─────────────────────────────────────────────────────────────────────────
    # Block access
    # ─────────────────────────────────────────────────────────────────────────

    def get_block(self, block_id: int) -> Block:
        """
        Block of the last outline by id.

        Raises:
            MissingContentError: If no such block exists
        """
        block = self.blocks.get(block_id)
        if block is None:
            raise MissingContentError(block_id, "block does not exist")
        return block

    def get_block_text(self, block_id: int) -> str:
        """
        Source text owned by a block, sliced by its resolved range.

        Raises:
            MissingContentError: If the block does not exist or its range
                has not been resolved
        """
        block = self.get_block(block_id)
        if block.block_range is None:
            raise MissingContentError(block_id, "block range has not been resolved")
        return self.get_content_by_range(block.block_range)

    def get_header_text(self, block_id: int) -> str:
        """Source text of just the block's header line."""
        return self.get_content_by_range(self.get_block(block_id).header_range)

    def get_content_by_range(self, block_range: BlockRange) -> str:
        return self.source.slice(block_range)

    def compute_block_hash(self, block_id: int) -> int:
        """
        Hash the block's ranged source text and store it on the block.

        Unlike the content stage, this always overwrites ``hash``.

        Raises:
            MissingContentError: If the block or its range is missing
        """
        value = compute_hash(self.get_block_text(block_id))
        self.blocks[block_id].hash = value
        return value


def generate_outline(
    source: str,
    reader: Union[Reader, str] = "markdown",
    *,
    config: Optional[OutlineConfig] = None,
    target: Optional[WordsTarget] = None,
) -> Outline:
    """
    Generate the outline of a document in one call.

    Args:
        source: Raw document text
        reader: Reader instance or registered name (default "markdown")
        config: Optional outline configuration
        target: Optional document-level word target

    Returns:
        Complete Outline

    Example:
        >>> outline = generate_outline("# A\\n## B\\n# C")
        >>> [item.title for item in outline.items]
        ['A', 'C']
    """
    return OutlineEngine(source, config).outline(reader, target)
