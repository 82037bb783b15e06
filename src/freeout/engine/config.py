"""
Module: engine.config

Purpose:
    Configuration dataclass for the outline pipeline.

Key Classes:
    - OutlineConfig: Settings passed to readers and pipeline stages

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - engine.pipeline: Uses OutlineConfig for pipeline settings
    - engine.structuring.tree_builder: Honours include_content
    - readers: Receive the config in Reader.read()
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutlineConfig:
    """
    Configuration for outline generation.

    Attributes:
        include_content: Attach prose to blocks (default True). When
            False, blocks carry no content, so hashes and self statistics
            stay unset for them.
        record_timings: Collect per-stage timings on the engine
            (default False)
    """
    include_content: bool = True
    record_timings: bool = False
