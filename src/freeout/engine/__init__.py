"""
Module: engine

Purpose:
    Outline pipeline. Turns a reader's structural sequence into a block
    arena, resolves ranges, computes statistics, optionally distributes
    a word target and assembles the read-only Outline.

Key Functions:
    - generate_outline(): Main entry point for outlining a document

Key Classes:
    - OutlineEngine: Engine bound to one source document
    - OutlineConfig: Configuration for outline generation
    - StageTimings: Per-stage timing data

Dependencies:
    - regex: Grapheme-aware positions and word counting (via core.utils)
    - freeout.core.models: Block, Outline and value types

Used By:
    - freeout (package API)
    - scripts/benchmark_outline.py
"""

from .config import OutlineConfig
from .pipeline import OutlineEngine, generate_outline
from .timing import StageTimings, timed_stage

__all__ = [
    "generate_outline",
    "OutlineEngine",
    "OutlineConfig",
    "StageTimings",
    "timed_stage",
]
