"""
Module: engine.slicing

Purpose:
    Slicing subpackage for resolving the span of source text each block
    owns.

Key Modules:
    - range_resolver: Boundary search and block_range population

Dependencies:
    - freeout.core.utils.text: Prior-position arithmetic

Used By:
    - engine.pipeline: Range resolution stage
"""
