"""
Module: engine.statistics

Purpose:
    Statistics subpackage: per-block counts and hashes, bottom-up
    aggregation and top-down target distribution.

Key Modules:
    - content_processor: Self word counts and content hashes
    - aggregator: Subtree totals
    - distributor: Uniform distribution of a word target

Dependencies:
    - freeout.core.utils: count_words, compute_hash

Used By:
    - engine.pipeline: Content, aggregation and distribution stages
"""
