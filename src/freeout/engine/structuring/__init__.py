"""
Module: engine.structuring

Purpose:
    Structuring subpackage for building the block arena from reader
    events and turning the finished arena into an Outline.

Key Modules:
    - tree_builder: Build blocks with dense ids and parent links
    - validator: Check id continuity
    - queries: Parent, root, sibling and title lookups over an arena
    - assembler: Build the Outline from the arena

Dependencies:
    - freeout.core.models: Block, Outline, OutlineItem

Used By:
    - engine.pipeline: Building, validation and assembly stages
"""
