"""
Utils Package

Text positions, counting, hashing and serialization.
"""

from .counting import count_words
from .hashing import compute_hash
from .text import SourceText, get_text_by_range
from .serialization import (
    serialize_outline,
    deserialize_outline,
    outline_to_json,
    outline_from_json,
    serialize_blocks,
    deserialize_blocks,
    save_outline_json,
    load_outline_json,
)

__all__ = [
    "count_words",
    "compute_hash",
    "SourceText",
    "get_text_by_range",
    "serialize_outline",
    "deserialize_outline",
    "outline_to_json",
    "outline_from_json",
    "serialize_blocks",
    "deserialize_blocks",
    "save_outline_json",
    "load_outline_json",
]
