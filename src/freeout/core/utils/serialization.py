"""
Serialization Utilities

Provides to/from JSON utilities for outlines and block arenas.

- Every model has `to_dict()` and `from_dict()`; these helpers add the
  document envelope (schema version) and the file/string round trip.
- Block arenas are stored as a list ordered by id, since JSON object keys
  are always strings.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.blocks import Block, Blocks
from ..models.outline import Outline

OUTLINE_SCHEMA_VERSION = 1


# ─────────────────────────────────────────────────────────────────────────────
# Outline Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_outline(outline: Outline) -> dict[str, Any]:
    """
    Serialize an Outline to a dictionary.

    Args:
        outline: Outline to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    data = outline.to_dict()
    data["schema_version"] = OUTLINE_SCHEMA_VERSION
    return data


def deserialize_outline(data: dict[str, Any]) -> Outline:
    """
    Deserialize an Outline from a dictionary.

    Raises:
        ValueError: If the schema version is unknown or the data is invalid
    """
    version = data.get("schema_version", OUTLINE_SCHEMA_VERSION)
    if version != OUTLINE_SCHEMA_VERSION:
        raise ValueError(f"Unsupported outline schema version: {version}")
    return Outline.from_dict(data)


def outline_to_json(outline: Outline, *, indent: int | None = None) -> str:
    return json.dumps(serialize_outline(outline), indent=indent, ensure_ascii=False)


def outline_from_json(text: str) -> Outline:
    """
    Parse an Outline from JSON text.

    Raises:
        ValueError: If the text is not valid JSON or not a valid outline
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid outline JSON: {e}") from e
    return deserialize_outline(data)


# ─────────────────────────────────────────────────────────────────────────────
# Blocks Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_blocks(blocks: Blocks) -> list[dict[str, Any]]:
    """Serialize a block arena as a list ordered by id."""
    return [blocks[block_id].to_dict() for block_id in sorted(blocks)]


def deserialize_blocks(data: list[dict[str, Any]]) -> Blocks:
    """
    Deserialize a block arena.

    Raises:
        ValueError: If two entries share an id
    """
    blocks: Blocks = {}
    for entry in data:
        block = Block.from_dict(entry)
        if block.id in blocks:
            raise ValueError(f"Duplicate block id: {block.id}")
        blocks[block.id] = block
    return blocks


# ─────────────────────────────────────────────────────────────────────────────
# File Utilities
# ─────────────────────────────────────────────────────────────────────────────

def save_outline_json(outline: Outline, path: Path) -> None:
    """
    Save an outline to a JSON file.

    Args:
        outline: Outline to save
        path: Output path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_outline(outline), f, indent=2, ensure_ascii=False)


def load_outline_json(path: Path) -> Outline:
    """
    Load an outline from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a valid outline
    """
    if not path.exists():
        raise FileNotFoundError(f"Outline file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return outline_from_json(f.read())
