"""
Content hashing.

Blocks carry a 64-bit digest of their content so callers can detect
which sections changed between two outlines of the same document.
"""

from __future__ import annotations

import hashlib

DIGEST_BYTES = 8


def compute_hash(text: str) -> int:
    """
    64-bit digest of ``text``.

    BLAKE2b truncated to 8 bytes, read little-endian, so the value fits
    an unsigned 64-bit integer and is stable across runs and platforms.
    """
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=DIGEST_BYTES).digest()
    return int.from_bytes(digest, "little")
