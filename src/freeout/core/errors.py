"""
Error types raised by the outline engine and its readers.

None of these are retried internally; a failure means the outline for
that document is discarded.
"""

from __future__ import annotations

from typing import Optional


class FreeoutError(Exception):
    """Base class for all engine errors."""


class FormatError(FreeoutError):
    """Raised when a reader cannot parse its source."""

    def __init__(self, reader: str, message: str):
        super().__init__(f"{reader}: {message}")
        self.reader = reader
        self.diagnostic = message


class StructuralError(FreeoutError):
    """
    Raised when the block set breaks a tree invariant.

    Id gaps and dangling child references both indicate a reader bug or
    a caller that edited the blocks directly.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[int] = None,
        found: Optional[int] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.found = found


class MissingContentError(FreeoutError, LookupError):
    """Raised when text is requested for a block that is missing or unresolved."""

    def __init__(self, block_id: int, reason: str):
        super().__init__(f"No content for block {block_id}: {reason}")
        self.block_id = block_id
        self.reason = reason
