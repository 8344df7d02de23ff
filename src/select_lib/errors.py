"""Exceptions raised while turning a chunk stream into records."""
from __future__ import annotations


class RecordStreamError(Exception):
    """Base exception for record stream failures."""


class StructuralDecodeError(RecordStreamError):
    """Raised when text handed to the record parser is not JSON at all."""


class ShapeMismatchError(RecordStreamError):
    """Raised when a JSON value does not have the shape of a ``Record``."""


class IncompleteTrailingRecordError(RecordStreamError):
    """Raised when the stream ends while a record is still being assembled."""

    def __init__(self, pending: str) -> None:
        preview = pending if len(pending) <= 80 else pending[:77] + "..."
        super().__init__(
            f"stream ended with an incomplete record ({len(pending)} chars pending): {preview!r}"
        )
        self.pending = pending


class SourceError(RecordStreamError):
    """Raised when the chunk source fails or delivers undecodable bytes."""


__all__ = [
    "RecordStreamError",
    "StructuralDecodeError",
    "ShapeMismatchError",
    "IncompleteTrailingRecordError",
    "SourceError",
]
