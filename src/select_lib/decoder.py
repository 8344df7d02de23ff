"""Incremental decoder for JSON Lines records.

S3 Select (and most chunked transports) deliver record text in pieces whose
boundaries have nothing to do with record boundaries. ``IncrementalRecordDecoder``
accumulates pieces until they form a complete JSON value and only then turns
that value into a :class:`~select_lib.models.Record`.

Completeness and shape are checked separately: ``is_well_formed`` answers
"is this some JSON value", ``decode_record`` answers "is it a Record".
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .errors import IncompleteTrailingRecordError, StructuralDecodeError
from .models import Record


logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _loads(text: str) -> Any:
    # Strict JSON: NaN / Infinity / -Infinity are not accepted.
    return json.loads(text, parse_constant=_reject_constant)


def is_well_formed(text: str) -> bool:
    """Return ``True`` if ``text`` parses as any JSON value."""
    try:
        _loads(text)
    except ValueError:
        return False
    return True


def decode_record(text: str, *, strict: bool = False) -> Record:
    """Parse ``text`` and validate it as a ``Record``.

    Raises
    ------
    StructuralDecodeError
        If ``text`` is not valid JSON.
    ShapeMismatchError
        If the JSON value is not a valid ``Record``.
    """
    try:
        value = _loads(text)
    except ValueError as exc:
        raise StructuralDecodeError(f"invalid JSON record text: {exc}") from exc
    return Record.from_value(value, strict=strict)


class IncrementalRecordDecoder:
    """Reassemble records from line fragments, one ``feed`` call per line.

    Usage:
        decoder = IncrementalRecordDecoder()
        for line in lines:
            record = decoder.feed(line)
            if record is not None:
                ...
        decoder.finish()
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text accumulated for the record currently in progress."""
        return self._pending

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def feed(self, line: str) -> Optional[Record]:
        """Consume one line; return a ``Record`` once one is complete.

        Returns ``None`` while a record is still split across lines.
        Raises ``ShapeMismatchError`` (or ``StructuralDecodeError``) when a
        complete JSON value is not a valid record.
        """
        if not self._pending and is_well_formed(line):
            return decode_record(line, strict=self.strict)

        self._pending += line
        if not is_well_formed(self._pending):
            return None

        text, self._pending = self._pending, ""
        logger.debug("Reassembled record from %d buffered chars", len(text))
        return decode_record(text, strict=self.strict)

    def finish(self) -> None:
        """Signal end of input.

        Raises ``IncompleteTrailingRecordError`` if the buffer is not empty.
        """
        if self.has_pending:
            raise IncompleteTrailingRecordError(self._pending)


__all__ = [
    "IncrementalRecordDecoder",
    "is_well_formed",
    "decode_record",
]
