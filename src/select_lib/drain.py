"""Drive a chunk source through the line splitter and record decoder."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from .decoder import IncrementalRecordDecoder
from .lines import Chunk, LineSplitter
from .models import Record


logger = logging.getLogger(__name__)


def iter_records(
    chunks: Iterable[Chunk],
    *,
    decoder: Optional[IncrementalRecordDecoder] = None,
    strict: bool = False,
) -> Iterator[Record]:
    """Yield records from ``chunks`` in the order they complete.

    Chunks are consumed strictly one at a time. Any exception raised by the
    chunk source propagates unchanged; decode errors stop consumption. At the
    end of the stream an ``IncompleteTrailingRecordError`` is raised if a
    record was left unfinished.
    """
    if decoder is None:
        decoder = IncrementalRecordDecoder(strict=strict)
    splitter = LineSplitter()
    n_chunks = n_records = 0

    for chunk in chunks:
        n_chunks += 1
        lines = splitter.feed(chunk)
        emitted = 0
        for line in lines:
            record = decoder.feed(line)
            if record is not None:
                emitted += 1
                yield record
        n_records += emitted
        logger.debug(
            "chunk %d: size %d, %d lines, %d records, %d chars pending",
            n_chunks,
            len(chunk),
            len(lines),
            emitted,
            len(decoder.pending),
        )

    for line in splitter.flush():
        record = decoder.feed(line)
        if record is not None:
            n_records += 1
            yield record

    decoder.finish()
    logger.info("Decoded %d records from %d chunks", n_records, n_chunks)


def drain(chunks: Iterable[Chunk], **kwargs) -> List[Record]:
    """Collect every record from ``chunks`` into a list.

    Use :func:`iter_records` directly to keep the records received before an
    error.
    """
    return list(iter_records(chunks, **kwargs))
