"""Reassemble JSON Lines records from chunked S3 Select output."""
from .decoder import IncrementalRecordDecoder, decode_record, is_well_formed
from .drain import drain, iter_records
from .errors import (
    IncompleteTrailingRecordError,
    RecordStreamError,
    ShapeMismatchError,
    SourceError,
    StructuralDecodeError,
)
from .lines import LineSplitter
from .models import Record

__all__ = [
    "IncrementalRecordDecoder",
    "decode_record",
    "is_well_formed",
    "drain",
    "iter_records",
    "LineSplitter",
    "Record",
    "RecordStreamError",
    "StructuralDecodeError",
    "ShapeMismatchError",
    "IncompleteTrailingRecordError",
    "SourceError",
]
