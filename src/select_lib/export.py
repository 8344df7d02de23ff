"""Render decoded records for output."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from .models import Record


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Return a DataFrame with ``id`` and ``name`` first, extra fields after.

    Extra columns appear in first-seen order; records lacking a field get an
    empty value.
    """
    rows = [r.to_dict() for r in records]
    columns: List[str] = ["id", "name"]
    for row in rows:
        for k in row:
            if k not in columns:
                columns.append(k)
    return pd.DataFrame(rows, columns=columns)


def write_records_csv(records: Iterable[Record], path: str | Path) -> Path:
    """Write records to ``path`` as UTF-8 CSV, overwriting it."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    records_to_frame(records).to_csv(p, index=False, encoding="utf-8")
    return p


def records_to_jsonl(records: Iterable[Record]) -> str:
    """One compact JSON object per line, newline terminated."""
    return "".join(json.dumps(r.to_dict(), ensure_ascii=False) + "\n" for r in records)
