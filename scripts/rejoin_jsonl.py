# scripts/rejoin_jsonl.py
# -*- coding: utf-8 -*-
"""
Rewrite a JSON Lines export whose records were broken across lines so that
every record sits on exactly one line.

Usage:
  python scripts/rejoin_jsonl.py INPUT [--out OUTPUT] [--inplace] [--strict]

Writes:
  - INPUT with ".rejoined.jsonl" suffix (unless --out / --inplace)

Fails (exit 1) on a truncated last record or a record without id/name; in
that case nothing is written.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from select_lib.drain import drain
from select_lib.errors import RecordStreamError
from select_lib.export import records_to_jsonl
from select_lib.logging_utils import setup_logging


logger = logging.getLogger("rejoin_jsonl")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("input", type=Path, help="JSON Lines file to repair")
    ap.add_argument("--out", type=Path, help="Destination file")
    ap.add_argument("--inplace", action="store_true", help="Overwrite INPUT")
    ap.add_argument("--strict", action="store_true", help="Reject fields other than id and name")
    args = ap.parse_args()
    setup_logging()

    if not args.input.exists():
        logger.error("Input not found: %s", args.input)
        return 2
    out = args.input if args.inplace else (args.out or args.input.with_suffix(".rejoined.jsonl"))

    raw = args.input.read_bytes()
    try:
        records = drain([raw], strict=args.strict)
    except RecordStreamError as exc:
        logger.error("Cannot rejoin %s: %s", args.input, exc)
        return 1

    out.write_text(records_to_jsonl(records), encoding="utf-8")
    logger.info("Wrote %d records to %s", len(records), out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
