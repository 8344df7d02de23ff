"""Command-line interface: ``select-records``.

Runs an S3 Select query against a JSON Lines object (or reads a local
JSON Lines file with ``--input``), reassembles the records and prints them as
JSON lines on stdout.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, Iterator, List

import boto3
from botocore.exceptions import BotoCoreError

from .config import ConfigError, SelectConfig, load_config
from .drain import iter_records
from .errors import RecordStreamError, SourceError
from .export import records_to_jsonl, write_records_csv
from .logging_utils import setup_logging
from .models import Record
from .source import select_object_chunks


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def _read_chunks(fh: BinaryIO, size: int) -> Iterator[bytes]:
    while True:
        chunk = fh.read(size)
        if not chunk:
            return
        yield chunk


def _local_chunks(path: str, size: int) -> Iterator[bytes]:
    if path == "-":
        yield from _read_chunks(sys.stdin.buffer, size)
        return
    with open(path, "rb") as fh:
        yield from _read_chunks(fh, size)


def _s3_chunks(cfg: SelectConfig) -> Iterator[bytes]:
    try:
        client = boto3.client("s3")  # region and credentials from the environment
    except BotoCoreError as exc:
        raise SourceError(f"cannot create S3 client: {exc}") from exc
    yield from select_object_chunks(client, cfg.bucket, cfg.key, cfg.expression)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="select-records",
        description="Query a JSON Lines object with S3 Select and print the decoded records.",
    )
    p.add_argument("--bucket", help="Bucket name (default: $BUCKET_NAME)")
    p.add_argument("--key", help="Object key (default: $OBJECT_KEY)")
    p.add_argument("--expression", help="S3 Select SQL expression")
    p.add_argument("--input", metavar="PATH", help="Decode a local JSON Lines file ('-' for stdin) instead of S3; strict and log level still come from the config")
    p.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Read size for --input")
    p.add_argument("--strict", action="store_true", default=None, help="Reject fields other than id and name")
    p.add_argument("--csv", metavar="PATH", help="Also write the records to a CSV file")
    p.add_argument("--config", metavar="PATH", help="YAML config file")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return p


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.chunk_size <= 0:
        sys.stderr.write("error: --chunk-size must be positive\n")
        return 2

    try:
        cfg = load_config(
            args.config,
            # the local mode does not need an S3 target
            require_target=args.input is None,
            bucket=args.bucket,
            key=args.key,
            expression=args.expression,
            strict=args.strict,
            log_level=args.log_level,
        )
    except ConfigError as ex:
        sys.stderr.write(f"error: {ex}\n")
        return 2
    setup_logging(cfg.log_level)

    if args.input is not None:
        chunks = _local_chunks(args.input, args.chunk_size)
    else:
        chunks = _s3_chunks(cfg)

    records: List[Record] = []
    try:
        for record in iter_records(chunks, strict=cfg.strict):
            records.append(record)
            sys.stdout.write(records_to_jsonl([record]))
        sys.stdout.flush()
        if args.csv:
            path = write_records_csv(records, args.csv)
            logger.info("Wrote %d records to %s", len(records), path)
    except (RecordStreamError, OSError) as ex:
        logger.error("Aborted after %d records: %s", len(records), ex)
        sys.stderr.write(f"error: {ex}\n")
        return 1
    finally:
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
