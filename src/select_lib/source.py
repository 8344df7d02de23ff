"""S3 Select chunk source.

Runs a SQL expression against a JSON Lines object with
``select_object_content`` and yields the raw ``Records`` payloads. Payload
boundaries are arbitrary; reassembly is left to :mod:`select_lib.drain`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator

from botocore.exceptions import BotoCoreError, ClientError

from .errors import SourceError


logger = logging.getLogger(__name__)

DEFAULT_EXPRESSION = "SELECT * FROM s3object s WHERE s.name LIKE '%b%'"


def build_select_request(bucket: str, key: str, expression: str = DEFAULT_EXPRESSION) -> Dict[str, Any]:
    """Return keyword arguments for ``client.select_object_content``."""
    return {
        "Bucket": bucket,
        "Key": key,
        "ExpressionType": "SQL",
        "Expression": expression,
        "InputSerialization": {
            "JSON": {"Type": "LINES"},
            "CompressionType": "NONE",
        },
        "OutputSerialization": {
            "JSON": {"RecordDelimiter": "\n"},
        },
    }


def select_object_chunks(
    client,
    bucket: str,
    key: str,
    expression: str = DEFAULT_EXPRESSION,
) -> Iterator[bytes]:
    """Yield the ``Records`` payloads of an S3 Select response in order.

    Raises
    ------
    SourceError
        If the request or the event stream fails, or the stream closes
        without an ``End`` event.
    """
    request = build_select_request(bucket, key, expression)
    logger.info("Selecting from s3://%s/%s", bucket, key)
    try:
        response = client.select_object_content(**request)
    except (ClientError, BotoCoreError) as exc:
        raise SourceError(f"select_object_content failed for s3://{bucket}/{key}: {exc}") from exc

    saw_end = False
    try:
        for event in response["Payload"]:
            if "Records" in event:
                payload = event["Records"].get("Payload") or b""
                if payload:
                    yield payload
            elif "Stats" in event:
                details = event["Stats"].get("Details", {})
                logger.debug(
                    "scanned=%s processed=%s returned=%s",
                    details.get("BytesScanned"),
                    details.get("BytesProcessed"),
                    details.get("BytesReturned"),
                )
            elif "End" in event:
                saw_end = True
    except (ClientError, BotoCoreError) as exc:
        raise SourceError(f"event stream failed for s3://{bucket}/{key}: {exc}") from exc

    if not saw_end:
        raise SourceError(f"event stream for s3://{bucket}/{key} closed before End event")
