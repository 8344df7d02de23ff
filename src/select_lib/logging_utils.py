import logging
import os
import sys
from typing import Union


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: Union[str, int, None] = None) -> int:
    """Configure stderr logging for the ``select-records`` command.

    Parameters
    ----------
    level: str | int | None
        Desired log level (e.g., "DEBUG", "INFO"). If ``None``, the
        ``LOG_LEVEL`` environment variable is consulted. Unknown names fall
        back to ``INFO``.

    Returns
    -------
    int
        The numeric level that was applied.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    # stdout carries the records, so logs go to stderr
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    return level
