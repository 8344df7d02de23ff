"""Split a chunk stream into lines.

Chunks may end in the middle of a line (or, for bytes, in the middle of a
multibyte UTF-8 character). ``LineSplitter`` keeps the unterminated tail
between calls so that only whole lines reach the record decoder.
"""
from __future__ import annotations

import codecs
from typing import List, Union

from .errors import SourceError

Chunk = Union[bytes, bytearray, memoryview, str]


class LineSplitter:
    """Buffer partial lines across chunk boundaries."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)("strict")
        self._tail = ""

    @property
    def tail(self) -> str:
        return self._tail

    def _decode(self, chunk: Chunk, final: bool = False) -> str:
        if isinstance(chunk, str):
            return chunk
        try:
            return self._decoder.decode(bytes(chunk), final=final)
        except UnicodeDecodeError as exc:
            raise SourceError(f"chunk is not valid {self.encoding}: {exc}") from exc

    def feed(self, chunk: Chunk) -> List[str]:
        """Return the lines completed by ``chunk``, without line terminators."""
        text = self._tail + self._decode(chunk)
        parts = text.split("\n")
        self._tail = parts.pop()
        return [_strip_cr(p) for p in parts]

    def flush(self) -> List[str]:
        """Return the unterminated last line, if any, and reset."""
        text = self._tail + self._decode(b"", final=True)
        self._tail = ""
        if not text:
            return []
        return [_strip_cr(text)]


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def split_lines(chunks) -> List[str]:
    """Split a finite sequence of chunks into lines."""
    splitter = LineSplitter()
    out: List[str] = []
    for chunk in chunks:
        out.extend(splitter.feed(chunk))
    out.extend(splitter.flush())
    return out
