"""Incremental inflater for the compressed schematic body.

The body is fed in whatever chunk sizes the file-read loop produces.  All
decompressor state (sliding window, pending bits, current block and its
Huffman tables) lives in the wrapped zlib object between calls, so a
symbol split across two chunks is decoded once the second chunk arrives.
"""

from __future__ import annotations

import zlib

from ._constants import FORMAT_RAW, FORMAT_ZLIB, INFLATE_FORMATS
from ._errors import corrupt_stream

# wbits per wire format.  Negative wbits selects a bare deflate stream.
_WBITS = {
    FORMAT_RAW: -zlib.MAX_WBITS,
    FORMAT_ZLIB: zlib.MAX_WBITS,
}


class StreamInflater:
    """Chunk-fed decompressor.

    `feed()` returns only the bytes produced by that call.  Once the
    end-of-stream marker has been decoded `finished` is True and any
    further input is collected in `unused_data` instead of being inflated.
    """

    def __init__(self, stream_format: str = FORMAT_RAW) -> None:
        if stream_format not in INFLATE_FORMATS:
            raise ValueError("unknown stream format {!r}; expected one of {}".format(
                stream_format, ", ".join(INFLATE_FORMATS)))
        self.format = stream_format
        self._obj = zlib.decompressobj(_WBITS[stream_format])
        self._unused = b""
        self.total_in = 0
        self.total_out = 0

    @property
    def finished(self) -> bool:
        return self._obj.eof

    @property
    def unused_data(self) -> bytes:
        return self._unused

    def feed(self, chunk: bytes) -> bytes:
        if not chunk:
            return b""
        if self._obj.eof:
            self._unused += bytes(chunk)
            return b""
        try:
            out = self._obj.decompress(chunk)
        except zlib.error as e:
            raise corrupt_stream(
                "corrupt {} stream after {} input byte(s): {}".format(
                    self.format, self.total_in, e)) from e
        tail = self._obj.unused_data
        self.total_in += len(chunk) - len(tail)
        if tail:
            self._unused += tail
        self.total_out += len(out)
        return out
