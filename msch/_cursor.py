"""Big-endian positional reader over a decompressed schematic body.

Reads are sequential and bounds-checked.  A read that would run past the
end of the buffer raises ERR_UNEXPECTED_EOF and leaves the position where
it was; callers treat that as fatal anyway, but it keeps `.offset` in the
error pointing at the field that could not be read.
"""

from __future__ import annotations

import struct

from ._errors import invalid_encoding, unexpected_eof

_U16BE = struct.Struct(">H")


class ByteCursor:
    """Forward-only reader with an internal position."""

    def __init__(self, data: bytes) -> None:
        self._buf = memoryview(data)
        self._pos = 0

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._buf)

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n bytes and advance past them."""
        if n < 0:
            raise ValueError("read length must be non-negative")
        if self.remaining < n:
            raise unexpected_eof(
                "need {} byte(s) at offset {}, only {} left".format(
                    n, self._pos, self.remaining),
                self._pos,
            )
        start = self._pos
        self._pos += n
        return self._buf[start:self._pos].tobytes()

    def read_u8(self) -> int:
        if self.remaining < 1:
            raise unexpected_eof("truncated u8 at offset {}".format(self._pos), self._pos)
        val = self._buf[self._pos]
        self._pos += 1
        return val

    def read_u16be(self) -> int:
        if self.remaining < 2:
            raise unexpected_eof("truncated u16 at offset {}".format(self._pos), self._pos)
        val = _U16BE.unpack_from(self._buf, self._pos)[0]
        self._pos += 2
        return val

    def read_string(self) -> str:
        """Read a u16be length followed by that many UTF-8 bytes.

        The position only moves once both the prefix and the payload are
        known to be present, so a short string reports the offset of its
        length prefix.
        """
        start = self._pos
        n = self.read_u16be()
        if self.remaining < n:
            self._pos = start
            raise unexpected_eof(
                "truncated string payload at offset {} (declared {} byte(s), {} left)".format(
                    start, n, self.remaining - 2),
                start,
            )
        raw = self.read_bytes(n)
        try:
            return raw.decode("utf-8", errors="strict")
        except UnicodeDecodeError as e:
            self._pos = start
            raise invalid_encoding(
                "invalid utf-8 in string at offset {}: {}".format(start, e.reason),
                start,
            ) from e
