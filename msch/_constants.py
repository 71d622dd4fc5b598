"""Schematic container constants — header framing, wire sizes, inflate formats.

Layout (big-endian throughout):

    0   4 bytes   magic
    4   3 bytes   version marker
    7   ...       compressed body
"""

from __future__ import annotations

# Magic written by the game.  Decoding accepts any four bytes here; this
# constant only exists so callers can check for themselves.
MAGIC = b"msch"

MAGIC_SIZE: int = 4
VERSION_SIZE: int = 3
HEADER_SIZE: int = MAGIC_SIZE + VERSION_SIZE

# Read size used when streaming the compressed body.
DEFAULT_CHUNK_SIZE: int = 1024

# ── Body field widths ─────────────────────────────────────────
U8_MAX: int = 0xFF
U16_MAX: int = 0xFFFF

# name(u8) + position(u16) + config(u16) + rotation(u8)
RECORD_SIZE: int = 6

# ── Compressed body formats ──────────────────────────────────
# "raw" is a bare deflate bitstream.  "zlib" carries the 2-byte zlib
# header and an Adler-32 trailer.
FORMAT_RAW: str = "raw"
FORMAT_ZLIB: str = "zlib"

INFLATE_FORMATS = (FORMAT_RAW, FORMAT_ZLIB)
