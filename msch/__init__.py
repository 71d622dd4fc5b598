"""msch — decoder for binary schematic (blueprint) containers.

A schematic file is a 7-byte header (4-byte magic, 3-byte version)
followed by a deflate-compressed body holding the grid size, a tag
table, a block-name table and the placed-block records.

Quick start:
    >>> from msch import load
    >>> schem = load("Schematic.msch")
    >>> schem.width, schem.height
    (10, 5)
    >>> schem.tag("name")
    'value'

Decoding is read-only and all-or-nothing: it either returns a complete
Schematic or raises SchematicError with one of the ERR_* codes.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Union

from ._constants import (
    DEFAULT_CHUNK_SIZE,
    FORMAT_RAW,
    FORMAT_ZLIB,
    HEADER_SIZE,
    MAGIC,
)
from ._cursor import ByteCursor
from ._decoder import decode_stream, inflate_body, parse_body
from ._errors import (
    ERR_CORRUPT_STREAM,
    ERR_INVALID_ENCODING,
    ERR_UNEXPECTED_EOF,
    SchematicError,
)
from ._inflate import StreamInflater
from ._model import PlacedBlock, Schematic, Tag

__version__ = "0.1.0"

__all__ = [
    # Public API functions
    "decode_bytes",
    "decode_stream",
    "load",
    # Building blocks
    "ByteCursor",
    "StreamInflater",
    "inflate_body",
    "parse_body",
    # Data model
    "Schematic",
    "Tag",
    "PlacedBlock",
    # Exception
    "SchematicError",
    # Error codes
    "ERR_UNEXPECTED_EOF",
    "ERR_INVALID_ENCODING",
    "ERR_CORRUPT_STREAM",
    # Constants
    "MAGIC",
    "HEADER_SIZE",
    "DEFAULT_CHUNK_SIZE",
    "FORMAT_RAW",
    "FORMAT_ZLIB",
]

logger = logging.getLogger(__name__)


# ── Core API ──────────────────────────────────────────────────

def decode_bytes(data: bytes, *,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 stream_format: str = FORMAT_RAW) -> Schematic:
    """Decode a schematic held entirely in memory.

    The body is still inflated in `chunk_size` pieces, so results match
    decoding the same bytes from a file.
    """
    return decode_stream(io.BytesIO(data), chunk_size=chunk_size,
                         stream_format=stream_format)


def load(path: Union[str, "os.PathLike[str]"], *,
         chunk_size: int = DEFAULT_CHUNK_SIZE,
         stream_format: str = FORMAT_RAW) -> Schematic:
    """Open `path`, decode it, and close it again on every exit path."""
    with open(path, "rb") as f:
        schem = decode_stream(f, chunk_size=chunk_size, stream_format=stream_format)
    logger.debug("decoded %s: %dx%d, %d tag(s), %d block name(s), %d placed block(s)",
                 path, schem.width, schem.height, schem.tag_count,
                 schem.block_name_count, schem.placed_block_count)
    return schem
