"""Schematic decoder — header framing, streamed inflate, body parse.

Pipeline:

    stream ──> magic (4) ──> version (3) ──> chunks ──> StreamInflater
                                                             │
                       Schematic <── ByteCursor <── bytearray

The body is fully materialised before parsing starts; the format has no
length fields for the compressed data, so the only way to know where the
body ends is to inflate all of it.
"""

from __future__ import annotations

from typing import BinaryIO, List

from ._constants import (
    DEFAULT_CHUNK_SIZE,
    FORMAT_RAW,
    MAGIC_SIZE,
    VERSION_SIZE,
)
from ._cursor import ByteCursor
from ._errors import unexpected_eof
from ._inflate import StreamInflater
from ._model import PlacedBlock, Schematic, Tag


def _read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    """Read n bytes, looping over short reads; EOF first is fatal."""
    parts: List[bytes] = []
    got = 0
    while got < n:
        piece = stream.read(n - got)
        if not piece:
            raise unexpected_eof("file ended inside the {} ({} of {} byte(s))".format(
                what, got, n))
        parts.append(piece)
        got += len(piece)
    return b"".join(parts)


def inflate_body(stream: BinaryIO, *,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 stream_format: str = FORMAT_RAW) -> bytes:
    """Inflate everything left in `stream`, reading `chunk_size` at a time.

    Raises ERR_UNEXPECTED_EOF if input runs out before the compressed
    stream's end marker, ERR_CORRUPT_STREAM on a bad bitstream.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    inflater = StreamInflater(stream_format)
    out = bytearray()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        out += inflater.feed(chunk)
    if not inflater.finished:
        raise unexpected_eof(
            "compressed body ended after {} input byte(s) without an end-of-stream marker".format(
                inflater.total_in))
    return bytes(out)


def parse_body(body: bytes) -> dict:
    """Walk a decompressed body and return the Schematic fields it holds.

    Order is fixed: dimensions, tag table, block-name table, placed
    blocks.  Bytes after the last record are ignored.
    """
    cur = ByteCursor(body)

    width = cur.read_u16be()
    height = cur.read_u16be()

    tag_count = cur.read_u8()
    tags: List[Tag] = []
    for _ in range(tag_count):
        label = cur.read_string()
        content = cur.read_string()
        tags.append(Tag(label, content))

    name_count = cur.read_u8()
    block_names = [cur.read_string() for _ in range(name_count)]

    block_count = cur.read_u8()
    placed: List[PlacedBlock] = []
    for _ in range(block_count):
        name_index = cur.read_u8()
        position = cur.read_u16be()
        config = cur.read_u16be()
        rotation = cur.read_u8()
        placed.append(PlacedBlock(name_index, position, config, rotation))

    return {
        "width": width,
        "height": height,
        "tags": tuple(tags),
        "block_names": tuple(block_names),
        "placed_blocks": tuple(placed),
    }


def decode_stream(stream: BinaryIO, *,
                  chunk_size: int = DEFAULT_CHUNK_SIZE,
                  stream_format: str = FORMAT_RAW) -> Schematic:
    """Decode one schematic from a binary stream positioned at its start.

    The magic is recorded but not checked.  The stream is read to EOF and
    is left open; closing it is the caller's job.
    """
    magic = _read_exact(stream, MAGIC_SIZE, "magic header")
    version = _read_exact(stream, VERSION_SIZE, "version marker")
    body = inflate_body(stream, chunk_size=chunk_size, stream_format=stream_format)
    fields = parse_body(body)
    return Schematic(magic=magic, version=version, **fields)
