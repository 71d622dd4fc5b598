"""Schematic decode error codes and exception class.

Every failure is terminal for the decode call: there is no partial
result and no resynchronisation.  Callers branch on ``.code``.
"""

from __future__ import annotations

from typing import Optional

# ── Error codes ───────────────────────────────────────────────

ERR_UNEXPECTED_EOF: str = "ERR_UNEXPECTED_EOF"      # ran out of bytes mid-field
ERR_INVALID_ENCODING: str = "ERR_INVALID_ENCODING"  # string bytes not UTF-8
ERR_CORRUPT_STREAM: str = "ERR_CORRUPT_STREAM"      # bad deflate bitstream


class SchematicError(Exception):
    """Exception for schematic decode errors.

    The `.code` attribute is one of the ERR_* strings above.  `.offset`
    is the position in the decompressed body where the failing read
    started, or None when the failure is not tied to a body position.
    """

    def __init__(self, code: str, msg: str = "", offset: Optional[int] = None) -> None:
        super().__init__(msg or code)
        self.code = code
        self.offset = offset


def unexpected_eof(msg: str, offset: Optional[int] = None) -> SchematicError:
    return SchematicError(ERR_UNEXPECTED_EOF, msg, offset)


def invalid_encoding(msg: str, offset: Optional[int] = None) -> SchematicError:
    return SchematicError(ERR_INVALID_ENCODING, msg, offset)


def corrupt_stream(msg: str) -> SchematicError:
    return SchematicError(ERR_CORRUPT_STREAM, msg)
