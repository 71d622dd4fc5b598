"""Unit tests for ByteCursor — big-endian reads and bounds checks."""

from __future__ import annotations

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from msch import (
    ByteCursor,
    ERR_INVALID_ENCODING,
    ERR_UNEXPECTED_EOF,
    SchematicError,
)


# ── Fixed-width integers ──────────────────────────────────────

class TestIntegers(unittest.TestCase):
    def test_u8(self):
        cur = ByteCursor(b"\x00\x7f\xff")
        self.assertEqual([cur.read_u8(), cur.read_u8(), cur.read_u8()], [0, 127, 255])
        self.assertTrue(cur.at_end())

    def test_u16_is_big_endian(self):
        cur = ByteCursor(b"\x01\x02")
        self.assertEqual(cur.read_u16be(), 0x0102)
        self.assertEqual(cur.offset, 2)

    def test_u16_is_unsigned(self):
        self.assertEqual(ByteCursor(b"\xff\xff").read_u16be(), 65535)

    def test_mixed_sequence_advances(self):
        cur = ByteCursor(b"\x0a\x00\x05\x07")
        self.assertEqual(cur.read_u8(), 10)
        self.assertEqual(cur.read_u16be(), 5)
        self.assertEqual(cur.remaining, 1)
        self.assertEqual(cur.read_u8(), 7)
        self.assertEqual(cur.remaining, 0)


# ── Bounds checks ─────────────────────────────────────────────

class TestShortReads(unittest.TestCase):
    def test_u8_on_empty(self):
        with self.assertRaises(SchematicError) as ctx:
            ByteCursor(b"").read_u8()
        self.assertEqual(ctx.exception.code, ERR_UNEXPECTED_EOF)
        self.assertEqual(ctx.exception.offset, 0)

    def test_u16_with_one_byte_left(self):
        cur = ByteCursor(b"\x01\x02\x03")
        cur.read_u16be()
        with self.assertRaises(SchematicError) as ctx:
            cur.read_u16be()
        self.assertEqual(ctx.exception.code, ERR_UNEXPECTED_EOF)
        self.assertEqual(ctx.exception.offset, 2)

    def test_failed_read_does_not_advance(self):
        cur = ByteCursor(b"\x01")
        with self.assertRaises(SchematicError):
            cur.read_u16be()
        self.assertEqual(cur.offset, 0)
        self.assertEqual(cur.read_u8(), 1)

    def test_read_bytes_exact(self):
        cur = ByteCursor(b"abcdef")
        self.assertEqual(cur.read_bytes(4), b"abcd")
        with self.assertRaises(SchematicError) as ctx:
            cur.read_bytes(3)
        self.assertEqual(ctx.exception.code, ERR_UNEXPECTED_EOF)
        self.assertEqual(cur.read_bytes(2), b"ef")

    def test_read_bytes_negative(self):
        with self.assertRaises(ValueError):
            ByteCursor(b"abc").read_bytes(-1)


# ── Length-prefixed strings ───────────────────────────────────

class TestStrings(unittest.TestCase):
    def test_ascii(self):
        cur = ByteCursor(b"\x00\x04name")
        self.assertEqual(cur.read_string(), "name")
        self.assertTrue(cur.at_end())

    def test_empty_string(self):
        cur = ByteCursor(b"\x00\x00\x2a")
        self.assertEqual(cur.read_string(), "")
        self.assertEqual(cur.read_u8(), 42)

    def test_multibyte_utf8(self):
        raw = "café ☃".encode("utf-8")
        cur = ByteCursor(len(raw).to_bytes(2, "big") + raw)
        self.assertEqual(cur.read_string(), "café ☃")

    def test_length_prefix_is_big_endian(self):
        payload = b"x" * 0x0102
        cur = ByteCursor(b"\x01\x02" + payload)
        self.assertEqual(len(cur.read_string()), 0x0102)

    def test_truncated_prefix(self):
        with self.assertRaises(SchematicError) as ctx:
            ByteCursor(b"\x00").read_string()
        self.assertEqual(ctx.exception.code, ERR_UNEXPECTED_EOF)

    def test_truncated_payload_reports_prefix_offset(self):
        cur = ByteCursor(b"\x07\x00\x05ab")
        cur.read_u8()
        with self.assertRaises(SchematicError) as ctx:
            cur.read_string()
        self.assertEqual(ctx.exception.code, ERR_UNEXPECTED_EOF)
        self.assertEqual(ctx.exception.offset, 1)
        self.assertEqual(cur.offset, 1)

    def test_lone_continuation_byte(self):
        with self.assertRaises(SchematicError) as ctx:
            ByteCursor(b"\x00\x01\x80").read_string()
        self.assertEqual(ctx.exception.code, ERR_INVALID_ENCODING)
        self.assertEqual(ctx.exception.offset, 0)

    def test_truncated_multibyte_sequence(self):
        # First two bytes of a three-byte sequence.
        with self.assertRaises(SchematicError) as ctx:
            ByteCursor(b"\x00\x02\xe2\x98").read_string()
        self.assertEqual(ctx.exception.code, ERR_INVALID_ENCODING)

    def test_utf8_surrogate_rejected(self):
        # CESU-style encoded surrogate U+D800 is not valid UTF-8.
        with self.assertRaises(SchematicError) as ctx:
            ByteCursor(b"\x00\x03\xed\xa0\x80").read_string()
        self.assertEqual(ctx.exception.code, ERR_INVALID_ENCODING)


if __name__ == "__main__":
    unittest.main()
