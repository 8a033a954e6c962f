#!/usr/bin/env python3
"""
test_vdf_parser.py - Test suite for the binary KeyValues decoder/encoder

Tests:
- Decoding of every value type from hand-built bytes
- Encode -> decode round trip (order, uint64 above the signed range)
- Permissive handling of truncated streams and unknown tags
- Single-precision float text formatting
"""

import struct
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from statsgen.vdf import (
    DecodedValue,
    DecodeStats,
    ValueType,
    binary_dumps,
    binary_loads,
    format_float32,
    tree_to_python,
)


def record(tag: int, key: str, payload: bytes = b"") -> bytes:
    return bytes([tag]) + key.encode("utf-8") + b"\x00" + payload


class TestDecode(unittest.TestCase):
    """Decoding of hand-built buffers."""

    def test_all_value_types(self):
        data = (
            record(0x00, "480")
            + record(0x01, "name", "Spacewaré".encode("utf-8") + b"\x00")
            + record(0x02, "i32", struct.pack("<i", -5))
            + record(0x03, "f32", struct.pack("<f", 1.5))
            + record(0x07, "i64", struct.pack("<q", -(1 << 40)))
            + record(0x0A, "u64", struct.pack("<Q", (1 << 64) - 1))
            + b"\x08"
            + b"\x08"
        )
        tree = binary_loads(data)

        self.assertEqual(list(tree), ["480"])
        app = tree["480"]
        self.assertTrue(app.is_map)
        self.assertEqual(app.get("name"), DecodedValue.string("Spacewaré"))
        self.assertEqual(app.get("i32").type, ValueType.INT32)
        self.assertEqual(app.get("i32").value, -5)
        self.assertEqual(app.get("f32").type, ValueType.FLOAT32)
        self.assertEqual(float(app.get("f32").value), 1.5)
        self.assertEqual(app.get("i64").value, -(1 << 40))
        self.assertEqual(app.get("u64").type, ValueType.UINT64)
        self.assertEqual(app.get("u64").value, (1 << 64) - 1)

    def test_empty_buffer(self):
        stats = DecodeStats()
        self.assertEqual(binary_loads(b"", stats), {})
        self.assertTrue(stats.clean)

    def test_end_tag_stops_root(self):
        data = record(0x01, "a", b"x\x00") + b"\x08" + record(0x01, "b", b"y\x00")
        tree = binary_loads(data)
        self.assertEqual(tree_to_python(tree), {"a": "x"})

    def test_duplicate_key_overwrites_in_place(self):
        data = (
            record(0x01, "a", b"1\x00")
            + record(0x01, "b", b"2\x00")
            + record(0x01, "a", b"3\x00")
            + b"\x08"
        )
        tree = binary_loads(data)
        self.assertEqual(list(tree), ["a", "b"])
        self.assertEqual(tree["a"].value, "3")


class TestPermissiveDecode(unittest.TestCase):
    """Truncation and unknown tags end the current level silently."""

    def test_truncated_fixed_width_value(self):
        data = record(0x01, "a", b"x\x00") + record(0x02, "count", b"\x01\x00")
        stats = DecodeStats()
        tree = binary_loads(data, stats)

        self.assertEqual(tree_to_python(tree), {"a": "x"})
        self.assertEqual(stats.premature_terminations, 1)
        self.assertEqual(stats.unknown_tags, 0)
        self.assertFalse(stats.clean)

    def test_unterminated_key(self):
        stats = DecodeStats()
        tree = binary_loads(b"\x01abc", stats)
        self.assertEqual(tree, {})
        self.assertEqual(stats.premature_terminations, 1)

    def test_unterminated_string_value(self):
        stats = DecodeStats()
        tree = binary_loads(record(0x01, "key", b"never ends"), stats)
        self.assertEqual(tree, {})
        self.assertEqual(stats.premature_terminations, 1)

    def test_truncated_nested_map_keeps_partial(self):
        data = record(0x00, "outer") + record(0x01, "kept", b"v\x00") + record(0x07, "cut", b"\x00" * 3)
        stats = DecodeStats()
        tree = binary_loads(data, stats)

        self.assertEqual(tree_to_python(tree), {"outer": {"kept": "v"}})
        self.assertEqual(stats.premature_terminations, 1)

    def test_nested_map_missing_end_is_counted(self):
        stats = DecodeStats()
        tree = binary_loads(record(0x00, "outer") + record(0x01, "a", b"x\x00"), stats)

        self.assertEqual(tree_to_python(tree), {"outer": {"a": "x"}})
        self.assertEqual(stats.premature_terminations, 1)
        self.assertEqual(stats.unknown_tags, 0)

    def test_root_may_end_with_buffer(self):
        stats = DecodeStats()
        binary_loads(record(0x01, "a", b"x\x00"), stats)
        self.assertTrue(stats.clean)

    def test_unknown_tag(self):
        data = record(0x01, "a", b"x\x00") + record(0x05, "b", b"y\x00") + record(0x01, "c", b"z\x00")
        stats = DecodeStats()
        tree = binary_loads(data, stats)

        self.assertEqual(tree_to_python(tree), {"a": "x"})
        self.assertEqual(stats.unknown_tags, 1)
        self.assertEqual(stats.premature_terminations, 1)

    def test_never_raises_on_garbage(self):
        for blob in (b"\xff", b"\x00", b"\x00abc\x00\x02k\x00", bytes(range(256))):
            self.assertIsInstance(binary_loads(blob), dict)


class TestRoundTrip(unittest.TestCase):
    """binary_dumps is the inverse of binary_loads."""

    def test_round_trip_preserves_values_and_order(self):
        tree = {
            "zeta": "last-alpha-first",
            "alpha": {
                "small": 7,
                "negative": -(1 << 31),
                "wide": 1 << 40,
                "huge": (1 << 63) + 5,
                "max": (1 << 64) - 1,
                "ratio": 0.25,
                "nested": {"b": "2", "a": "1"},
            },
            "explicit64": DecodedValue.int64(3),
        }
        decoded = binary_loads(binary_dumps(tree))

        self.assertEqual(list(decoded), ["zeta", "alpha", "explicit64"])
        alpha = decoded["alpha"]
        self.assertEqual([k for k, _ in alpha.items()],
                         ["small", "negative", "wide", "huge", "max", "ratio", "nested"])
        self.assertEqual(alpha.get("small").type, ValueType.INT32)
        self.assertEqual(alpha.get("wide").type, ValueType.INT64)
        self.assertEqual(alpha.get("huge").type, ValueType.UINT64)
        self.assertEqual(alpha.get("huge").value, (1 << 63) + 5)
        self.assertEqual(alpha.get("max").value, (1 << 64) - 1)
        self.assertEqual(decoded["explicit64"].type, ValueType.INT64)
        self.assertEqual(
            tree_to_python(decoded),
            {
                "zeta": "last-alpha-first",
                "alpha": {
                    "small": 7,
                    "negative": -(1 << 31),
                    "wide": 1 << 40,
                    "huge": (1 << 63) + 5,
                    "max": (1 << 64) - 1,
                    "ratio": 0.25,
                    "nested": {"b": "2", "a": "1"},
                },
                "explicit64": 3,
            },
        )

    def test_dumps_bytes_layout(self):
        self.assertEqual(
            binary_dumps({"a": {"b": "c"}}),
            b"\x00a\x00" + b"\x01b\x00c\x00" + b"\x08" + b"\x08",
        )

    def test_dumps_rejects_nul_and_unknown_types(self):
        with self.assertRaises(ValueError):
            binary_dumps({"a": "bad\x00value"})
        with self.assertRaises(TypeError):
            binary_dumps({"a": [1, 2]})


class TestValueText(unittest.TestCase):
    """Text conversion of decoded scalars."""

    def test_format_float32(self):
        self.assertEqual(format_float32(3.0), "3.0")
        self.assertEqual(format_float32(0.1), "0.1")
        self.assertEqual(format_float32(100), "100.0")
        self.assertEqual(format_float32(-2.5), "-2.5")
        self.assertEqual(format_float32(0.0), "0.0")
        self.assertEqual(format_float32(1e10), "1.0E10")
        self.assertEqual(format_float32(12345678.0), "1.2345678E7")
        self.assertEqual(format_float32(1.5e-5), "1.5E-5")
        self.assertEqual(format_float32(float("inf")), "Infinity")
        self.assertEqual(format_float32(float("nan")), "NaN")

    def test_to_text(self):
        self.assertEqual(DecodedValue.int32(4).to_text(), "4")
        self.assertEqual(DecodedValue.float32(2.0).to_text(), "2.0")
        self.assertEqual(DecodedValue.uint64((1 << 64) - 1).to_text(), str((1 << 64) - 1))
        self.assertEqual(DecodedValue.string("x").to_text(), "x")

    def test_scalar_get_and_items(self):
        scalar = DecodedValue.string("x")
        self.assertIsNone(scalar.get("anything"))
        self.assertEqual(list(scalar.items()), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
