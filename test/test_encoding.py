import struct
import unittest
import numpy as np
from minwise.encoding import (
    int_to_bytes,
    parse_int_literal,
    string_int_to_bytes,
    string_to_bytes,
    to_bytes,
)


class TestEncoding(unittest.TestCase):

    def test_bytes_pass_through(self):
        self.assertEqual(to_bytes(b"abc"), b"abc")
        self.assertEqual(to_bytes(bytearray(b"abc")), b"abc")
        self.assertEqual(to_bytes(memoryview(b"abc")), b"abc")
        self.assertEqual(to_bytes(b""), b"")

    def test_integers(self):
        self.assertEqual(to_bytes(1), b"\x01" + bytes(7))
        self.assertEqual(to_bytes(0x0102), b"\x02\x01" + bytes(6))
        self.assertEqual(to_bytes(-1), b"\xff" * 8)
        self.assertEqual(to_bytes((1 << 64) - 1), b"\xff" * 8)
        self.assertEqual(to_bytes(-2), struct.pack("<q", -2))

    def test_numpy_integers(self):
        self.assertEqual(to_bytes(np.uint32(7)), to_bytes(7))
        self.assertEqual(to_bytes(np.int16(-1)), to_bytes(-1))
        self.assertEqual(to_bytes(np.uint64((1 << 64) - 1)), b"\xff" * 8)

    def test_integer_overflow(self):
        self.assertRaises(OverflowError, to_bytes, 1 << 64)
        self.assertRaises(OverflowError, to_bytes, -(1 << 63) - 1)
        self.assertRaises(OverflowError, int_to_bytes, 1 << 70)

    def test_integer_strings(self):
        self.assertEqual(to_bytes("42"), to_bytes(42))
        self.assertEqual(to_bytes("0"), to_bytes(0))
        self.assertEqual(to_bytes("0x2a"), to_bytes(42))
        self.assertEqual(to_bytes("0o52"), to_bytes(42))
        self.assertEqual(to_bytes("052"), to_bytes(42))
        self.assertEqual(to_bytes("0b101010"), to_bytes(42))
        self.assertEqual(to_bytes("18446744073709551615"), b"\xff" * 8)

    def test_non_integer_strings(self):
        self.assertEqual(to_bytes("abc"), b"abc")
        self.assertEqual(to_bytes(""), b"")
        self.assertEqual(to_bytes("-5"), b"-5")
        self.assertEqual(to_bytes(" 42"), b" 42")
        self.assertEqual(to_bytes("08"), b"08")
        self.assertEqual(to_bytes("4.2"), b"4.2")
        self.assertEqual(to_bytes("18446744073709551616"),
                         b"18446744073709551616")
        self.assertEqual(to_bytes("café"), "café".encode("utf-8"))

    def test_parse_int_literal(self):
        self.assertEqual(parse_int_literal("1_000"), 1000)
        self.assertEqual(parse_int_literal("0xFF"), 255)
        self.assertIsNone(parse_int_literal("+1"))
        self.assertIsNone(parse_int_literal("0x"))
        self.assertIsNone(parse_int_literal("12a"))

    def test_string_helpers(self):
        self.assertEqual(string_to_bytes("42"), b"42")
        self.assertEqual(string_int_to_bytes("42"), to_bytes(42))
        self.assertEqual(string_int_to_bytes("x42"), b"x42")

    def test_unsupported_strict(self):
        self.assertRaises(TypeError, to_bytes, 1.5)
        self.assertRaises(TypeError, to_bytes, True)
        self.assertRaises(TypeError, to_bytes, None)
        self.assertRaises(TypeError, to_bytes, (1, 2))

    def test_unsupported_lenient(self):
        with self.assertLogs("minwise.encoding", level="WARNING") as cm:
            b = to_bytes(1.5, strict=False)
        self.assertEqual(b, bytes(8))
        self.assertIn("float", cm.output[0])
        with self.assertLogs("minwise.encoding", level="WARNING"):
            self.assertEqual(to_bytes(None, strict=False), bytes(8))


if __name__ == "__main__":
    unittest.main()
