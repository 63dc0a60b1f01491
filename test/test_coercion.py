"""
Coercion module behavioral tests (numeric widths, floats, lists).

Conventions
- Test method names follow CamelCase per project convention.
"""
import struct
import unittest
from unittest import TestCase

from argot.coercion import coerce
from argot.kinds import Kind, ValueKind, STRING


def signed(width):
    return ValueKind(Kind.SIGNED, width)


def unsigned(width):
    return ValueKind(Kind.UNSIGNED, width)


class TestIntegers(TestCase):

    def testBoundsFit(self):
        cases = (
            (signed(8), "127", 127),
            (signed(8), "-128", -128),
            (signed(16), "32767", 32767),
            (signed(32), "2147483647", 2147483647),
            (signed(64), "9223372036854775807", 9223372036854775807),
            (signed(64), "-42", -42),
            (signed(64), "+42", 42),
            (unsigned(8), "255", 255),
            (unsigned(16), "65535", 65535),
            (unsigned(32), "4294967295", 4294967295),
            (unsigned(64), "18446744073709551615", 18446744073709551615),
        )
        for kind, text, expected in cases:
            with self.subTest(kind=kind, text=text):
                self.assertEqual(coerce(kind, text), expected)

    def testOverflowRejected(self):
        cases = (
            (signed(8), "128"),
            (signed(8), "-129"),
            (signed(16), "32768"),
            (signed(32), "2147483648"),
            (signed(64), "9223372036854775808"),
            (unsigned(8), "256"),
            (unsigned(64), "18446744073709551616"),
        )
        for kind, text in cases:
            with self.subTest(kind=kind, text=text):
                with self.assertRaises(ValueError):
                    coerce(kind, text)

    def testNonNumericRejected(self):
        for text in ("BAD", "", "1.5", "0x10", "1_000", " 1", "١٢"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    coerce(signed(64), text)

    def testUnsignedTakesNoSign(self):
        for text in ("-1", "+1"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    coerce(unsigned(64), text)


class TestFloats(TestCase):

    def testDoublePrecision(self):
        self.assertEqual(coerce(ValueKind(Kind.FLOAT, 64), "123456789.123456789"), 123456789.123456789)

    def testSinglePrecisionRounds(self):
        expected = struct.unpack("f", struct.pack("f", 1.2345))[0]
        self.assertEqual(coerce(ValueKind(Kind.FLOAT, 32), "1.2345"), expected)

    def testInfinitySpelledOut(self):
        self.assertEqual(coerce(ValueKind(Kind.FLOAT, 64), "-inf"), float("-inf"))
        self.assertEqual(coerce(ValueKind(Kind.FLOAT, 32), "+Infinity"), float("inf"))

    def testPlainLiterals(self):
        for text, expected in (("1.5", 1.5), ("-.5", -0.5), ("3.", 3.0), ("2E-2", 0.02)):
            with self.subTest(text=text):
                self.assertEqual(coerce(ValueKind(Kind.FLOAT, 64), text), expected)

    def testOverflowRejected(self):
        with self.assertRaises(ValueError):
            coerce(ValueKind(Kind.FLOAT, 64), "1e400")
        with self.assertRaises(ValueError):
            coerce(ValueKind(Kind.FLOAT, 32), "1e39")

    def testNonNumericRejected(self):
        for width in (32, 64):
            for text in ("BAD", "", "1_0", " 1.5", "1.5\n", "\uff11\uff12", "0x1p3", "1e", "."):
                with self.subTest(width=width, text=text):
                    with self.assertRaises(ValueError):
                        coerce(ValueKind(Kind.FLOAT, width), text)


class TestOthers(TestCase):

    def testStringsAreVerbatim(self):
        self.assertEqual(coerce(STRING, " spaced -- "), " spaced -- ")

    def testListsCoerceTheirItems(self):
        self.assertEqual(coerce(ValueKind(Kind.LIST, item=unsigned(8)), "42"), 42)
        with self.assertRaises(ValueError):
            coerce(ValueKind(Kind.LIST, item=unsigned(8)), "420")

    def testBooleansAreNotCoerced(self):
        with self.assertRaises(TypeError):
            coerce(ValueKind(Kind.BOOLEAN), "true")


if __name__ == "__main__":
    unittest.main()
