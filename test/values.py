"""
Value tests: the raw string plus on-demand conversions.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from optionparser.faults import FaultCode, ValueConversionError
from optionparser.values import Value


class ValueTest(TestCase):
    """Value behaves as the raw string and converts on demand."""

    def testIsTheRawString(self) -> None:
        value = Value("a.txt", option="--out")
        self.assertIsInstance(value, str)
        self.assertEqual(value, "a.txt")
        self.assertEqual(value.option, "--out")
        self.assertEqual(value.upper(), "A.TXT")

    def testOptionDefaultsToNone(self) -> None:
        self.assertIsNone(Value("x").option)

    def testRejectsNonStrings(self) -> None:
        with self.assertRaises(TypeError):
            Value(3)  # type: ignore[arg-type]

    def testRepr(self) -> None:
        self.assertEqual(repr(Value("4", option="-j")), "Value('4', option='-j')")

    def testAsInt(self) -> None:
        self.assertEqual(Value("42").as_int(), 42)
        self.assertEqual(Value(" -7 ").as_int(), -7)
        self.assertEqual(Value("ff").as_int(16), 255)

    def testAsIntFailure(self) -> None:
        with self.assertRaises(ValueConversionError) as context:
            Value("four", option="-j").as_int()
        fault = context.exception
        self.assertIsInstance(fault, ValueError)
        self.assertEqual(fault.option, "-j")
        self.assertEqual(fault.value, "four")
        self.assertIs(fault.options["code"], FaultCode.VALUE_CONVERSION)
        self.assertIn("'-j'", str(fault))

    def testAsFloat(self) -> None:
        self.assertEqual(Value("2.5").as_float(), 2.5)
        with self.assertRaises(ValueConversionError):
            Value("2,5").as_float()

    def testAsBool(self) -> None:
        for raw in ("1", "true", "Yes", " ON ", "y"):
            with self.subTest(raw=raw):
                self.assertIs(Value(raw).as_bool(), True)
        for raw in ("0", "false", "NO", "off", "n"):
            with self.subTest(raw=raw):
                self.assertIs(Value(raw).as_bool(), False)
        with self.assertRaises(ValueConversionError):
            Value("maybe").as_bool()

    def testAsList(self) -> None:
        items = Value("a,,b,c", option="--tags").as_list()
        self.assertEqual(items, ("a", "b", "c"))
        self.assertTrue(all(isinstance(item, Value) and item.option == "--tags" for item in items))
        self.assertEqual(Value("a:b").as_list(":"), ("a", "b"))
        self.assertEqual(Value("").as_list(), ())


if __name__ == "__main__":
    unittest.main()
