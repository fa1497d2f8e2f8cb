import unittest

import numpy as np

from propgraphml.core.types import ScalarType, parse_list
from propgraphml.errors import FormatError


class TestScalarType(unittest.TestCase):
    def test_for_name(self):
        self.assertIs(ScalarType.for_name(None), ScalarType.STRING)
        self.assertIs(ScalarType.for_name(" Long "), ScalarType.LONG)
        self.assertIs(ScalarType.for_name("DOUBLE"), ScalarType.DOUBLE)
        with self.assertRaises(FormatError):
            ScalarType.for_name("decimal")

    def test_parse_numeric_widths(self):
        v = ScalarType.INT.parse("42")
        self.assertIsInstance(v, np.int32)
        self.assertEqual(v, 42)
        self.assertIsInstance(ScalarType.LONG.parse("-9000000000"), np.int64)
        self.assertIsInstance(ScalarType.FLOAT.parse("1.5"), np.float32)
        self.assertIsInstance(ScalarType.DOUBLE.parse("1e-3"), np.float64)
        self.assertAlmostEqual(float(ScalarType.DOUBLE.parse("1e-3")), 0.001)

    def test_parse_rejects_bad_text(self):
        with self.assertRaises(FormatError):
            ScalarType.LONG.parse("abc")
        with self.assertRaises(FormatError):
            ScalarType.INT.parse("1.5")
        with self.assertRaises(FormatError):
            ScalarType.INT.parse("3000000000")  # > int32
        with self.assertRaises(FormatError):
            ScalarType.DOUBLE.parse("one")
        with self.assertRaises(FormatError):
            ScalarType.LONG.parse("1_000")

    def test_format_error_is_value_error(self):
        with self.assertRaises(ValueError) as cm:
            ScalarType.LONG.parse("x1")
        self.assertEqual(cm.exception.text, "x1")
        self.assertEqual(cm.exception.type_name, "long")

    def test_boolean_is_lenient(self):
        self.assertIs(ScalarType.BOOLEAN.parse("TRUE"), True)
        self.assertIs(ScalarType.BOOLEAN.parse("true"), True)
        self.assertIs(ScalarType.BOOLEAN.parse("yes"), False)
        self.assertIs(ScalarType.BOOLEAN.parse("0"), False)

    def test_string_passthrough(self):
        self.assertEqual(ScalarType.STRING.parse(" a b "), " a b ")
        self.assertEqual(ScalarType.STRING.parse(None), "")

    def test_scan_class(self):
        self.assertIs(ScalarType.INT.scan_class, np.int32)
        self.assertIs(ScalarType.LONG.scan_class, np.int64)
        self.assertIs(ScalarType.FLOAT.scan_class, np.float32)
        self.assertIs(ScalarType.DOUBLE.scan_class, np.float64)
        self.assertIs(ScalarType.BOOLEAN.scan_class, bool)
        self.assertIs(ScalarType.STRING.scan_class, str)


class TestParseList(unittest.TestCase):
    def test_int_list_keeps_order_and_duplicates(self):
        out = parse_list("[3, 1, 2, 1]", ScalarType.INT)
        self.assertEqual(out, [3, 1, 2, 1])
        self.assertTrue(all(isinstance(v, np.int32) for v in out))

    def test_quoted_strings(self):
        self.assertEqual(parse_list('["a", "b c", "a"]', ScalarType.STRING), ["a", "b c", "a"])

    def test_empty_tokens_dropped(self):
        self.assertEqual(parse_list("[1,, 2, ]", ScalarType.LONG), [1, 2])
        self.assertEqual(parse_list("[]", ScalarType.LONG), [])

    def test_unbracketed_body(self):
        self.assertEqual(parse_list("1, 2", ScalarType.LONG), [1, 2])

    def test_bad_element(self):
        with self.assertRaises(FormatError):
            parse_list("[1, x]", ScalarType.INT)


if __name__ == "__main__":
    unittest.main()
