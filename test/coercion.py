"""
Coercion pipeline tests (literals, registered parsers, enums, primitives).

Scope
- Validate the "null"/"~"/"default" literals against value, reference and
  nullable types.
- Validate that registered parsers win over generic conversion and that null
  literals win over registered parsers for nullable parameters.
- Validate Value tagging (classify/wrap/unwrap).

Conventions
- Test method names follow CamelCase per project convention.
"""

import decimal
import enum
import unittest
from collections import namedtuple
from unittest import TestCase

from devconsole.coercion import Parsers
from devconsole.faults import UnknownCoercionTypeError
from devconsole.parameters import Parameter
from devconsole.values import ValueKind, Value, classify, wrap, unwrap, null


class Key(enum.Enum):
    UpArrow = 0
    DownArrow = 1


class Level(enum.Enum):
    Low = 3
    High = 7


Point = namedtuple("Point", ("x", "y"))


def parse_point(token):
    x, y = token.split(",")
    return Point(int(x), int(y))


class TestLiterals(TestCase):
    """"null", "~" and "default" handling."""

    def setUp(self):
        self.parsers = Parsers()

    def coerce(self, token, type):
        return self.parsers.coerce(token, Parameter("p", "", type))

    def testNullForReferenceType(self):
        self.assertEqual(self.coerce("null", str), null(str))
        self.assertEqual(self.coerce("NULL", str).object, None)
        self.assertEqual(self.coerce("~", str).kind, ValueKind.NULL)

    def testNullIsNotAbsentForValueType(self):
        with self.assertRaises(ValueError):
            self.coerce("null", int)

    def testNullForNullableValueType(self):
        self.assertIsNone(self.coerce("null", int | None).object)
        self.assertIsNone(self.coerce("~", int | None).object)
        self.assertIsNone(self.coerce("default", int | None).object)

    def testDefaultForValueTypes(self):
        self.assertEqual(self.coerce("default", int).object, 0)
        self.assertEqual(self.coerce("DEFAULT", float).object, 0.0)
        self.assertIs(self.coerce("~", bool).object, False)
        self.assertEqual(self.coerce("~", decimal.Decimal).object, decimal.Decimal(0))

    def testDefaultForEnum(self):
        self.assertIs(self.coerce("default", Key).object, Key.UpArrow)
        # no member with value 0: first member
        self.assertIs(self.coerce("default", Level).object, Level.Low)

    def testDefaultIsPlainTextForReferenceType(self):
        self.assertEqual(self.coerce("default", str).object, "default")


class TestPrimitives(TestCase):
    """Generic conversion of primitive and enumeration types."""

    def setUp(self):
        self.parsers = Parsers()

    def coerce(self, token, type):
        return self.parsers.coerce(token, Parameter("p", "", type))

    def testBool(self):
        self.assertEqual(self.coerce("true", bool), Value(ValueKind.BOOL, True, bool))
        self.assertIs(self.coerce("False", bool).object, False)
        self.assertIs(self.coerce("1", bool).object, True)
        self.assertIs(self.coerce("0", bool).object, False)
        with self.assertRaises(ValueError):
            self.coerce("yes", bool)

    def testNumbers(self):
        self.assertEqual(self.coerce("42", int), Value(ValueKind.INT, 42, int))
        self.assertEqual(self.coerce("1.5", float), Value(ValueKind.FLOAT, 1.5, float))
        with self.assertRaises(ValueError):
            self.coerce("1.5", int)

    def testString(self):
        self.assertEqual(self.coerce("hello world", str), Value(ValueKind.STRING, "hello world", str))

    def testEnumByName(self):
        self.assertIs(self.coerce("uparrow", Key).object, Key.UpArrow)
        self.assertIs(self.coerce("DOWNARROW", Key).object, Key.DownArrow)

    def testEnumByValue(self):
        self.assertIs(self.coerce("1", Key).object, Key.DownArrow)
        self.assertEqual(self.coerce("7", Level).kind, ValueKind.ENUM)

    def testEnumUnknown(self):
        with self.assertRaises(ValueError):
            self.coerce("Sideways", Key)
        with self.assertRaises(ValueError):
            self.coerce("5", Key)

    def testUnknownType(self):
        with self.assertRaises(UnknownCoercionTypeError):
            self.coerce("1,2", list[int])


class TestRegisteredParsers(TestCase):
    """Custom parse functions registered per type."""

    def setUp(self):
        self.calls = []
        self.parsers = Parsers()

        def parse(token):
            self.calls.append(token)
            return parse_point(token)

        self.parsers.register(Point, parse, default=Point(0, 0))

    def coerce(self, token, type):
        return self.parsers.coerce(token, Parameter("p", "", type))

    def testRegisteredParserIsUsed(self):
        self.assertEqual(self.coerce("1,2", Point), Value(ValueKind.CUSTOM, Point(1, 2), Point))
        self.assertEqual(self.calls, ["1,2"])

    def testDuplicateRegistrationRefused(self):
        self.assertFalse(self.parsers.register(Point, lambda token: None))
        self.assertEqual(self.coerce("3,4", Point).object, Point(3, 4))
        self.assertIn(Point, self.parsers)
        self.assertEqual(len(self.parsers), 1)

    def testUncallableParserRaises(self):
        with self.assertRaises(TypeError):
            self.parsers.register(complex, "not callable")

    def testNullWinsOverParserForNullable(self):
        for token in ("null", "~", "Null"):
            with self.subTest(token=token):
                self.assertEqual(self.coerce(token, Point | None), null(Point))
        self.assertEqual(self.calls, [])

    def testRegisteredDefaultMakesValueType(self):
        self.assertEqual(self.coerce("~", Point).object, Point(0, 0))
        self.assertEqual(self.coerce("default", Point).object, Point(0, 0))
        self.assertEqual(self.calls, [])

    def testParserFailurePropagates(self):
        with self.assertRaises(ValueError):
            self.coerce("nonsense", Point)


class TestValues(TestCase):
    """Value tagging helpers."""

    def testClassify(self):
        self.assertEqual(classify(bool), ValueKind.BOOL)
        self.assertEqual(classify(int), ValueKind.INT)
        self.assertEqual(classify(decimal.Decimal), ValueKind.FLOAT)
        self.assertEqual(classify(str), ValueKind.STRING)
        self.assertEqual(classify(Key), ValueKind.ENUM)
        self.assertEqual(classify(Point), ValueKind.CUSTOM)

    def testIntEnumIsEnum(self):
        class Mode(enum.IntEnum):
            Off = 0

        self.assertEqual(classify(Mode), ValueKind.ENUM)

    def testWrapNone(self):
        self.assertEqual(wrap(None, int).kind, ValueKind.NULL)

    def testUnwrap(self):
        self.assertEqual(unwrap([wrap(1, int), null(str), wrap("x", str)]), (1, None, "x"))


if __name__ == "__main__":
    unittest.main()
