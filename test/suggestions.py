"""
Autocomplete and inline hint tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

import enum
import unittest
from unittest import TestCase

from devconsole import Command, Parameter
from devconsole.suggestions import suggest, hint


class Key(enum.Enum):
    UpArrow = 0


class TestSuggest(TestCase):
    """Behavioral tests for suggest()."""

    def setUp(self):
        self.echo = Command("print", lambda: None, "say, p2")
        self.ping = Command("ping", lambda: None, "pp")
        self.load = Command("load", lambda: None, "prefab")
        self.commands = [self.echo, self.ping, self.load]

    def testNamesBeforeAliases(self):
        texts, commands = suggest(self.commands, "P")
        self.assertEqual(texts, ("Print", "Ping", "P2", "Pp", "Prefab"))
        self.assertEqual(commands, (self.echo, self.ping, self.echo, self.ping, self.load))

    def testKeepsTypedCasing(self):
        self.assertEqual(suggest(self.commands, "PRi").texts, ("PRint",))

    def testBlankPrefix(self):
        self.assertEqual(suggest(self.commands, ""), ((), ()))
        self.assertEqual(suggest(self.commands, "  "), ((), ()))

    def testNoMatch(self):
        self.assertEqual(suggest(self.commands, "zz").texts, ())

    def testNonStringRaises(self):
        with self.assertRaises(TypeError):
            suggest(self.commands, None)


class TestHint(TestCase):
    """Behavioral tests for hint()."""

    def setUp(self):
        self.bind = Command(
            "bind",
            lambda key, command: None,
            (),
            "",
            [Parameter("key", "", Key), Parameter("command")],
        )

    def testRemainingParameters(self):
        self.assertEqual(hint(self.bind, 0), "<(Key)key> <(str)command>")
        self.assertEqual(hint(self.bind, 1), "<(str)command>")
        self.assertEqual(hint(self.bind, 2), "")
        self.assertEqual(hint(self.bind, 5), "")

    def testNegativeRaises(self):
        with self.assertRaises(ValueError):
            hint(self.bind, -1)


if __name__ == "__main__":
    unittest.main()
