"""
Command registry tests (uniqueness, resolution, removal).

Scope
- Validate that name/alias collisions are refused atomically.
- Validate case-insensitive resolution by name and by alias.
- Validate removal rules for unknown, permanent and custom commands.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from devconsole import Command, Parameter
from devconsole.registry import CommandRegistry, PERMANENT_COMMANDS


def make(name, aliases=()):
    return Command(name, lambda: None, aliases)


class TestCommandRegistry(TestCase):
    """Behavioral tests for CommandRegistry."""

    def setUp(self):
        self.registry = CommandRegistry()
        self.echo = Command("print", lambda message: None, "say", "", [Parameter("message")])
        self.quit = make("quit", "exit")
        self.assertTrue(self.registry.register(self.echo))
        self.assertTrue(self.registry.register(self.quit))

    def testInsertionOrder(self):
        self.assertEqual(list(self.registry), ["print", "quit"])
        self.assertEqual(len(self.registry), 2)
        self.assertIs(self.registry["print"], self.echo)

    def testRegisterMarksCustom(self):
        self.assertTrue(self.echo.custom)
        builtin = make("devconsole")
        self.registry.register(builtin, custom=False)
        self.assertTrue(builtin.builtin)

    def testResolveByName(self):
        self.assertIs(self.registry.resolve("PRINT"), self.echo)
        self.assertIs(self.registry.resolve(" pr int "), self.echo)

    def testResolveByAlias(self):
        self.assertIs(self.registry.resolve("Say"), self.echo)
        self.assertIs(self.registry.resolve("exit"), self.quit)

    def testResolveUnknown(self):
        self.assertIsNone(self.registry.resolve("unknowncmd"))
        self.assertIsNone(self.registry.resolve(""))
        self.assertIsNone(self.registry.resolve("   "))

    def testResolveConsistency(self):
        for command in self.registry.values():
            for identifier in command.identifiers:
                with self.subTest(identifier=identifier):
                    self.assertIs(self.registry.resolve(identifier.upper()), command)

    def testOverlappingAliasRefusedAtomically(self):
        before = dict(self.registry)
        self.assertFalse(self.registry.register(make("leave", "exit, bye")))
        self.assertEqual(dict(self.registry), before)
        self.assertIsNone(self.registry.resolve("bye"))
        self.assertIsNone(self.registry.resolve("leave"))

    def testAliasCollidingWithNameRefused(self):
        self.assertFalse(self.registry.register(make("leave", "quit")))
        self.assertIs(self.registry.resolve("quit"), self.quit)

    def testNameCollidingWithAliasRefused(self):
        self.assertFalse(self.registry.register(make("say")))

    def testDuplicateNameRefused(self):
        self.assertFalse(self.registry.register(make("Quit")))

    def testEmptyNameRefused(self):
        self.assertFalse(self.registry.register(make("   ")))

    def testConflicts(self):
        self.assertEqual(self.registry.conflicts(make("exit", "say")), {"exit", "say"})
        self.assertEqual(self.registry.conflicts(make("load")), frozenset())

    def testRegisterNonCommand(self):
        with self.assertRaises(TypeError):
            self.registry.register("print")

    def testRemoveUnknownSucceeds(self):
        self.assertTrue(self.registry.remove("unknowncmd"))
        self.assertEqual(len(self.registry), 2)

    def testRemoveByAlias(self):
        self.assertTrue(self.registry.remove("say"))
        self.assertNotIn("print", self.registry)

    def testRemovePermanentRefused(self):
        for name in PERMANENT_COMMANDS:
            self.registry.register(make(name), custom=False)
        for name in PERMANENT_COMMANDS:
            with self.subTest(name=name):
                self.assertFalse(self.registry.remove(name))
                self.assertIn(name, self.registry)

    def testRemoveCustomWithPermanentName(self):
        self.registry.register(make("help"))
        self.assertTrue(self.registry.remove("help"))

    def testClear(self):
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)


if __name__ == "__main__":
    unittest.main()
