"""
Tokenizer and arity reconciliation tests.

Scope
- Validate single-space splitting and quoted-region reconstruction.
- Validate that tokens survive a re-join/re-tokenize round trip.
- Validate surplus folding, idempotence, and the count == 0 case of reconcile().

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from devconsole.tokens import tokenize, reconcile


def join(tokens):
    # quote only the arguments that need it, like a user would type them
    return " ".join([tokens[0], *('"%s"' % token if " " in token else token for token in tokens[1:])])


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testNameOnly(self):
        self.assertEqual(tokenize("devconsole"), ["devconsole"])

    def testEmptyInput(self):
        self.assertEqual(tokenize(""), [""])

    def testPlainWords(self):
        self.assertEqual(tokenize("print hello world"), ["print", "hello", "world"])

    def testQuotedRegionIsOneToken(self):
        self.assertEqual(
            tokenize('bind UpArrow "say hi there"'),
            ["bind", "UpArrow", "say hi there"],
        )

    def testQuotedRegionInTheMiddle(self):
        self.assertEqual(
            tokenize('tp "spawn point" 3'),
            ["tp", "spawn point", "3"],
        )

    def testSelfContainedQuotedWord(self):
        self.assertEqual(tokenize('say "hello"'), ["say", "hello"])

    def testUnterminatedQuoteAbsorbsRest(self):
        self.assertEqual(
            tokenize('say "never closed at all'),
            ["say", "never closed at all"],
        )

    def testLoneQuoteAsFinalTokenKept(self):
        self.assertEqual(tokenize('say "'), ["say", '"'])

    def testUnterminatedFinalTokenKeepsQuote(self):
        self.assertEqual(tokenize('say "hello'), ["say", '"hello'])
        self.assertEqual(tokenize('echo 5 "inches'), ["echo", "5", '"inches'])

    def testDoubleSpaceProducesEmptyToken(self):
        self.assertEqual(tokenize("a  b"), ["a", "", "b"])

    def testNonStringRaises(self):
        with self.assertRaises(TypeError):
            tokenize(42)

    def testRoundTrip(self):
        for tokens in (
                ["print", "hello"],
                ["bind", "UpArrow", "say hi there"],
                ["tp", "spawn point", "3", "far away place"],
                ["quit"],
        ):
            with self.subTest(tokens=tokens):
                self.assertEqual(tokenize(join(tokens)), tokens)


class TestReconcile(TestCase):
    """Behavioral tests for reconcile()."""

    def testSurplusFoldsIntoLastParameter(self):
        self.assertEqual(reconcile(["print", "hello", "world"], 1), ["print", "hello world"])

    def testSurplusKeepsLeadingArguments(self):
        self.assertEqual(
            reconcile(["bind", "UpArrow", "say", "hi", "there"], 2),
            ["bind", "UpArrow", "say hi there"],
        )

    def testExactSupplyUnchanged(self):
        self.assertEqual(reconcile(["bind", "UpArrow", "x"], 2), ["bind", "UpArrow", "x"])

    def testUnderSupplyUnchanged(self):
        self.assertEqual(reconcile(["bind"], 2), ["bind"])

    def testZeroParametersDropsSurplus(self):
        self.assertEqual(reconcile(["quit", "now", "please"], 0), ["quit"])
        self.assertEqual(reconcile(["quit"], 0), ["quit"])

    def testIdempotent(self):
        once = reconcile(["print", "a", "b", "c"], 1)
        self.assertEqual(reconcile(once, 1), once)

    def testReturnsCopy(self):
        tokens = ["print", "hello"]
        self.assertIsNot(reconcile(tokens, 1), tokens)

    def testNegativeCountRaises(self):
        with self.assertRaises(ValueError):
            reconcile(["print"], -1)


if __name__ == "__main__":
    unittest.main()
