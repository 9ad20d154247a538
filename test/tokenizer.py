"""
Tokenizer behavioral tests (split and unquote).

Scope
- Validate whitespace splitting, quote grouping and backslash escapes in split().
- Validate graceful handling of unbalanced quotes and trailing backslashes.
- Validate unquote() on fully-quoted, partially-quoted and plain strings.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argkit.tokenizer import split, unquote


class TestSplit(TestCase):
    """Behavioral tests for split()."""

    def testEmptyInputYieldsNoTokens(self):
        self.assertEqual(split(""), [])

    def testWhitespaceOnlyYieldsNoTokens(self):
        self.assertEqual(split(" \t\r\n "), [])

    def testSplitsOnSpaces(self):
        self.assertEqual(split("a b c"), ["a", "b", "c"])

    def testSplitsOnAllWhitespaceKinds(self):
        self.assertEqual(split("  a \t b\n\rc  "), ["a", "b", "c"])

    def testQuotesGroupWhitespaceAndStayInToken(self):
        self.assertEqual(split('x "a b" y'), ["x", '"a b"', "y"])

    def testQuotesInsideTokenDoNotSplit(self):
        self.assertEqual(split('--opt="a b" z'), ['--opt="a b"', "z"])

    def testEscapedQuoteIsLiteral(self):
        self.assertEqual(split(r'"a \" b"'), ['"a " b"'])

    def testEscapedQuoteOutsideQuotesDoesNotOpenQuotes(self):
        self.assertEqual(split(r'\"a b'), ['"a', "b"])

    def testEscapedSpaceDoesNotSplit(self):
        self.assertEqual(split(r"a\ b c"), ["a b", "c"])

    def testDoubleBackslashCollapses(self):
        self.assertEqual(split(r"a\\b"), ["a\\b"])

    def testBackslashBeforeOrdinaryCharIsDropped(self):
        self.assertEqual(split(r"a\b"), ["ab"])

    def testTrailingBackslashIsKept(self):
        self.assertEqual(split("trailing\\"), ["trailing\\"])

    def testUnbalancedQuoteRunsToEnd(self):
        self.assertEqual(split('"unbalanced quote'), ['"unbalanced quote'])

    def testQuotedEmptyStringIsAToken(self):
        self.assertEqual(split('a "" b'), ["a", '""', "b"])

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            split(["a", "b"])


class TestUnquote(TestCase):
    """Behavioral tests for unquote()."""

    def testStripsSurroundingQuotes(self):
        self.assertEqual(unquote('"a b"'), "a b")

    def testEmptyQuotedString(self):
        self.assertEqual(unquote('""'), "")

    def testUnescapesQuotes(self):
        self.assertEqual(unquote(r'"a \" b"'), 'a " b')

    def testUnescapesBackslashes(self):
        self.assertEqual(unquote(r'"a\\b"'), "a\\b")

    def testLeavesOtherEscapesAlone(self):
        self.assertEqual(unquote(r'"a\nb"'), r"a\nb")

    def testLoneQuoteUnchanged(self):
        self.assertEqual(unquote('"'), '"')

    def testPartiallyQuotedUnchanged(self):
        self.assertEqual(unquote('"half'), '"half')
        self.assertEqual(unquote('half"'), 'half"')

    def testPlainStringUnchanged(self):
        self.assertEqual(unquote(r"plain\"text"), r"plain\"text")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            unquote(None)


if __name__ == "__main__":
    unittest.main()
