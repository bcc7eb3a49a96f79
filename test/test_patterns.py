"""
Pattern compiler behavioral tests.

Scope
- Validate literal, open capture and typed capture words.
- Validate bracket collapsing for multi-word captures.
- Validate that malformed expressions degrade to a never-matching word.
- Validate the pretty form used by usage listings.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
import warnings
from unittest import TestCase

from clapp import InvalidPatternWarning, WordKind, compile_pattern, prettify


class TestCompilePattern(TestCase):
    """Behavioral tests for compile_pattern."""

    def testLiterals(self):
        words = compile_pattern("db migrate")
        self.assertEqual([word.kind for word in words], [WordKind.LITERAL, WordKind.LITERAL])
        self.assertEqual([word.text for word in words], ["db", "migrate"])

    def testOpenCapture(self):
        word, = compile_pattern("[target]")
        self.assertIs(word.kind, WordKind.CAPTURE)
        self.assertEqual(word.name, "target")
        self.assertTrue(word.match("anything"))

    def testMultiWordCaptureIsOneWord(self):
        words = compile_pattern("greet [full name] now")
        self.assertEqual(len(words), 3)
        self.assertEqual(words[1].name, "full_name")

    def testTypedCapture(self):
        word, = compile_pattern(r"n:^\d+$")
        self.assertIs(word.kind, WordKind.TYPED)
        self.assertEqual(word.name, "n")
        self.assertTrue(word.match("42"))
        self.assertFalse(word.match("abc"))

    def testTypedCaptureMustMatchFully(self):
        word, = compile_pattern(r"n:\d+")
        self.assertTrue(word.match("42"))
        self.assertFalse(word.match("42abc"))

    def testTypedCaptureKeepsColonsInExpression(self):
        word, = compile_pattern(r"at:\d\d:\d\d")
        self.assertEqual(word.name, "at")
        self.assertTrue(word.match("12:30"))

    def testBracketWithColonIsOpenCapture(self):
        word, = compile_pattern("[a:b]")
        self.assertIs(word.kind, WordKind.CAPTURE)
        self.assertEqual(word.name, "a:b")

    def testLiteralNeedsExactEquality(self):
        word, = compile_pattern("build")
        self.assertTrue(word.match("build"))
        self.assertFalse(word.match("Build"))
        self.assertFalse(word.binds)

    def testEmptyPiecesAreDropped(self):
        self.assertEqual(len(compile_pattern("a  b ")), 2)
        self.assertEqual(compile_pattern(""), ())

    def testInvalidExpressionNeverMatches(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            word, = compile_pattern("broken:([a-z")
        self.assertTrue(any(isinstance(warning.message, InvalidPatternWarning) for warning in caught))
        self.assertIs(word.kind, WordKind.TYPED)
        self.assertIsNone(word.regex)
        self.assertFalse(word.match("([a-z"))
        self.assertFalse(word.match("abc"))

    def testInvalidExpressionUnderErrorFilter(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            word, = compile_pattern("strict:([0-9")
        self.assertIs(word.kind, WordKind.TYPED)
        self.assertEqual(word.name, "strict")
        self.assertIsNone(word.regex)
        self.assertFalse(word.match("7"))

    def testCompiledOnce(self):
        self.assertIs(compile_pattern("cached [x]"), compile_pattern("cached [x]"))

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            compile_pattern(None)


class TestPrettify(TestCase):
    """Behavioral tests for the usage form of patterns."""

    def testTypedCapturesAreBraced(self):
        self.assertEqual(prettify(compile_pattern(r"add n:^\d+$ [name]")), "add {n} [name]")


if __name__ == "__main__":
    unittest.main()
