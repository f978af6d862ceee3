"""
Tokenizer behavioral tests (classification of raw arguments).

Scope
- Validate "--" handling, long options with and without '=' values.
- Validate single-dash resolution order: long prefix, short cluster, negative
  number, unknown.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import Option, OptionModel, Token, TokenKind, tokenize


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def setUp(self):
        self.a = Option("-a", "--enable-a")
        self.b = Option("-b", "--bfile", nargs=1)
        self.c = Option("-c", "--copt")
        self.model = OptionModel(self.a, self.b, self.c)

    def kinds(self, *args):
        return [token.kind for token in tokenize(self.model, args)]

    def testSeparatorMakesEverythingAfterPositional(self):
        tokens = tokenize(self.model, ["--copt", "--", "-b", "--", "toast"])
        self.assertEqual(
            [token.kind for token in tokens],
            [TokenKind.LONG, TokenKind.SEPARATOR, TokenKind.POSITIONAL, TokenKind.POSITIONAL, TokenKind.POSITIONAL],
        )
        self.assertEqual([token.raw for token in tokens[2:]], ["-b", "--", "toast"])

    def testLongWithAndWithoutValue(self):
        first, second, third = tokenize(self.model, ["--bfile=toast", "--bfile", "--bfile="])
        self.assertEqual((first.kind, first.name, first.value), (TokenKind.LONG, "bfile", "toast"))
        self.assertEqual((second.name, second.value), ("bfile", None))
        self.assertEqual(third.value, "")

    def testEmptyLongNameIsUnknown(self):
        for argument in ("--=x", "--="):
            with self.subTest(argument=argument):
                token, = tokenize(self.model, [argument])
                self.assertEqual(token, Token(TokenKind.UNKNOWN, argument))

    def testLongSplitsAtFirstEqual(self):
        token, = tokenize(self.model, ["--zop==1"])
        self.assertEqual((token.name, token.value), ("zop", "=1"))

    def testCluster(self):
        token, = tokenize(self.model, ["-acbtoast"])
        self.assertEqual(token.kind, TokenKind.CLUSTER)
        self.assertEqual(token.parts, (self.a, self.c, self.b))
        self.assertEqual(token.value, "toast")
        self.assertIsNone(token.rest)

    def testClusterValueDropsLeadingEqual(self):
        token, = tokenize(self.model, ["-b=toast"])
        self.assertEqual((token.parts, token.value), ((self.b,), "toast"))

    def testClusterKeepsEmptyValueAfterEqual(self):
        token, = tokenize(self.model, ["-b="])
        self.assertEqual((token.parts, token.value), ((self.b,), ""))
        token, = tokenize(self.model, ["-ab="])
        self.assertEqual((token.parts, token.value), ((self.a, self.b), ""))

    def testClusterWithoutAttachedValue(self):
        token, = tokenize(self.model, ["-acb"])
        self.assertEqual(token.parts, (self.a, self.c, self.b))
        self.assertIsNone(token.value)

    def testClusterStopsAtUnknownCharacter(self):
        token, = tokenize(self.model, ["-azc"])
        self.assertEqual(token.parts, (self.a,))
        self.assertEqual(token.rest, "zc")

    def testSingleDashLongName(self):
        token, = tokenize(self.model, ["-enable-a"])
        self.assertEqual((token.kind, token.name), (TokenKind.LONG, "enable-a"))

    def testSingleDashLongNameWithValue(self):
        model = OptionModel(Option("-f", "--foo", nargs=1))
        token, = tokenize(model, ["-foo=bar"])
        self.assertEqual((token.kind, token.name, token.value), (TokenKind.LONG, "foo", "bar"))

    def testLongPrefixBeatsShortOption(self):
        model = OptionModel(Option("--version"), Option("-v", nargs=1))
        token, = tokenize(model, ["-ver"])
        self.assertEqual((token.kind, token.name), (TokenKind.LONG, "ver"))

    def testAmbiguousPrefixFallsBackToCluster(self):
        v = Option("-v")
        model = OptionModel(v, Option("--version"), Option("--verbose"))
        token, = tokenize(model, ["-ver"])
        self.assertEqual(token.kind, TokenKind.CLUSTER)
        self.assertEqual((token.parts, token.rest), ((v,), "er"))

    def testAmbiguousPrefixWithoutShortStaysLong(self):
        model = OptionModel(Option("--version"), Option("--verbose"))
        token, = tokenize(model, ["-ver"])
        self.assertEqual(token.kind, TokenKind.LONG)

    def testSingleCharacterAbbreviation(self):
        model = OptionModel(Option("--verbose"), Option("-x"))
        token, = tokenize(model, ["-v"])
        self.assertEqual((token.kind, token.name), (TokenKind.LONG, "v"))
        token, = tokenize(model, ["-x"])
        self.assertEqual(token.kind, TokenKind.CLUSTER)

    def testNegativeNumbers(self):
        self.assertEqual(self.kinds("-1", "-2.5", "-10"), [TokenKind.POSITIONAL] * 3)

    def testRegisteredDigitBeatsNegativeNumber(self):
        one = Option("-1")
        token, = tokenize(OptionModel(one), ["-1"])
        self.assertEqual((token.kind, token.parts), (TokenKind.CLUSTER, (one,)))

    def testUnknownAndPositionals(self):
        self.assertEqual(self.kinds("-foo", "-z", "-", "foo"), [
            TokenKind.UNKNOWN,
            TokenKind.UNKNOWN,
            TokenKind.POSITIONAL,
            TokenKind.POSITIONAL,
        ])

    def testTokensAreImmutableTuple(self):
        tokens = tokenize(self.model, iter(["-a", "x"]))
        self.assertIsInstance(tokens, tuple)
        self.assertEqual(tokens[1], Token(TokenKind.POSITIONAL, "x"))


if __name__ == "__main__":
    unittest.main()
