"""
Engine behavioral tests (pure transitions and per-call effects application).

Scope
- Validate step() as a pure function of (state, token).
- Validate Engine group selection, choices, warnings and end-of-input checks.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import (
    AlreadySelectedError,
    Collecting,
    DeprecatedOptionWarning,
    EmptyInlineValueWarning,
    Engine,
    InvalidChoiceError,
    InvalidValueError,
    MissingArgumentError,
    MissingOptionError,
    Option,
    OptionGroup,
    OptionModel,
    Positional,
    Present,
    Scanning,
    Token,
    TokenKind,
    UnrecognizedOptionError,
    Value,
    Verbatim,
    step,
)


class TestStep(TestCase):
    """Behavioral tests for the pure transition function."""

    def setUp(self):
        self.a = Option("-a", "--enable-a")
        self.b = Option("-b", "--bfile", nargs=1)
        self.d = Option("-D", nargs=2, optional=True, separator="=")
        self.model = OptionModel(self.a, self.b, self.d)

    def testPositionalWhileScanning(self):
        state, effects = step(self.model, Scanning(), Token(TokenKind.POSITIONAL, "foo"))
        self.assertIsInstance(state, Scanning)
        self.assertEqual(effects, (Positional("foo"),))

    def testPositionalInStopMode(self):
        state, effects = step(self.model, Scanning(), Token(TokenKind.POSITIONAL, "foo"), True)
        self.assertIsInstance(state, Verbatim)
        self.assertEqual(effects, (Positional("foo"),))

    def testSeparatorSwitchesToVerbatim(self):
        state, effects = step(self.model, Scanning(), Token(TokenKind.SEPARATOR, "--"))
        self.assertIsInstance(state, Verbatim)
        self.assertEqual(effects, ())
        state, effects = step(self.model, state, Token(TokenKind.CLUSTER, "-a", parts=(self.a,)))
        self.assertIsInstance(state, Verbatim)
        self.assertEqual(effects, (Positional("-a"),))

    def testLongOpensCollecting(self):
        state, effects = step(self.model, Scanning(), Token(TokenKind.LONG, "--bfile", "bfile"))
        self.assertEqual(state, Collecting(self.b, 0))
        self.assertEqual(effects, (Present(self.b),))

    def testInlineValueSatisfiesArity(self):
        state, effects = step(self.model, Scanning(), Token(TokenKind.LONG, "--bf=x", "bf", "x"))
        self.assertIsInstance(state, Scanning)
        self.assertEqual(effects, (Present(self.b), Value(self.b, ("x",), True)))

    def testInlineValueOnFlagIsUnrecognized(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            step(self.model, Scanning(), Token(TokenKind.LONG, "--enable-a=x", "enable-a", "x"))
        self.assertEqual(context.exception.token, "--enable-a=x")

    def testCollectingConsumesValueLikeTokens(self):
        for token in (
                Token(TokenKind.POSITIONAL, "-1"),
                Token(TokenKind.UNKNOWN, "-foo"),
                Token(TokenKind.LONG, "--zop", "zop"),
        ):
            with self.subTest(token=token.raw):
                state, effects = step(self.model, Collecting(self.b, 0), token)
                self.assertIsInstance(state, Scanning)
                self.assertEqual(effects, (Value(self.b, (token.raw,), False),))

    def testOptionTokenWhileValueIsMandatory(self):
        with self.assertRaises(MissingArgumentError) as context:
            step(self.model, Collecting(self.b, 0), Token(TokenKind.CLUSTER, "-a", parts=(self.a,)))
        self.assertIs(context.exception.option, self.b)

    def testSeparatorWhileValueIsMandatory(self):
        with self.assertRaises(MissingArgumentError):
            step(self.model, Collecting(self.b, 0), Token(TokenKind.SEPARATOR, "--"))

    def testOptionTokenEndsOptionalCollection(self):
        token = Token(TokenKind.CLUSTER, "-a", parts=(self.a,))
        state, effects = step(self.model, Collecting(self.d, 1), token)
        self.assertIsInstance(state, Scanning)
        self.assertEqual(effects, (Present(self.a),))

    def testSeparatorSplitLimitedByCapacity(self):
        token = Token(TokenKind.POSITIONAL, "k=v=w")
        state, effects = step(self.model, Collecting(self.d, 0), token)
        self.assertEqual(effects, (Value(self.d, ("k", "v=w"), False),))
        self.assertIsInstance(state, Scanning)
        state, effects = step(self.model, Collecting(self.d, 1), token)
        self.assertEqual(effects, (Value(self.d, ("k=v=w",), False),))

    def testClusterWithRestInStopMode(self):
        token = Token(TokenKind.CLUSTER, "-azc", parts=(self.a,), rest="zc")
        state, effects = step(self.model, Scanning(), token, True)
        self.assertIsInstance(state, Verbatim)
        self.assertEqual(effects, (Present(self.a), Positional("zc")))
        with self.assertRaises(UnrecognizedOptionError):
            step(self.model, Scanning(), token)

    def testStepIsPure(self):
        state = Collecting(self.b, 0)
        token = Token(TokenKind.POSITIONAL, "x")
        self.assertEqual(step(self.model, state, token), step(self.model, state, token))
        self.assertEqual(state, Collecting(self.b, 0))


class TestEngine(TestCase):
    """Behavioral tests for Engine (one parse call)."""

    def setUp(self):
        self.x = Option("-x")
        self.y = Option("-y")
        self.group = OptionGroup(self.x, self.y, required=True)
        self.m = Option("-m", nargs=1, choices=("fast", "safe"))
        self.o = Option("-o", "--old", nargs=1, deprecated=True)
        self.r = Option("-r", required=True)
        self.model = OptionModel(self.group, self.m, self.o, self.r)
        self.notified = []

    def parse(self, *args, stop=False):
        return Engine(self.model, stop=stop, notify=self.notified.append).run(args)

    def testGroupSelectionConflict(self):
        with self.assertRaises(AlreadySelectedError) as context:
            self.parse("-r", "-x", "-y")
        self.assertIs(context.exception.group, self.group)
        self.assertIs(context.exception.selected, self.x)
        self.assertIs(context.exception.option, self.y)

    def testSameMemberTwiceIsFine(self):
        line = self.parse("-r", "-x", "-x")
        self.assertEqual(line.get_occurrences("x"), ((), ()))

    def testGroupSelectionIsPerCall(self):
        self.parse("-r", "-x")
        line = self.parse("-r", "-y")
        self.assertTrue(line.has_option("y"))

    def testMissingRequiredGroupAndOption(self):
        with self.assertRaises(MissingOptionError) as context:
            self.parse()
        self.assertEqual(context.exception.missing, (self.group, self.r))

    def testInvalidChoice(self):
        with self.assertRaises(InvalidChoiceError) as context:
            self.parse("-r", "-x", "-m", "slow")
        self.assertEqual(context.exception.value, "slow")

    def testValidatorAcceptsAndRejects(self):
        def even(value):
            return int(value) % 2 == 0

        model = OptionModel(Option("-n", nargs="+", validator=even))
        engine = Engine(model, notify=self.notified.append)
        self.assertEqual(engine.run(["-n", "2", "4"]).get_values("n"), ("2", "4"))

        with self.assertRaises(InvalidValueError) as context:
            Engine(model, notify=self.notified.append).run(["-n", "2", "3"])
        self.assertEqual(context.exception.value, "3")
        self.assertIsNone(context.exception.reason)

        with self.assertRaises(InvalidValueError) as context:
            Engine(model, notify=self.notified.append).run(["-n", "two"])
        self.assertIn("two", context.exception.reason)

    def testDeprecatedOptionNotifies(self):
        line = self.parse("-r", "-x", "--old", "v")
        self.assertEqual(line.get_value("o"), "v")
        self.assertEqual(len(self.notified), 1)
        self.assertIsInstance(self.notified[0], DeprecatedOptionWarning)

    def testEmptyInlineValueNotifies(self):
        line = self.parse("-r", "-x", "-m", "fast", "--old=")
        self.assertEqual(line.get_value("old"), "")
        self.assertIsInstance(self.notified[-1], EmptyInlineValueWarning)

    def testMissingArgumentAtEndOfInput(self):
        with self.assertRaises(MissingArgumentError) as context:
            self.parse("-r", "-x", "-m")
        self.assertIs(context.exception.option, self.m)

    def testCursorAdvances(self):
        engine = Engine(self.model, notify=self.notified.append)
        engine.run(["-r", "-x", "pos"])
        self.assertEqual(engine.index, 3)


if __name__ == "__main__":
    unittest.main()
