"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, copy/pickle identity,
  PEP 604 unions, finality).
- coalesce() preserving legitimate falsey values.
- rename() in direct and decorator forms.
- mirror() returning frozen snapshots.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from argot.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickleKeepIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnions(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", Unset | str)
        self.assertNotIsInstance(1, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename() and mirror().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", ()):
            self.assertIs(coalesce(value, "fallback"), value)

    def testRenameDirect(self) -> None:
        def original():
            pass
        self.assertIs(rename(original, "renamed"), original)
        self.assertEqual((original.__name__, original.__qualname__), ("renamed", "renamed"))

    def testRenameDecorator(self) -> None:
        @rename("decorated")
        def original():
            pass
        self.assertEqual(original.__name__, "decorated")

    def testRenameArgumentErrors(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(1)

    def testMirror(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            count = mirror("count")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}
                self._count = 3

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.count, 3)
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
