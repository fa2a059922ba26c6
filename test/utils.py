"""
Utilities tests (Unset sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from lodestar.utils import Unset, UnsetType, coalesce, rename, mirror


class TestUnset(TestCase):

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(None, str | Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestHelpers(TestCase):

    def testRename(self):
        @rename("stable")
        def generated():
            pass

        self.assertEqual(generated.__name__, "stable")
        self.assertEqual(generated.__qualname__, "stable")
        with self.assertRaises(TypeError):
            rename(42)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        self.assertEqual(Holder().items, (1, 2))
        with self.assertRaises(AttributeError):
            Holder().items = ()


if __name__ == "__main__":
    unittest.main()
