"""
Flags module tests (naming, help columns, flag set queries and listing).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from lodestar import Flag, FlagSet


class TestFlag(TestCase):
    """Flag naming and help columns."""

    def testNameIsFirstLongName(self):
        self.assertEqual(Flag("-v", "--verbose").name, "verbose")
        self.assertEqual(Flag("--dry-run").name, "dry-run")
        self.assertEqual(Flag("-x").name, "x")

    def testShortNamesComeFirst(self):
        self.assertEqual(Flag("--verbose", "-v").names, ("-v", "--verbose"))

    def testRejectsInvalidNames(self):
        with self.assertRaises(TypeError):
            Flag()
        with self.assertRaises(ValueError):
            Flag("verbose")
        with self.assertRaises(ValueError):
            Flag("---verbose")
        with self.assertRaises(ValueError):
            Flag("-v", "-v")
        with self.assertRaises(TypeError):
            Flag(3)
        with self.assertRaises(TypeError):
            Flag("-v", descr=3)

    def testUsageColumn(self):
        self.assertEqual(Flag("-o", "--output", metavar="string").usage(), "-o, --output string")
        self.assertEqual(Flag("--dry-run").usage(), "    --dry-run")
        self.assertEqual(Flag("-q").usage(), "-q")

    def testHelpColumn(self):
        self.assertEqual(Flag("--count", descr="repeat", default=3).help(), "repeat (default 3)")
        self.assertEqual(Flag("--force", descr="overwrite", default=False).help(), "overwrite")
        self.assertEqual(Flag("--old", descr="legacy switch", deprecated=True).help(), "legacy switch (deprecated)")


class TestFlagSet(TestCase):
    """FlagSet collection semantics."""

    def setUp(self):
        self.verbose = Flag("-v", "--verbose", descr="verbose output")
        self.secret = Flag("--secret", hidden=True)
        self.flags = FlagSet([self.verbose, self.secret])

    def testInsertionOrder(self):
        self.assertEqual([x.name for x in self.flags], ["verbose", "secret"])
        self.assertEqual(len(self.flags), 2)

    def testLookupByAnyName(self):
        self.assertIs(self.flags.lookup("verbose"), self.verbose)
        self.assertIs(self.flags.lookup("--verbose"), self.verbose)
        self.assertIs(self.flags.lookup("-v"), self.verbose)
        self.assertIsNone(self.flags.lookup("missing"))
        self.assertIn("-v", self.flags)

    def testAddDuplicate(self):
        self.flags.add(self.verbose)
        self.assertEqual(len(self.flags), 2)
        with self.assertRaises(ValueError):
            self.flags.add(Flag("--verbose"))
        with self.assertRaises(TypeError):
            self.flags.add("--verbose")

    def testMergeKeepsExisting(self):
        other = FlagSet([Flag("--verbose", descr="other"), Flag("--extra")])
        self.flags.merge(other)
        self.assertIs(self.flags.lookup("verbose"), self.verbose)
        self.assertIsNotNone(self.flags.lookup("extra"))

    def testAvailability(self):
        self.assertTrue(self.flags.has_available_flags())
        self.assertFalse(FlagSet([self.secret]).has_available_flags())
        self.assertFalse(FlagSet().has_available_flags())
        self.assertFalse(FlagSet())
        self.assertEqual(self.flags.visible(), (self.verbose,))

    def testUsages(self):
        flags = FlagSet([
            Flag("-o", "--output", metavar="string", descr="output file"),
            Flag("--dry-run", descr="print only"),
            Flag("--secret", hidden=True),
        ])
        self.assertEqual(
            flags.usages(),
            "  -o, --output string   output file\n"
            "      --dry-run         print only\n"
        )

    def testUsagesWhenNothingVisible(self):
        self.assertEqual(FlagSet([self.secret]).usages(), "")


if __name__ == "__main__":
    unittest.main()
