"""
Faults module tests (hierarchy, options, rich rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from lodestar import (
    Command,
    CommandException,
    CommandCycleError,
    DuplicateCommandError,
    OrphanCommandError,
)


def render(fault):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(fault)
    return console.file.getvalue()


class TestFaults(TestCase):

    def testHierarchy(self):
        self.assertTrue(issubclass(OrphanCommandError, CommandException))
        self.assertTrue(issubclass(OrphanCommandError, LookupError))
        self.assertTrue(issubclass(DuplicateCommandError, ValueError))
        self.assertTrue(issubclass(CommandCycleError, ValueError))

    def testMessageAndOptions(self):
        fault = CommandException("something broke", hint="try again")
        self.assertEqual(str(fault), "something broke")
        self.assertEqual(fault.message, "something broke")
        self.assertEqual(fault.options["hint"], "try again")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "other"

    def testRejectsNonStringMessage(self):
        with self.assertRaises(TypeError):
            CommandException(42)

    def testRendersHeaderMessageAndHint(self):
        root = Command("app")
        with self.assertRaises(OrphanCommandError) as context:
            root.view().parent()
        output = render(context.exception)
        self.assertIn("[ app — missing parent ]", output)
        self.assertIn("command 'app' has no parent", output)
        self.assertIn("has_parent()", output)

    def testRendersInsidePanel(self):
        fault = DuplicateCommandError("name 'run' is already in use", fancy=True)
        output = render(fault)
        self.assertIn("duplicate command", output)
        self.assertIn("name 'run' is already in use", output)

    def testFaultCarriesTheCommand(self):
        root = Command("app")
        root.command("run")
        with self.assertRaises(DuplicateCommandError) as context:
            root.command("run")
        self.assertIs(context.exception.options["tool"], root)

    def testReplaceKeepsMessageAndMergesOptions(self):
        fault = DuplicateCommandError("name 'run' is already in use", hint="a", fancy=True)
        copied = fault.__replace__(hint="b")
        self.assertIsInstance(copied, DuplicateCommandError)
        self.assertIsNot(copied, fault)
        self.assertEqual(copied.message, "name 'run' is already in use")
        self.assertEqual(dict(copied.options), {"hint": "b", "fancy": True})
        self.assertEqual(fault.options["hint"], "a")

    @unittest.skipUnless(hasattr(copy, "replace"), "copy.replace() needs Python 3.13")
    def testCopyReplace(self):
        fault = OrphanCommandError("command 'app' has no parent", hint="a")
        copied = copy.replace(fault, hint="b")
        self.assertIsInstance(copied, OrphanCommandError)
        self.assertEqual(copied.options["hint"], "b")

    def testReplaceRejectsPositionalArguments(self):
        with self.assertRaises(TypeError):
            CommandException("broken").__replace__("extra")


if __name__ == "__main__":
    unittest.main()
