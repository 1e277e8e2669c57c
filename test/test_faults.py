"""
Fault behavioral tests (codes, attribution, rendering).

Scope
- Validate CommandException options, string form and copy.replace() attribution.
- Validate report() rendering: header, command prefix, hint and stack trace.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes to an in-memory console without colors.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from sweetcli.faults import (
    CommandException,
    DelegatedCommandError,
    FaultCode,
    ParseError,
    ValidationError,
    getdoc,
    report,
)


def render(fault, **options):
    stream = io.StringIO()
    report(fault, console=Console(file=stream, width=120), **options)
    return stream.getvalue()


class TestFaults(TestCase):
    """Behavioral tests for CommandException."""

    def testClassDefaults(self):
        fault = ValidationError("bad value")
        self.assertEqual(fault.code, FaultCode.INVALID_CHOICE)
        self.assertEqual(fault.title, "invalid choice")
        self.assertIsNone(fault.command)
        self.assertIsInstance(fault, ParseError)
        self.assertIsInstance(fault, ValueError)

    def testOptionsOverrideDefaults(self):
        fault = CommandException("boom", title="custom", hint="try again")
        self.assertEqual(fault.title, "custom")
        self.assertEqual(fault.hint, "try again")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            CommandException("boom").options["hint"] = "x"

    def testReplaceAttachesCommand(self):
        fault = ValidationError("invalid value 'c' for option --type", allowed=("a", "b"))
        attributed = copy.replace(fault, command="pizza")
        self.assertEqual(str(attributed), "pizza: invalid value 'c' for option --type")
        self.assertEqual(attributed.options["allowed"], ("a", "b"))
        self.assertIsInstance(attributed, ValidationError)
        self.assertIsNone(fault.command)

    def testCodesAreGroupedByDomain(self):
        self.assertTrue(all(21100 < code < 26000 for code in FaultCode))
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "22101")

    def testGetdocWithoutRegistry(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_OPTION))
        with self.assertRaises(TypeError):
            getdoc(22101)


class TestReport(TestCase):
    """Behavioral tests for report() rendering."""

    def testHeaderMessageAndHint(self):
        output = render(ValidationError("invalid value 'c'", command="pizza", hint="pick a or b", prog="shop"))
        self.assertIn("[ shop · 22106 | Invalid Choice ]", output)
        self.assertIn("pizza: invalid value 'c'", output)
        self.assertIn(" → pick a or b", output)

    def testOptionsMergedByReport(self):
        output = render(CommandException("boom", prog="shop"), command="oven")
        self.assertIn("oven: boom", output)

    def testStacktraceRendered(self):
        try:
            raise RuntimeError("oven on fire")
        except RuntimeError as exception:
            fault = DelegatedCommandError("RuntimeError: oven on fire", exception=exception, traceback=True)
        output = render(fault)
        self.assertIn("Stacktrace:", output)
        self.assertIn("oven on fire", output)

    def testFancyPanel(self):
        output = render(CommandException("boom", prog="shop"), fancy=True)
        self.assertIn("boom", output)
        self.assertIn("╭", output)

    def testReportRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            report(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
