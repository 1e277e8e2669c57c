"""
Output behavioral tests (verbosity sink, colored lines, countdown gate).

Scope
- Validate Context.log(): level gating, markers, alignment, suspension.
- Validate ColoredLogger line formats and the progress bar.
- Validate print_timeout_message() against readable and unwaitable streams.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles write to in-memory buffers without colors.
"""

from __future__ import annotations

import io
import os
import unittest
from unittest import TestCase

from rich.console import Console

from sweetcli import ColoredLogger, Context


def buffered():
    stream = io.StringIO()
    return Console(file=stream, width=80), stream


class TestVerbosity(TestCase):
    """Behavioral tests for Context.log()."""

    def setUp(self):
        console, self.stream = buffered()
        self.context = Context("Test", stdout=console, stderr=console)

    def testSilentBelowLevel(self):
        self.context.verbosity = 1
        self.assertFalse(self.context.log(2, "hidden"))
        self.assertEqual(self.stream.getvalue(), "")

    def testMarkerMatchesLevel(self):
        self.context.verbosity = 2
        self.assertTrue(self.context.log(1, "first"))
        self.assertTrue(self.context.log(2, "second"))
        self.assertEqual(self.stream.getvalue().splitlines(), ["-v:  first", "-vv: second"])

    def testContinuationLinesAreAligned(self):
        self.context.verbosity = 1
        self.context.log(1, "one\ntwo")
        self.assertEqual(self.stream.getvalue().splitlines(), ["-v: one", "    two"])

    def testPrefixCanBeBlanked(self):
        self.context.verbosity = 1
        self.context.log(1, "plain", prefix=False)
        self.assertEqual(self.stream.getvalue().splitlines(), ["    plain"])

    def testNegativeLevelIsAbsolute(self):
        self.context.verbosity = -2
        self.assertEqual(self.context.verbosity, 2)

    def testDisableAndEnable(self):
        self.context.verbosity = 3
        self.context.disable_verbosity()
        self.assertEqual(self.context.verbosity, 0)
        self.assertFalse(self.context.log(1, "hidden"))
        self.context.enable_verbosity()
        self.assertEqual(self.context.verbosity, 3)

    def testShortTitleDefaultsToTitle(self):
        self.assertEqual(Context("Pizza Shop").short_title, "Pizza Shop")
        self.assertEqual(Context("Pizza Shop", "pizza").short_title, "pizza")


class TestColoredLogger(TestCase):
    """Behavioral tests for the line helpers."""

    def setUp(self):
        console, self.stream = buffered()
        self.logger = ColoredLogger(console)

    def lines(self):
        return self.stream.getvalue().splitlines()

    def testHeadings(self):
        self.logger.print_heading_line("Your pizza has:")
        self.logger.print_sub_heading_line("Baking")
        self.assertEqual(self.lines(), ["=== Your pizza has:", "--- Baking"])

    def testIndentedMarkers(self):
        self.logger.print_success_line("Done")
        self.logger.print_error_line("Burnt", 2)
        self.logger.print_info_line("Note", emoji="")
        self.assertEqual(self.lines(), ["    ✅  Done", "        ❌  Burnt", "    Note"])

    def testListItemAndDivider(self):
        self.logger.print_list_item("ham")
        self.logger.print_divider()
        self.assertEqual(self.lines(), ["  · ham", "-" * 24])

    def testProgressBarEndsLineWhenComplete(self):
        self.logger.print_progress_bar(4, 4, "oven", width=10)
        self.assertTrue(self.stream.getvalue().endswith("\n"))
        self.assertIn("100%", self.stream.getvalue())
        self.assertIn("━" * 10, self.stream.getvalue())

    def testProgressBarRejectsEmptyTotal(self):
        with self.assertRaises(ValueError):
            self.logger.print_progress_bar(1, 0)


class TestTimeout(TestCase):
    """Behavioral tests for print_timeout_message()."""

    def setUp(self):
        console, self.stream = buffered()
        self.logger = ColoredLogger(console)

    def pipe(self, contents):
        read, write = os.pipe()
        os.write(write, contents.encode())
        os.close(write)
        stream = os.fdopen(read)
        self.addCleanup(stream.close)
        return stream

    def testCancelKeyStops(self):
        self.assertFalse(self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=self.pipe("c\n")))

    def testCancelKeyIgnoresCase(self):
        self.assertFalse(self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=self.pipe("C\n")))

    def testOtherInputContinues(self):
        self.assertTrue(self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=self.pipe("go\n")))

    def testEndOfInputContinues(self):
        self.assertTrue(self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=self.pipe("")))

    def testUnwaitableStreamContinues(self):
        self.assertTrue(self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=io.StringIO("c\n")))

    def testCountdownIsShown(self):
        self.logger.print_timeout_message("Ready.", 1, 3, "c", stream=self.pipe("go\n"))
        self.assertIn("Continuing in 3s", self.stream.getvalue())


if __name__ == "__main__":
    unittest.main()
