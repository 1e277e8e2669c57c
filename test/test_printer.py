"""
Help rendering behavioral tests (option entries, command pages, application page).

Scope
- Validate OptionPrinter.render_option(): label, required marker, default, description.
- Validate render()/render_command()/render_application() layouts.

Conventions
- Test method names follow CamelCase per project convention.
- Assertions are made on the plain text of the rendered rich Text.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from sweetcli import OptionPrinter, OptionSpec, SchemaSet, SubcommandDescriptor, parse


def pizza():
    return SchemaSet.from_mapping({
        "a|add:+": {"desc": "Add some topping"},
        "t|type": {"desc": "Type of the pizza", "default": "italian", "validValues": ["italian", "american"]},
        "n|number:": {"desc": "How many pizzas?", "type": "Number", "default": 1},
        "secret": {"hidden": True},
    })


class TestOptionEntries(TestCase):
    """Behavioral tests for single option entries."""

    def setUp(self):
        self.printer = OptionPrinter()

    def testRequiredOptionWithDefault(self):
        entry = self.printer.render_option(pizza()["number"]).plain
        self.assertEqual(entry, "    -n, --number * [= 1]\n        How many pizzas?\n")

    def testOptionalOptionWithDefault(self):
        entry = self.printer.render_option(pizza()["type"]).plain
        self.assertEqual(entry.splitlines()[0], "    -t, --type [= italian]")

    def testMissingDescriptionHasFallback(self):
        entry = self.printer.render_option(OptionSpec.from_name("quiet")).plain
        self.assertEqual(entry, "    --quiet\n        no description provided\n")

    def testLongDescriptionIsWrappedAndIndented(self):
        spec = OptionSpec.from_name("x|extra", descr="word " * 40)
        lines = OptionPrinter(width=40).render_option(spec).plain.splitlines()[1:]
        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertTrue(line.startswith(" " * 8))
            self.assertLessEqual(len(line), 40)

    def testHelpFlagIsNotRendered(self):
        self.assertIsNone(self.printer.render_option(pizza()["help"]))

    def testWidthIsChecked(self):
        with self.assertRaises(ValueError):
            OptionPrinter(width=5)


class TestPages(TestCase):
    """Behavioral tests for schema listings and help pages."""

    def setUp(self):
        self.printer = OptionPrinter()

    def testHiddenAndHelpAreSkipped(self):
        listing = self.printer.render(pizza()).plain
        self.assertIn("--add", listing)
        self.assertNotIn("--secret", listing)
        self.assertNotIn("--help", listing)

    def testDocumentedFlagsParse(self):
        schema = pizza()
        listing = self.printer.render(schema).plain
        samples = {"add": "ham", "type": "american", "number": "2"}
        for spec in schema.visible():
            for flag in spec.label.split(", "):
                with self.subTest(flag=flag):
                    self.assertIn(flag, listing)
                    result = parse(["--add", "olives", flag, samples[spec.id]], schema)
                    self.assertIn(spec.id, result.supplied)

    def testEmptySchemaSaysNoOptions(self):
        self.assertEqual(self.printer.render(SchemaSet()).plain.strip(), "No options.")

    def testIndentIsApplied(self):
        listing = self.printer.render(SchemaSet(), indent=4).plain
        self.assertTrue(listing.startswith("    No options."))

    def testCommandPage(self):
        descriptor = SubcommandDescriptor("pizza", "Make a pizza", pizza())
        page = self.printer.render_command(descriptor, "Pizza Shop", "pizza-shop").plain
        lines = page.splitlines()
        self.assertEqual(lines[0], "pizza-shop: pizza")
        self.assertEqual(lines[1], "Make a pizza")
        self.assertIn("    -a, --add *", lines)

    def testApplicationPage(self):
        descriptors = [
            SubcommandDescriptor("pizza", "Make a pizza", pizza()),
            SubcommandDescriptor("internal", "", SchemaSet()),
        ]
        globals_ = SchemaSet.from_mapping({"v|verbose": {"incremental": True, "desc": "Verbose Mode"}})
        page = self.printer.render_application(
            "Pizza Shop", descriptors, globals_, {"composer": "/usr/local/bin/composer"}
        ).plain
        self.assertTrue(page.startswith("Pizza Shop\nAvailable subcommands:\n"))
        self.assertIn("    pizza\n    Make a pizza\n", page)
        self.assertIn("        -a, --add *", page)
        self.assertNotIn("internal", page)
        self.assertIn("Available global options:", page)
        self.assertIn("    -v, --verbose", page)
        self.assertIn("Available aliases:\n    composer → /usr/local/bin/composer", page)
        self.assertTrue(page.endswith("Legend:\n    *     → required\n    [= …] → default value"))

    def testApplicationPageWithoutAliases(self):
        page = self.printer.render_application("Pizza Shop", [], SchemaSet()).plain
        self.assertNotIn("Available aliases:", page)
        self.assertIn("No commands available.", page)


if __name__ == "__main__":
    unittest.main()
