"""
Configuration store behavioral tests (dotted keys, JSON/YAML files).

Scope
- Validate get/set/unset over nested dotted keys.
- Validate loading and saving of JSON and YAML files, including missing and
  malformed files.

Conventions
- Test method names follow CamelCase per project convention.
- Files live in a temporary directory created per test.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from unittest import TestCase

import yaml

from sweetcli import Config
from sweetcli.faults import ConfigError, FaultCode


class TestDottedKeys(TestCase):
    """Behavioral tests for in-memory access."""

    def setUp(self):
        self.config = Config("settings.json")

    def testSetCreatesIntermediateMappings(self):
        self.config.set("oven.temperature", 220)
        self.assertEqual(self.config.get("oven"), {"temperature": 220})
        self.assertEqual(self.config.get("oven.temperature"), 220)

    def testGetReturnsDefaultForMissingKeys(self):
        self.assertIsNone(self.config.get("missing.key"))
        self.assertEqual(self.config.get("missing.key", 3), 3)

    def testGetBelowScalarReturnsDefault(self):
        self.config.set("name", "shop")
        self.assertEqual(self.config.get("name.first", "x"), "x")

    def testSetBelowScalarRaises(self):
        self.config.set("name", "shop")
        with self.assertRaises(ConfigError) as context:
            self.config.set("name.first", "pizza")
        self.assertEqual(context.exception.code, FaultCode.CONFIG_FAILURE)
        self.assertIn("'name'", context.exception.message)

    def testSetIsChainable(self):
        self.assertIs(self.config.set("a", 1), self.config)

    def testUnsetReportsRemoval(self):
        self.config.set("oven.temperature", 220)
        self.assertTrue(self.config.unset("oven.temperature"))
        self.assertFalse(self.config.unset("oven.temperature"))
        self.assertFalse(self.config.unset("nothing.here"))
        self.assertEqual(self.config.get("oven"), {})

    def testContainsChecksPresence(self):
        self.config.set("flag", None)
        self.assertIn("flag", self.config)
        self.assertNotIn("other", self.config)

    def testInvalidKeysRejected(self):
        with self.assertRaises(ValueError):
            self.config.get("a..b")
        with self.assertRaises(TypeError):
            self.config.get(3)

    def testUnknownExtensionRejected(self):
        with self.assertRaises(ConfigError):
            Config("settings.ini")

    def testValuesAreCopied(self):
        self.config.set("oven.temperature", 220)
        self.config.values["oven"]["temperature"] = 0
        self.assertEqual(self.config.get("oven.temperature"), 220)


class TestFiles(TestCase):
    """Behavioral tests for loading and saving."""

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def path(self, name):
        return os.path.join(self.directory.name, name)

    def testMissingFileLoadsEmpty(self):
        config = Config.load(self.path("missing.json"))
        self.assertEqual(config.values, {})

    def testMalformedJsonLoadsEmpty(self):
        with open(self.path("broken.json"), "w") as stream:
            stream.write("{not json")
        self.assertEqual(Config.load(self.path("broken.json")).values, {})

    def testMalformedYamlLoadsEmpty(self):
        with open(self.path("broken.yml"), "w") as stream:
            stream.write("key: [unclosed")
        self.assertEqual(Config.load(self.path("broken.yml")).values, {})

    def testBinaryFileLoadsEmpty(self):
        with open(self.path("binary.json"), "wb") as stream:
            stream.write(b"\xff\xfe\x00garbage")
        self.assertEqual(Config.load(self.path("binary.json")).values, {})

    def testDirectoryLoadsEmpty(self):
        os.mkdir(self.path("folder.yml"))
        self.assertEqual(Config.load(self.path("folder.yml")).values, {})

    def testNonMappingDocumentLoadsEmpty(self):
        with open(self.path("list.yaml"), "w") as stream:
            stream.write("- a\n- b\n")
        self.assertEqual(Config.load(self.path("list.yaml")).values, {})

    def testJsonIsWrittenIndented(self):
        path = self.path("settings.json")
        Config(path).set("oven.temperature", 220).save()
        with open(path) as stream:
            contents = stream.read()
        self.assertEqual(json.loads(contents), {"oven": {"temperature": 220}})
        self.assertIn('    "oven"', contents)

    def testYamlIsWrittenSafely(self):
        path = self.path("settings.yaml")
        Config(path).set("shop.name", "Pizza Shop").save()
        with open(path) as stream:
            self.assertEqual(yaml.safe_load(stream), {"shop": {"name": "Pizza Shop"}})

    def testSaveCreatesDirectories(self):
        path = self.path(os.path.join("nested", "dir", "settings.yml"))
        Config(path).set("a", 1).save()
        self.assertEqual(Config.load(path).get("a"), 1)

    def testUnserializableValueRaises(self):
        path = self.path("settings.json")
        with self.assertRaises(ConfigError):
            Config(path).set("handler", object()).save()
        self.assertFalse(os.path.exists(path))

    def testUnwritablePathRaises(self):
        blocker = self.path("blocker")
        with open(blocker, "w") as stream:
            stream.write("file")
        with self.assertRaises(ConfigError) as context:
            Config(os.path.join(blocker, "settings.yml")).set("a", 1).save()
        self.assertEqual(context.exception.code, FaultCode.CONFIG_FAILURE)

    def testContextManagerSavesOnExit(self):
        path = self.path("settings.json")
        with Config.load(path) as config:
            config.set("last", "pizza")
        self.assertEqual(Config.load(path).get("last"), "pizza")


if __name__ == "__main__":
    unittest.main()
