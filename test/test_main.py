"""
Example program tests (schema shape, log level mapping).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import logging
import unittest
from unittest import TestCase

import main
from cmdtree import invoke


class TestExample(TestCase):
    """Behavior of the example thing program."""

    def testKnownLevels(self):
        self.assertEqual(main.level("debug"), logging.DEBUG)
        self.assertEqual(main.level("WARNING"), logging.WARNING)
        self.assertEqual(main.level("error"), logging.ERROR)

    def testUnknownLevelFallsBack(self):
        self.assertEqual(main.level("foo"), logging.ERROR)
        self.assertEqual(main.level(""), logging.ERROR)

    def testUnknownLevelParses(self):
        record, dispatch = invoke(main.tree, ["-l", "foo", "serve", "-p", "80"], prog="thing")
        self.assertEqual(record.log_level, "foo")
        self.assertEqual(main.level(record.log_level), logging.ERROR)
        self.assertEqual(dispatch.node.path, "serve")

    def testDefaultLevel(self):
        record, _ = invoke(main.tree, ["validate", "file.txt"], prog="thing")
        self.assertEqual(main.level(record.log_level), logging.ERROR)


if __name__ == "__main__":
    unittest.main()
