"""
Consumer behavioral tests (binding, arity, routing, separator, walk).

Scope
- Validate eager, in-place binding of flags and string options.
- Validate arity checks on terminal nodes and routing on inner nodes.
- Validate the double-dash separator across nested nodes.
- Validate the structured detail carried by every input fault.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (extract, eat_options, walk).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdtree import extract, eat_options, walk, Schema, Info, Flag, Option
from cmdtree.faults import (
    FaultCode,
    CommandException,
    MissingOptionValueError,
    WrongArityError,
    MissingSubcommandError,
    UnknownSubcommandError,
)


def server():
    return extract(Schema(
        Info("thing", descr="hello"),
        help=Flag("-h", "--help", descr="Display this help message", helper=True),
        log_level=Option("-l", "--log-level", descr="Set the log level", required=True),
        serve=Schema(
            Info("serve", params=0, descr="run the server"),
            port=Option("-p", "--port", descr="port to bind"),
        ),
    ))


def files():
    return extract(Schema(
        Info("files"),
        verbose=Flag("-v", "--verbose"),
        copy=Schema(Info("copy", params=2), force=Flag("-f", "--force")),
        cat=Schema(Info("cat", params=...), number=Flag("-n")),
    ))


class TestServeScenario(TestCase):
    """Step-by-step consumption of the serve example."""

    def testRootThenServe(self):
        tree = server()
        record = tree.record()
        args = ["--log-level", "debug", "serve", "--port", "8080"]

        self.assertEqual(eat_options(tree.root, record, args), "serve")
        self.assertEqual(record.log_level, "debug")
        self.assertEqual(args, ["--port", "8080"])

        self.assertEqual(eat_options(tree["serve"], record, args), "")
        self.assertEqual(record.serve.port, "8080")
        self.assertEqual(args, [])

    def testServeAlone(self):
        tree = server()
        record = tree.record()
        args = ["serve"]

        self.assertEqual(eat_options(tree.root, record, args), "serve")
        self.assertEqual(args, [])
        self.assertEqual(eat_options(tree["serve"], record, args), "")
        self.assertEqual(record.log_level, "")
        self.assertIsNone(record.serve.port)

    def testUnknownSubcommand(self):
        tree = server()
        with self.assertRaises(UnknownSubcommandError) as context:
            eat_options(tree.root, tree.record(), ["bogus"])
        fault = context.exception
        self.assertEqual(fault.options["given"], "bogus")
        self.assertEqual(fault.options["choices"], ("serve",))
        self.assertEqual(fault.options["code"], FaultCode.UNKNOWN_SUBCOMMAND)
        self.assertEqual(fault.options["node"], "")

    def testUnknownSubcommandSuggestion(self):
        tree = server()
        with self.assertRaises(UnknownSubcommandError) as context:
            eat_options(tree.root, tree.record(), ["serv"])
        self.assertEqual(context.exception.options["suggestions"], ("serve",))
        self.assertIn("did you mean 'serve'?", context.exception.options["hint"])

    def testMissingOptionValue(self):
        tree = server()
        args = ["--log-level"]
        with self.assertRaises(MissingOptionValueError) as context:
            eat_options(tree.root, tree.record(), args)
        self.assertEqual(context.exception.options["flag"], "--log-level")
        self.assertEqual(context.exception.options["code"], FaultCode.MISSING_OPTION_VALUE)
        self.assertEqual(args, ["--log-level"])

    def testMissingSubcommand(self):
        tree = server()
        with self.assertRaises(MissingSubcommandError) as context:
            eat_options(tree.root, tree.record(), ["-l", "info"])
        self.assertEqual(context.exception.options["choices"], ("serve",))


class TestBinding(TestCase):
    """Binding semantics shared by every node."""

    def testFlagTwiceStaysTrue(self):
        tree = files()
        record = tree.record()
        args = ["-v", "--verbose", "cat"]
        eat_options(tree.root, record, args)
        self.assertIs(record.verbose, True)

    def testOptionTwiceKeepsLast(self):
        tree = server()
        record = tree.record()
        eat_options(tree.root, record, ["-l", "info", "serve", "--log-level", "warn"])
        self.assertEqual(record.log_level, "warn")

    def testOptionsInterleavedWithPositionals(self):
        tree = files()
        record = tree.record()
        args = ["a.txt", "-f", "b.txt"]
        self.assertEqual(eat_options(tree["copy"], record, args), "")
        self.assertTrue(record.copy.force)
        self.assertEqual(args, ["a.txt", "b.txt"])

    def testValueIsTakenLiterally(self):
        tree = server()
        record = tree.record()
        args = ["--log-level", "--port", "serve"]
        self.assertEqual(eat_options(tree.root, record, args), "serve")
        self.assertEqual(record.log_level, "--port")

    def testUnknownFlagIsResidue(self):
        tree = files()
        record = tree.record()
        args = ["--unknown", "x"]
        eat_options(tree["cat"], record, args)
        self.assertEqual(args, ["--unknown", "x"])

    def testParentOptionAfterSubcommand(self):
        tree = files()
        record = tree.record()
        args = ["copy", "a", "b", "--verbose"]
        self.assertEqual(eat_options(tree.root, record, args), "copy")
        self.assertTrue(record.verbose)
        self.assertEqual(args, ["a", "b"])

    def testChildOnlySeesItsOwnAliases(self):
        tree = files()
        record = tree.record()
        args = ["-n", "a"]
        self.assertEqual(eat_options(tree["cat"], record, args), "")
        self.assertTrue(record.cat.number)
        self.assertFalse(record.verbose)

    def testBindingsSurviveFaults(self):
        tree = files()
        record = tree.record()
        with self.assertRaises(WrongArityError):
            eat_options(tree["copy"], record, ["-f", "only-one"])
        self.assertTrue(record.copy.force)

    def testNodeShorthand(self):
        tree = files()
        record = tree.record()
        args = ["cat", "x"]
        self.assertEqual(tree.root.eat_options(record, args), "cat")
        self.assertEqual(args, ["x"])


class TestArity(TestCase):
    """Terminal nodes accept exactly their parameter count."""

    def testExactCount(self):
        tree = files()
        args = ["a", "b"]
        self.assertEqual(eat_options(tree["copy"], tree.record(), args), "")
        self.assertEqual(args, ["a", "b"])

    def testTooFew(self):
        tree = files()
        with self.assertRaises(WrongArityError) as context:
            eat_options(tree["copy"], tree.record(), ["a"])
        fault = context.exception
        self.assertEqual(fault.options["expected"], 2)
        self.assertEqual(fault.options["received"], 1)
        self.assertEqual(fault.options["arguments"], ("a",))
        self.assertEqual(fault.options["node"], "copy")
        self.assertEqual(str(fault), "expected 2 arguments but received 1")

    def testTooMany(self):
        tree = files()
        with self.assertRaises(WrongArityError) as context:
            eat_options(tree["copy"], tree.record(), ["a", "b", "c"])
        self.assertEqual(context.exception.options["received"], 3)
        self.assertEqual(context.exception.options["hint"], "remove the extra argument")

    def testZeroParametersRejectsPositionals(self):
        tree = server()
        with self.assertRaises(WrongArityError):
            eat_options(tree["serve"], tree.record(), ["extra"])

    def testUnboundedAcceptsAnything(self):
        tree = files()
        for args in ([], ["a"], ["a", "b", "c", "d"]):
            with self.subTest(args=args):
                self.assertEqual(eat_options(tree["cat"], tree.record(), list(args)), "")


class TestSeparator(TestCase):
    """A double dash ends option recognition for the rest of the line."""

    def testTailIsPositional(self):
        tree = files()
        record = tree.record()
        args = ["-n", "--", "-n", "-v"]
        self.assertEqual(eat_options(tree["cat"], record, args), "")
        self.assertTrue(record.cat.number)
        self.assertEqual(args, ["-n", "-v"])

    def testTailCountsTowardArity(self):
        tree = files()
        args = ["a", "--", "-f"]
        eat_options(tree["copy"], tree.record(), args)
        self.assertEqual(args, ["a", "-f"])

    def testSeparatorIsHandedDown(self):
        tree = files()
        record = tree.record()
        args = ["copy", "--", "-v", "-f"]
        self.assertEqual(eat_options(tree.root, record, args), "copy")
        self.assertEqual(args, ["--", "-v", "-f"])
        self.assertFalse(record.verbose)

        self.assertEqual(eat_options(tree["copy"], record, args), "")
        self.assertEqual(args, ["-v", "-f"])
        self.assertFalse(record.copy.force)

    def testSubcommandAfterSeparatorIsMissing(self):
        tree = files()
        with self.assertRaises(MissingSubcommandError):
            eat_options(tree.root, tree.record(), ["--", "copy", "a", "b"])

    def testSecondSeparatorIsLiteral(self):
        tree = files()
        args = ["--", "--", "x"]
        eat_options(tree["cat"], tree.record(), args)
        self.assertEqual(args, ["--", "x"])


class TestWalk(TestCase):
    """Full walks from the root to a terminal node."""

    def testWalkToTerminal(self):
        tree = server()
        record = tree.record()
        dispatch = walk(tree, record, ["-l", "debug", "serve", "-p", "80"])
        self.assertIs(dispatch.node, tree["serve"])
        self.assertEqual(dispatch.arguments, ())
        self.assertFalse(dispatch.helped)
        self.assertEqual(record.serve.port, "80")

    def testWalkCollectsArguments(self):
        tree = files()
        record = tree.record()
        args = ["cat", "-n", "a", "b"]
        dispatch = walk(tree, record, args)
        self.assertEqual(dispatch.node.path, "cat")
        self.assertEqual(dispatch.arguments, ("a", "b"))
        self.assertEqual(args, ["a", "b"])

    def testWalkFaultNamesFailingNode(self):
        tree = files()
        with self.assertRaises(CommandException) as context:
            walk(tree, tree.record(), ["copy", "a"])
        self.assertIsInstance(context.exception, WrongArityError)
        self.assertEqual(context.exception.options["node"], "copy")

    def testWalkOnTerminalRoot(self):
        tree = extract(Schema(Info(params=1), quiet=Flag("-q")))
        record = tree.record()
        dispatch = walk(tree, record, ["-q", "file"])
        self.assertIs(dispatch.node, tree.root)
        self.assertEqual(dispatch.arguments, ("file",))
        self.assertTrue(record.quiet)


if __name__ == "__main__":
    unittest.main()
