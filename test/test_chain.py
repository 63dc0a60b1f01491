"""
Chain module behavioral tests (Parser: preamble, segments, snapshot reset).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from dataclasses import dataclass
from unittest import TestCase

from argot import AliasCollisionError, Parser, UnrecognizedOptionError, command, option


@dataclass
class Sub:
    host: str = option("-H, --host", "")


@dataclass
class Empty:
    pass


@dataclass
class Deep:
    all: bool = option("-a, --all", False)


@dataclass
class Users:
    list: Deep = command("list", Deep)


@dataclass
class Opt:
    help: bool = option("-h, -?, --help", False)
    insecure: bool = option("-k, --insecure", False)
    target: str = option("-t, --target", "")
    tags: list[str] = option("--tag", factory=lambda: ["base"])
    sub: Sub = command("sub", Sub)
    list: Empty = command("list", Empty)
    users: Users = command("users", Users)


class TestParser(TestCase):

    def setUp(self):
        self.opt = Opt()

    def testNoArguments(self):
        parser = Parser(self.opt, [])
        self.assertFalse(parser.next())
        self.assertEqual(parser.command, "")
        self.assertEqual(parser.preamble, [])

    def testJustGlobalOptions(self):
        parser = Parser(self.opt, ["--insecure", "-t", "my-target"])
        self.assertFalse(parser.next())
        self.assertFalse(self.opt.help)
        self.assertTrue(self.opt.insecure)
        self.assertEqual(self.opt.target, "my-target")
        self.assertEqual(self.opt.sub.host, "")

    def testSingleSubCommand(self):
        parser = Parser(self.opt, ["--insecure", "-t", "my-target", "sub"])
        self.assertTrue(self.opt.insecure)
        self.assertEqual(self.opt.target, "my-target")
        self.assertEqual(parser.pending, 1)
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.sub.host, "")
        self.assertFalse(parser.next())
        self.assertEqual(parser.pending, 0)

    def testTwoSubCommands(self):
        parser = Parser(self.opt, ["--insecure", "-t", "my-target", "list", "--", "sub"])
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "list")
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.sub.host, "")
        self.assertFalse(parser.next())

    def testSubCommandArgumentsStaySeparate(self):
        parser = Parser(self.opt, ["--insecure", "-t", "my-target", "sub", "--host", "prod", "--", "sub", "-H", "dev"])
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.sub.host, "prod")
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.sub.host, "dev")
        self.assertFalse(parser.next())

    def testGlobalOverridesPerSegment(self):
        parser = Parser(self.opt, ["-k", "-t", "x", "sub", "--target", "my-target", "--", "sub", "-k"])
        self.assertFalse(self.opt.help)
        self.assertTrue(self.opt.insecure)
        self.assertEqual(self.opt.target, "x")
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.target, "my-target")
        self.assertEqual(self.opt.sub.host, "")
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.target, "x")
        self.assertEqual(self.opt.sub.host, "")
        self.assertFalse(parser.next())

    def testUntouchedOptionsRevertToPreamble(self):
        parser = Parser(self.opt, ["sub", "-h", "--", "list"])
        parser.next()
        self.assertTrue(self.opt.help)
        parser.next()
        self.assertFalse(self.opt.help)

    def testListsResetBetweenSegments(self):
        parser = Parser(self.opt, ["--tag", "pre", "sub", "--tag", "one", "--", "sub"])
        self.assertEqual(self.opt.tags, ["pre"])
        parser.next()
        self.assertEqual(self.opt.tags, ["one"])
        parser.next()
        self.assertEqual(self.opt.tags, ["pre"])

    def testSegmentLeftover(self):
        parser = Parser(self.opt, ["sub", "a", "b", "--", "list", "c"])
        parser.next()
        self.assertEqual(parser.leftover, ["a", "b"])
        parser.next()
        self.assertEqual(parser.leftover, ["c"])

    def testNestedDescentInSegment(self):
        parser = Parser(self.opt, ["users", "list", "-a", "--", "sub"])
        parser.next()
        self.assertEqual(parser.command, "users list")
        self.assertTrue(self.opt.users.list.all)
        parser.next()
        self.assertEqual(parser.command, "sub")
        self.assertFalse(self.opt.users.list.all)

    def testSegmentWithoutCommand(self):
        parser = Parser(self.opt, ["sub", "--", "file.txt", "-k"])
        parser.next()
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "")
        self.assertEqual(parser.leftover, ["file.txt"])
        self.assertTrue(self.opt.insecure)

    def testEmptySegmentsAreDropped(self):
        parser = Parser(self.opt, ["sub", "--", "--", "list", "--"])
        self.assertEqual([command for command, _ in parser], ["sub", "list"])

    def testPreamblePositionalsAreKept(self):
        parser = Parser(self.opt, ["-k", "file.txt", "sub"])
        self.assertEqual(parser.preamble, ["file.txt", "sub"])
        self.assertFalse(parser.next())

    def testDoubleDashInPreamble(self):
        parser = Parser(self.opt, ["-k", "--", "sub", "-H", "x"])
        self.assertEqual(parser.preamble, ["sub", "-H", "x"])
        self.assertFalse(parser.next())
        self.assertEqual(self.opt.sub.host, "")

    def testIteration(self):
        parser = Parser(self.opt, ["sub", "x", "--", "list"])
        self.assertEqual(list(parser), [("sub", ["x"]), ("list", [])])
        self.assertFalse(parser.next())

    def testSegmentFaultPropagates(self):
        parser = Parser(self.opt, ["sub", "--", "list", "-H", "x"])
        self.assertTrue(parser.next())
        with self.assertRaises(UnrecognizedOptionError):
            parser.next()

    def testFaultySegmentIsConsumed(self):
        parser = Parser(self.opt, ["sub", "--", "list", "-H", "x", "--", "sub", "-H", "dev"])
        self.assertTrue(parser.next())
        with self.assertRaises(UnrecognizedOptionError):
            parser.next()
        self.assertEqual(parser.command, "sub")
        self.assertEqual(parser.pending, 1)
        self.assertTrue(parser.next())
        self.assertEqual(parser.command, "sub")
        self.assertEqual(self.opt.sub.host, "dev")
        self.assertFalse(parser.next())

    def testPreambleFaultRaisedAtConstruction(self):
        with self.assertRaises(UnrecognizedOptionError):
            Parser(self.opt, ["-H", "x", "sub"])

    def testInvalidSchemaRaisedAtConstruction(self):
        @dataclass
        class Clash:
            host: str = option("-h", "")

        @dataclass
        class Bad:
            help: bool = option("-h", False)
            clash: Clash = command("clash", Clash)

        with self.assertRaises(AliasCollisionError):
            Parser(Bad(), ["clash"])


if __name__ == "__main__":
    unittest.main()
