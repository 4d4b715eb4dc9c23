import io
import unittest
from contextlib import redirect_stdout

from rewriter.grammar.parser import parse
from rewriter.lang.error import ErrorHandler
from rewriter.lang.session import Session
from rewriter.lang.shell import Shell
from rewriter.main import build_parser, main


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(fatal=False)))

    def run_lines(self, *lines):
        out = io.StringIO()
        with redirect_stdout(out):
            for line in lines:
                self.shell.onecmd(line)
        return out.getvalue()

    def test_submit_and_step(self):
        out = self.run_lines("(\\x -> x + 1) 2")
        self.assertIn("(\\x -> x + 1) 2", out)
        self.assertIn("[0]", out)
        self.assertIn("beta", out)

        out = self.run_lines("step 0", "step 0")
        self.assertIn("2 + 1", out)
        self.assertEqual("3", out.splitlines()[-1])

    def test_terms_that_look_like_commands(self):
        out = self.run_lines("let x = 2 in x * 3", "2 * 3", "-4")
        self.assertIn("let x = 2 in x * 3", out)
        self.assertIn("arithmetic", out)
        self.assertIn("-4", out)

    def test_errors_do_not_exit(self):
        out = self.run_lines("x", "1 + ", "step 0", "step nope", "step 5", "1 / 0", "step 0", "undo")
        self.assertEqual(7, out.count("error: "))
        self.assertEqual(parse("1 / 0"), self.shell.sess.term)

    def test_tree_history_undo(self):
        out = self.run_lines("tree")
        self.assertIn("error: ", out)

        out = self.run_lines("1 + 2 * 3", "step 0", "tree", "history")
        self.assertIn("+\n    literal [1]\n    literal [6]", out)
        self.assertIn("0: 1 + 2 * 3", out)

        out = self.run_lines("undo")
        self.assertIn("1 + 2 * 3", out)
        self.assertEqual([], self.shell.sess.history)

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        with redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))
        self.assertFalse(self.run_lines(""))


class MainTestCase(unittest.TestCase):

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_args(self):
        args = build_parser().parse_args(["1 + 2", "--step", "0", "--step", "1", "--tree"])
        self.assertEqual("1 + 2", args.term)
        self.assertEqual([0, 1], args.step)
        self.assertTrue(args.tree)
        self.assertFalse(args.trace)

    def test_one_shot(self):
        out = self.run_main("(\\x -> x * x) 3", "--step", "0")
        self.assertEqual(["3 * 3", "  [0] arithmetic 3 * 3"], out.splitlines())

        out = self.run_main("(\\x -> x * x) 3", "--step", "0", "--step", "0", "--tree", "--trace")
        self.assertIn("literal [9]", out)
        self.assertIn("β", out)

    def test_one_shot_error(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            main(["\\x -> y"])
        self.assertEqual(1, context.exception.code)
        self.assertIn("free variable", out.getvalue())


if __name__ == '__main__':
    unittest.main()
