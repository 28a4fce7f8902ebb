import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from phoenix.lang.error import ErrorHandler, ErrorKind, PhoenixError
from phoenix.lang.session import Session, new_stack, run
from phoenix.lang.shell import Shell
from phoenix.lang.types import Integer
from phoenix.syntax.tokens import Ident


class RunTestCase(unittest.TestCase):

    def test_result(self):
        res = run("1 + 2", "<test>")
        self.assertEqual(Integer(3), res.result)
        self.assertIsNone(res.error)

    def test_stack_persists(self):
        res = run("let x = 5", "<test>")
        res = run("x + 1", "<test>", res.stack)
        self.assertEqual(Integer(6), res.result)

    def test_for_loop_across_runs(self):
        res = run("let x = 0", "<test>")
        res = run("for i in 1 to 4 then let x = x + i", "<test>", res.stack)
        self.assertEqual(Integer(6), res.stack.get(Ident("x")))

    def test_builtins(self):
        cases = {"null": Integer(0), "true": Integer(1), "false": Integer(0), "true && !false": Integer(1)}
        for case, expected in cases.items():
            self.assertEqual(expected, run(case, "<test>").result, case)

    def test_builtins_reseeded(self):
        res = run("let true = 0", "<test>")
        self.assertEqual(Integer(1), run("true", "<test>", res.stack).result)

    def test_errors(self):
        should_fail = {
            "1 $ 2": ErrorKind.SyntaxError,
            "1 +": ErrorKind.EndOfFile,
            "y": ErrorKind.NameError,
            "5 / 0": ErrorKind.ZeroDivision,
            "1 + 1.0": ErrorKind.TypeError,
        }
        for case, kind in should_fail.items():
            res = run(case, "<test>")
            self.assertIsInstance(res.result, PhoenixError, case)
            self.assertEqual(kind, res.error.kind, case)

    def test_error_keeps_stack(self):
        stack = new_stack()
        res = run("let a = 1", "<test>", stack)
        res = run("let b = (let c = 2) + y", "<test>", res.stack)

        self.assertIsNotNone(res.error)
        self.assertIs(stack, res.stack)
        self.assertEqual(Integer(1), res.stack.get(Ident("a")))
        self.assertEqual(Integer(2), res.stack.get(Ident("c")))
        self.assertIsNone(res.stack.get(Ident("b")))

    def test_error_keeps_completed_iterations(self):
        stack = new_stack()
        res = run("for i in 0 to 3 then let x = 10 / (1 - i)", "<test>", stack)

        self.assertEqual(ErrorKind.ZeroDivision, res.error.kind)
        self.assertIs(stack, res.stack)
        self.assertEqual(Integer(10), res.stack.get(Ident("x")))
        self.assertEqual(Integer(1), res.stack.get(Ident("i")))

    def test_error_keeps_while_body_assignments(self):
        res = run("let n = 3", "<test>")
        res = run("while n > 0 then let n = n - 1 + 0 / (n - 2)", "<test>", res.stack)

        self.assertEqual(ErrorKind.ZeroDivision, res.error.kind)
        self.assertEqual(Integer(2), res.stack.get(Ident("n")))

    def test_name_error_text(self):
        res = run("y", "f")
        self.assertEqual("ERROR - Traceback:\n  File f, line 1, column 0:\nNameError: y is not defined", str(res.error))

    def test_line_offset(self):
        res = run("1 / 0", "f", line=9)
        self.assertIn("line 10", str(res.error))


class SessionTestCase(unittest.TestCase):

    def test_preprocess_line(self):
        cases = {
            ("1 + 2", ""): ("1 + 2", False),
            ("  (1 +  ", ""): ("(1 +", True),
            ("2)", "(1 +"): ("(1 + 2)", False),
            ("{if 1 then", ""): ("{if 1 then", True),
            ("", "(1"): ("(1", True),
        }
        for (line, prev), expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(line, prev), (line, prev))

    def test_read_lines(self):
        lines = Session.read_lines(io.StringIO("let x = 1\n\nlet y = (x +\n  2)\nx + y\n"))
        self.assertEqual([("let x = 1", 1), ("let y = (x + 2)", 3), ("x + y", 5)], lines)

    def test_execute(self):
        sess = Session(ErrorHandler(fatal=False))
        self.assertEqual(Integer(2), sess.execute("let x = 2"))
        self.assertEqual(Integer(4), sess.execute("x * x"))

        self.assertRaises(PhoenixError, sess.execute, "z")
        self.assertEqual(Integer(2), sess.execute("x"))

    def test_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".phx", delete=False) as file:
            file.write("let total = 0\nfor i in 0 to 5 then {\n  let total = total + i\n}\ntotal * 2\n")
        try:
            out = io.StringIO()
            with redirect_stdout(out):
                sess = Session(ErrorHandler(fatal=False), file.name)
                sess.run()
        finally:
            os.remove(file.name)

        self.assertEqual([Integer(0), Integer(10), Integer(20)], sess.results)
        self.assertEqual("0\n10\n20\n", out.getvalue())

    def test_file_error_is_fatal(self):
        with tempfile.NamedTemporaryFile("w", suffix=".phx", delete=False) as file:
            file.write("let a = 1\n\na / 0\n")
        try:
            out = io.StringIO()
            with redirect_stdout(out), self.assertRaises(SystemExit):
                with ErrorHandler() as error_handler:
                    Session(error_handler, file.name).run()
        finally:
            os.remove(file.name)

        self.assertIn("line 3", out.getvalue())
        self.assertIn("can't divide by 0", out.getvalue())

    def test_missing_file(self):
        out = io.StringIO()
        with redirect_stdout(out):
            sess = Session(ErrorHandler(fatal=False), "does/not/exist.phx")
        self.assertEqual([], sess.lines)
        self.assertIn("could not be opened", out.getvalue())


class ErrorHandlerTestCase(unittest.TestCase):

    def test_suppresses_phoenix_errors(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False) as error_handler:
                error_handler.register_line("f", "1 $ 2", 1)
                raise run("1 $ 2", "f").error

        self.assertIn("Illegal character: $", out.getvalue())
        self.assertIn("^", out.getvalue())

    def test_throw_matches_error_text(self):
        error = run("let a = 1 / (1 - 1)", "f").error
        out = io.StringIO()
        with redirect_stdout(out):
            ErrorHandler(fatal=False).throw(error)

        self.assertEqual("ERROR - Traceback:\n  File f, line 1, column 0:\n", error.traceback_text())
        self.assertTrue(out.getvalue().startswith(error.traceback_text()))
        self.assertTrue(str(error).startswith(error.traceback_text()))

    def test_internal_errors_propagate(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(ValueError):
            with ErrorHandler(fatal=False):
                raise ValueError("boom")
        self.assertIn("unknown error", out.getvalue())

    def test_register_step(self):
        out = io.StringIO()
        with redirect_stdout(out):
            ErrorHandler(verbose=False).register_step("tokens", "[]")
            run("1", "f", error_handler=ErrorHandler(verbose=True))
        self.assertIn("tokens", out.getvalue())
        self.assertIn("tree", out.getvalue())
        self.assertEqual(1, out.getvalue().count("tokens"))

    def test_diagnose(self):
        diagnosis = ErrorHandler.diagnose("1 + abc", run("1 + abc", "f").error.span)
        self.assertIn("^", diagnosis)


class ShellTestCase(unittest.TestCase):

    def shell(self, lines):
        out = io.StringIO()
        shell = Shell(Session(ErrorHandler(fatal=False)), "0.0.0", stdin=io.StringIO("\n".join(lines) + "\n"),
                      stdout=out)
        shell.use_rawinput = False
        with redirect_stdout(out):
            shell.cmdloop()
        return out.getvalue()

    def test_session(self):
        output = self.shell(["let x = 5", "x + 1", "exit"])
        self.assertIn("Phoenix v0.0.0", output)
        self.assertIn("5\n", output)
        self.assertIn("6\n", output)

    def test_error_does_not_stop_shell(self):
        output = self.shell(["let x = 5", "x / 0", "x * 2"])
        self.assertIn("ZeroDivision", output)
        self.assertIn("can't divide by 0", output)
        self.assertIn("10\n", output)

    def test_continuation(self):
        output = self.shell(["(1 +", "2)", "exit"])
        self.assertIn("3\n", output)


if __name__ == '__main__':
    unittest.main()
