import io
import unittest
from contextlib import redirect_stdout

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


class BrokenInterpreter:

    def interpret(self, statements, error_handler):
        raise ValueError("broken")


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(fatal=False, stream=io.StringIO())
        self.shell = Shell(Session(self.error_handler, out=self.out), stdout=io.StringIO())

    def test_lines_share_state(self):
        self.shell.onecmd("var a = 20;")
        self.shell.onecmd("print a + 1;")
        self.assertEqual("21\n", self.out.getvalue())

    def test_line_continuation(self):
        self.shell.onecmd("fun add(a, b) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.shell.onecmd("return a + b;")
        self.shell.onecmd("}")
        self.assertEqual(Shell.prompt, self.shell.prompt)

        self.shell.onecmd("print add(1, 2);")
        self.assertEqual("3\n", self.out.getvalue())

    def test_string_continuation(self):
        self.shell.onecmd("print \"first")
        self.shell.onecmd("second\";")
        self.assertEqual("first\nsecond\n", self.out.getvalue())

    def test_errors_do_not_stick(self):
        self.shell.onecmd("print ;")
        self.assertFalse(self.error_handler.had_error)
        self.shell.onecmd("print undefined;")
        self.shell.onecmd("print 1;")

        self.assertEqual("1\n", self.out.getvalue())
        expected = ["[line 1] Error at ';': Expect expression.", "[line 1] Runtime error: Undefined variable 'undefined'."]
        self.assertEqual(expected, self.error_handler.messages)

    def test_internal_fault_reported_once(self):
        sess = Session(self.error_handler, interpreter=BrokenInterpreter())
        shell = Shell(sess, stdout=io.StringIO())

        with self.assertRaises(ValueError):
            with self.error_handler:
                shell.onecmd("print 1;")
        self.assertEqual(["[internal] error: unknown error: 'ValueError: broken'"], self.error_handler.messages)

    def test_commands(self):
        self.assertFalse(self.shell.onecmd(""))
        self.assertTrue(self.shell.onecmd("exit"))

        with redirect_stdout(io.StringIO()) as stdout:
            self.assertTrue(self.shell.onecmd("EOF"))
            self.shell.onecmd("help")
        self.assertIn("Welcome to the Lox interpreter!", stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
