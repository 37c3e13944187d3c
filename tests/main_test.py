import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from lox.main import create_arg_parser, main


class MainTestCase(unittest.TestCase):

    def write_script(self, content):
        fd, path = tempfile.mkstemp(suffix=".lox")
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            file.write(content)
        self.addCleanup(os.remove, path)
        return path

    def run_main(self, argv):
        """Runs main and returns (exit code, stdout)."""
        with redirect_stdout(io.StringIO()) as stdout:
            try:
                main(argv)
            except SystemExit as exit_:
                return exit_.code, stdout.getvalue()
        return 0, stdout.getvalue()

    def test_arg_parser(self):
        args = create_arg_parser().parse_args(["script.lox", "--ast"])
        self.assertEqual("script.lox", args.script)
        self.assertTrue(args.ast)
        self.assertFalse(args.tokens)

        args = create_arg_parser().parse_args([])
        self.assertIsNone(args.script)

    def test_script(self):
        path = self.write_script("var a = \"lox\";\nprint a;\n")
        self.assertEqual((0, "lox\n"), self.run_main([path]))

    def test_script_ast(self):
        path = self.write_script("print 1 + 2;")
        self.assertEqual((0, "(print (+ 1 2))\n3\n"), self.run_main([path, "--ast"]))

    def test_syntax_error(self):
        path = self.write_script("print 1;\nprint ;\n")
        code, out = self.run_main([path])
        self.assertEqual(1, code)
        self.assertIn("Expect expression.", out)
        self.assertNotIn("1\n", out)

    def test_runtime_error(self):
        path = self.write_script("print 1;\nprint -nil;\nprint 2;\n")
        code, out = self.run_main([path])
        self.assertEqual(1, code)
        self.assertTrue(out.startswith("1\n"))
        self.assertIn("Operand must be a number.", out)
        self.assertNotIn("2\n", out)

    def test_missing_script(self):
        with tempfile.TemporaryDirectory() as directory:
            code, out = self.run_main([os.path.join(directory, "missing.lox")])
        self.assertEqual(1, code)
        self.assertIn("could not be opened", out)

    def test_usage_error(self):
        with redirect_stderr(io.StringIO()):
            code, __ = self.run_main(["a.lox", "b.lox"])
        self.assertEqual(2, code)


if __name__ == '__main__':
    unittest.main()
