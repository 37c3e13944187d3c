import io
import sys
import unittest

from lox.lang.error import ErrorHandler, GenericException, LoxRuntimeError, ParseError


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.error_handler = ErrorHandler(fatal=False, stream=self.stream)

    def test_report(self):
        self.error_handler.report(3, "at 'x'", "Expect expression.")
        self.error_handler.report(4, "at end", "Expect ';' after value.")
        self.error_handler.report(5, "", "Unexpected character.")

        expected = [
            "[line 3] Error at 'x': Expect expression.",
            "[line 4] Error at end: Expect ';' after value.",
            "[line 5] Error: Unexpected character.",
        ]
        self.assertEqual(expected, self.error_handler.messages)
        self.assertTrue(self.error_handler.had_error)
        self.assertFalse(self.error_handler.had_runtime_error)
        self.assertIn("Expect expression.", self.stream.getvalue())

    def test_runtime_error_and_reset(self):
        self.error_handler.report(1, "", "Unterminated string.")
        self.error_handler.report_runtime_error(2, "Operands must be numbers.")
        self.assertEqual("[line 2] Runtime error: Operands must be numbers.", self.error_handler.messages[-1])

        self.error_handler.reset()
        self.assertFalse(self.error_handler.had_error)
        self.assertTrue(self.error_handler.had_runtime_error)

    def test_warn(self):
        self.error_handler.warn(1, "'script.lox' is empty")
        self.assertEqual(["[line 1] Warning: 'script.lox' is empty"], self.error_handler.messages)
        self.assertFalse(self.error_handler.had_error)

    def test_throw(self):
        self.error_handler.throw(GenericException("'{}' could not be opened", "a.lox"))
        self.error_handler.throw(GenericException("unknown error: '{}: {}'", ["ValueError", "bad"]), internal=True)

        expected = ["error: 'a.lox' could not be opened", "[internal] error: unknown error: 'ValueError: bad'"]
        self.assertEqual(expected, self.error_handler.messages)

    def test_fatal_throw(self):
        error_handler = ErrorHandler(stream=self.stream)
        with self.assertRaises(SystemExit) as context:
            error_handler.throw(GenericException("boom"))
        self.assertEqual(1, context.exception.code)

    def test_context_manager(self):
        with self.error_handler:
            raise GenericException("'{}' could not be opened", "missing.lox")
        with self.error_handler:
            raise KeyboardInterrupt
        with self.error_handler:
            raise RecursionError

        expected = [
            "error: 'missing.lox' could not be opened",
            "error: keyboard interrupt",
            "error: maximum recursion depth exceeded",
        ]
        self.assertEqual(expected, self.error_handler.messages)

    def test_context_manager_internal_error(self):
        with self.assertRaises(ValueError):
            with self.error_handler:
                raise ValueError("bad")
        self.assertEqual(["[internal] error: unknown error: 'ValueError: bad'"], self.error_handler.messages)

        error_handler = ErrorHandler(stream=self.stream)
        with self.assertRaises(SystemExit):
            with error_handler:
                raise ValueError("bad")

    def test_nested_internal_error_reported_once(self):
        with self.assertRaises(ValueError):
            with self.error_handler:
                with self.error_handler:
                    raise ValueError("bad")
        self.assertEqual(["[internal] error: unknown error: 'ValueError: bad'"], self.error_handler.messages)

    def test_context_manager_system_exit(self):
        with self.assertRaises(SystemExit) as context:
            with self.error_handler:
                sys.exit(3)
        self.assertEqual(3, context.exception.code)
        self.assertEqual([], self.error_handler.messages)


class ExceptionsTestCase(unittest.TestCase):

    def test_generic_exception(self):
        error = GenericException("'{}' could not be opened", "x.lox")
        self.assertEqual("'x.lox' could not be opened", str(error))
        self.assertEqual("'x.lox' could not be opened", error.plain_msg)
        self.assertIn("x.lox", error.msg)

        self.assertEqual("plain", GenericException("plain").plain_msg)

    def test_located_errors(self):
        for cls in [ParseError, LoxRuntimeError]:
            error = cls("token", "message")
            self.assertEqual("token", error.token)
            self.assertEqual("message", error.message)
            self.assertEqual("message", str(error))


if __name__ == '__main__':
    unittest.main()
